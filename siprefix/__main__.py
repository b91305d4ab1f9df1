"""
CLI interface for SI prefix conversion.

Usage:
    python -m siprefix normalize 2500 0.000072
    python -m siprefix parse 2.5k
    python -m siprefix compare 1M 1000k
    python -m siprefix --help
"""

import sys
import argparse

from .codec import InvalidFormatError, compare_values, normalize_value, parse_prefix, parse_value, to_plain_string
from .prefixes import all_entries


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Parse and format decimal numbers with SI prefixes", prog="python -m siprefix"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    normalize_parser = subparsers.add_parser("normalize", help="Render values with their best-fit SI prefix")
    normalize_parser.add_argument("values", nargs="+", help="Numerals with optional SI prefix, e.g. 2500 or 2.5k")

    parse_parser = subparsers.add_parser("parse", help="Print values as plain exact decimals")
    parse_parser.add_argument("values", nargs="+", help="Numerals with optional SI prefix")

    prefix_parser = subparsers.add_parser("prefix", help="Print the SI prefix each value ends with")
    prefix_parser.add_argument("values", nargs="+", help="Numerals with optional SI prefix")

    compare_parser = subparsers.add_parser("compare", help="Print -1, 0 or 1 comparing two values")
    compare_parser.add_argument("value1")
    compare_parser.add_argument("value2")

    subparsers.add_parser("table", help="Print the SI prefix table")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point, returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "normalize":
            for value in args.values:
                print(normalize_value(value))
        elif args.command == "parse":
            for value in args.values:
                print(to_plain_string(parse_value(value)))
        elif args.command == "prefix":
            for value in args.values:
                entry = parse_prefix(value)
                print(f"{entry.name} {entry.symbol or '-'} {entry.exponent}")
        elif args.command == "compare":
            print(compare_values(args.value1, args.value2))
        elif args.command == "table":
            for entry in all_entries():
                print(f"{entry.name:<8} {entry.symbol or '-':<3} {entry.exponent:>4}")
        else:
            parser.print_help()
            return 1
    except InvalidFormatError as e:
        parser.error(str(e))

    return 0


if __name__ == "__main__":
    sys.exit(main())
