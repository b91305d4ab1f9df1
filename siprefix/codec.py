"""
Exact parsing and formatting of decimal numbers with SI prefixes.

Converts between plain numerals ("2500") and their prefixed short form ("2.5k")
without any precision loss: values are ``decimal.Decimal`` throughout, and every
decimal-point shift or trailing-zero strip runs in an unbounded-precision context.

The best-fit prefix of a value is derived from its digit count and exponent,
never from a floating point logarithm.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re
from decimal import (
    Context, Decimal, DivisionByZero, InvalidOperation, Overflow,
    ROUND_HALF_EVEN, MAX_EMAX, MAX_PREC, MIN_EMIN,
)

# Local ----------------------------------------------------------------------------------------------------------------
from .prefixes import PrefixEntry, NONE, MIN_EXPONENT, MAX_EXPONENT, entry_by_exponent, suffix_scan_order
from .utils import fmt_type, fmt_value

__all__ = [
    "DecimalConf",
    "InvalidFormatError",
    "best_fit_entry",
    "compare_values",
    "format_value",
    "normalize_value",
    "parse_prefix",
    "parse_value",
    "scaled_value",
    "to_plain_string",
    "values_equal",
]

# Classes --------------------------------------------------------------------------------------------------------------


class DecimalConf:
    """
    Decimal arithmetic contexts.

    EXACT     : Unbounded precision, results of add, multiply and shifts are never rounded
    DECIMAL64 : 16 significant digits, half-even rounding (IEEE 754 decimal64)
    """
    EXACT = Context(
        prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN,
        traps=[InvalidOperation, DivisionByZero, Overflow],
    )
    DECIMAL64 = Context(
        prec=16, rounding=ROUND_HALF_EVEN, Emax=MAX_EMAX, Emin=MIN_EMIN,
        traps=[InvalidOperation, DivisionByZero, Overflow],
    )


decimal_conf = DecimalConf()


class InvalidFormatError(ValueError):
    """Raised when a string is not a signed decimal numeral with an optional SI prefix symbol."""


# Signed decimal numeral with optional fraction and E-notation, ASCII digits only
_NUMERAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_DIGITS = re.compile(r"[0-9]+")


# Methods --------------------------------------------------------------------------------------------------------------

def parse_value(string: str) -> Decimal:
    """
    Parse a numeral with an optional trailing SI prefix symbol into an exact Decimal.

    The numeral is multiplied by the prefix multiplier with no rounding. Longer symbols
    are matched first, so "5da" is 5 deka rather than an invalid numeral "5d" with atto.

    Raises:
        InvalidFormatError: If the string is not a valid numeral with an optional known symbol.
        TypeError: If string is not a str.

    Examples:
        >>> parse_value("2.5k")
        Decimal('2500.0')
        >>> parse_value("-72u")
        Decimal('-0.000072')
        >>> parse_value("1e3")
        Decimal('1E+3')
    """
    entry, numeral = _split_prefix(string)
    value = _parse_numeral(numeral, string)
    if entry is NONE:
        return value
    try:
        return decimal_conf.EXACT.multiply(value, entry.multiplier)
    except (Overflow, InvalidOperation) as e:
        raise InvalidFormatError(f"Invalid numeric value {fmt_value(string)}") from e


def parse_prefix(string: str) -> PrefixEntry:
    """
    Return the SI prefix entry a numeric string ends with.

    A string of decimal digits only maps to the identity entry NONE.

    Raises:
        InvalidFormatError: If no symbol matches and the string is not a plain integer,
            or the part before the symbol is not a valid numeral.
        TypeError: If string is not a str.

    Examples:
        >>> parse_prefix("42G").name
        'giga'
        >>> parse_prefix("42") is NONE
        True
    """
    entry, numeral = _split_prefix(string)
    if entry is not NONE:
        _parse_numeral(numeral, string)
        return entry
    if _DIGITS.fullmatch(string):
        return NONE
    raise InvalidFormatError(f"Unknown prefix in string {fmt_value(string)}")


def best_fit_entry(value: Decimal | int) -> PrefixEntry:
    """
    Select the SI prefix that displays value with the fewest leading or trailing zeros.

    The exponent of the most significant digit is floored to a multiple of 3 and clamped
    to the table range [-30, 30], so the scaled mantissa lies in [1, 1000) except beyond
    quecto and quetta. Zero maps to NONE. Deci, centi, deka and hecto are never selected.

    Examples:
        >>> best_fit_entry(Decimal("2500")).symbol
        'k'
        >>> best_fit_entry(Decimal("0.5")).symbol
        'm'
        >>> best_fit_entry(Decimal("1e40")).symbol
        'Q'
    """
    value = _as_finite_decimal(value)
    if value.is_zero():
        return NONE

    magnitude = value.adjusted()
    exponent = (magnitude // 3) * 3
    exponent = max(MIN_EXPONENT, min(MAX_EXPONENT, exponent))
    return entry_by_exponent(exponent) or NONE


def scaled_value(value: Decimal | int, entry: PrefixEntry) -> Decimal:
    """
    Return value expressed in units of the entry, trailing zeros stripped.

    Examples:
        >>> scaled_value(Decimal("2500"), parse_prefix("1k"))
        Decimal('2.5')
    """
    value = _as_finite_decimal(value)
    shifted = value.scaleb(-entry.exponent, context=decimal_conf.EXACT)
    return shifted.normalize(context=decimal_conf.EXACT)


def to_plain_string(value: Decimal) -> str:
    """
    Render a Decimal without exponent notation, keeping its scale.

    Examples:
        >>> to_plain_string(Decimal("1.5E+3"))
        '1500'
        >>> to_plain_string(Decimal("1.50"))
        '1.50'
    """
    return format(value, "f")


def format_value(value: Decimal | int) -> str:
    """
    Render a Decimal with its best-fit SI prefix symbol.

    Examples:
        >>> format_value(Decimal("2500"))
        '2.5k'
        >>> format_value(Decimal("0"))
        '0'
    """
    value = _as_finite_decimal(value)
    if value.is_zero():
        return "0"
    entry = best_fit_entry(value)
    return to_plain_string(scaled_value(value, entry)) + entry.symbol


def normalize_value(string: str) -> str:
    """
    Re-render a numeral with optional SI prefix using its best-fit prefix.

    Raises:
        InvalidFormatError: Same as parse_value().

    Examples:
        >>> normalize_value("2500")
        '2.5k'
        >>> normalize_value("0.000072")
        '72u'
        >>> normalize_value("1000k")
        '1M'
    """
    return format_value(parse_value(string))


def compare_values(value1: str, value2: str) -> int:
    """
    Compare two numerals with optional SI prefixes by their exact values.

    Returns:
        -1, 0 or 1 as value1 is less than, equal to, or greater than value2.

    Raises:
        InvalidFormatError: If either side cannot be parsed.

    Examples:
        >>> compare_values("1M", "1000k")
        0
        >>> compare_values("1.5G", "2000M")
        -1
    """
    a = parse_value(value1)
    b = parse_value(value2)
    return (a > b) - (a < b)


def values_equal(value1: str, value2: str) -> bool:
    """True if both numerals denote the same value, e.g. "1M" and "1000k"."""
    return compare_values(value1, value2) == 0


# Private Methods ------------------------------------------------------------------------------------------------------

def _split_prefix(string: str) -> tuple[PrefixEntry, str]:
    """Split a string into its prefix entry and numeral part, (NONE, string) if no symbol matches."""
    if not isinstance(string, str):
        raise TypeError(f"Numeric string must be a str, got {fmt_type(string)}")

    for entry in suffix_scan_order:
        if string.endswith(entry.symbol):
            return entry, string[:-len(entry.symbol)]
    return NONE, string


def _parse_numeral(numeral: str, source: str) -> Decimal:
    if not _NUMERAL.fullmatch(numeral):
        raise InvalidFormatError(f"Invalid numeric value {fmt_value(source)}")
    try:
        return Decimal(numeral)
    except InvalidOperation as e:
        raise InvalidFormatError(f"Invalid numeric value {fmt_value(source)}") from e


def _as_finite_decimal(value: Decimal | int) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
        raise TypeError(f"Decimal or int expected, got {fmt_type(value)}")
    value = Decimal(value)
    if not value.is_finite():
        raise InvalidFormatError(f"Finite value expected, got {fmt_value(value)}")
    return value
