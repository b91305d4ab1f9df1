#
# siprefix SI Prefix Table
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, field
from decimal import Decimal

# Local ----------------------------------------------------------------------------------------------------------------
from .collections import FrozenBiMap


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class PrefixEntry:
    """
    One SI prefix: its name, symbol and power-of-ten exponent.

    Attributes:
        name (str)           : Lower-case prefix name, "none" for the identity entry
        symbol (str)         : Case-sensitive symbol appended to a numeral, "" for the identity entry
        exponent (int)       : Power of ten denoted by the symbol
        multiplier (Decimal) : Exact 10^exponent, derived
    """
    name: str
    symbol: str
    exponent: int
    multiplier: Decimal = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # Exact for any exponent: 1000 for kilo, 0.001 for milli
        if self.exponent >= 0:
            multiplier = Decimal(10 ** self.exponent)
        else:
            multiplier = Decimal((0, (1,), self.exponent))
        object.__setattr__(self, "multiplier", multiplier)

    def __str__(self):
        return self.symbol


# @formatter:off
QUECTO = PrefixEntry("quecto", "q", -30)
RONTO  = PrefixEntry("ronto",  "r", -27)
YOCTO  = PrefixEntry("yocto",  "y", -24)
ZEPTO  = PrefixEntry("zepto",  "z", -21)
ATTO   = PrefixEntry("atto",   "a", -18)
FEMTO  = PrefixEntry("femto",  "f", -15)
PICO   = PrefixEntry("pico",   "p", -12)
NANO   = PrefixEntry("nano",   "n", -9)
MICRO  = PrefixEntry("micro",  "u", -6)
MILLI  = PrefixEntry("milli",  "m", -3)
CENTI  = PrefixEntry("centi",  "c", -2)
DECI   = PrefixEntry("deci",   "d", -1)
NONE   = PrefixEntry("none",   "",  0)
DEKA   = PrefixEntry("deka",   "da", 1)
HECTO  = PrefixEntry("hecto",  "h", 2)
KILO   = PrefixEntry("kilo",   "k", 3)
MEGA   = PrefixEntry("mega",   "M", 6)
GIGA   = PrefixEntry("giga",   "G", 9)
TERA   = PrefixEntry("tera",   "T", 12)
PETA   = PrefixEntry("peta",   "P", 15)
EXA    = PrefixEntry("exa",    "E", 18)
ZETTA  = PrefixEntry("zetta",  "Z", 21)
YOTTA  = PrefixEntry("yotta",  "Y", 24)
RONNA  = PrefixEntry("ronna",  "R", 27)
QUETTA = PrefixEntry("quetta", "Q", 30)

_ENTRIES = (
    QUECTO, RONTO, YOCTO, ZEPTO, ATTO, FEMTO, PICO, NANO, MICRO, MILLI, CENTI, DECI,
    NONE,
    DEKA, HECTO, KILO, MEGA, GIGA, TERA, PETA, EXA, ZETTA, YOTTA, RONNA, QUETTA,
)
# @formatter:on

MIN_EXPONENT = QUECTO.exponent
MAX_EXPONENT = QUETTA.exponent

# exponent <-> symbol
si_prefixes = FrozenBiMap((entry.exponent, entry.symbol) for entry in _ENTRIES)

_by_exponent = {entry.exponent: entry for entry in _ENTRIES}

# Symbols are matched as suffixes, longer first ("da" before "a"), then in table order
suffix_scan_order = tuple(
    sorted((entry for entry in _ENTRIES if entry.symbol), key=lambda entry: -len(entry.symbol))
)


# Methods --------------------------------------------------------------------------------------------------------------

def all_entries() -> tuple[PrefixEntry, ...]:
    """All 25 prefix entries ordered by ascending exponent, from quecto to quetta."""
    return _ENTRIES


def entry_by_symbol(symbol: str) -> PrefixEntry | None:
    """
    Return the entry with the given case-sensitive symbol, or None if there is none.

    Examples:
        >>> entry_by_symbol("k")
        PrefixEntry(name='kilo', symbol='k', exponent=3)
        >>> entry_by_symbol("K") is None
        True
    """
    exponent = si_prefixes.get_key(symbol)
    if exponent is None:
        return None
    return _by_exponent[exponent]


def entry_by_exponent(exponent: int) -> PrefixEntry | None:
    """Return the entry whose exponent equals the given one, or None if there is none."""
    return _by_exponent.get(exponent)


# Module Sanity Checks -------------------------------------------------------------------------------------------------

if len(_ENTRIES) != 25:
    raise AssertionError(f"Configuration Error: expected 25 SI prefixes, got {len(_ENTRIES)}.")

if [entry.exponent for entry in _ENTRIES] != sorted(si_prefixes.keys()):
    raise AssertionError("Configuration Error: SI prefixes must be ordered by ascending exponent.")

if [entry for entry in _ENTRIES if not entry.symbol] != [NONE] or NONE.exponent != 0:
    raise AssertionError("Configuration Error: exactly one SI prefix must have an empty symbol and exponent 0.")
