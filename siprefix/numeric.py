"""
Arbitrary-precision decimal numbers rendered with SI prefixes.

SIDecimal owns a ``decimal.Decimal`` and delegates all arithmetic to it, re-wrapping
every result, while its string form uses the best-fit SI prefix: ``str(SIDecimal(2500))``
is ``'2.5k'``. std_decimal() standardizes the numeric types SIDecimal accepts.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
from dataclasses import dataclass
from decimal import Context, Decimal, ROUND_HALF_EVEN
from fractions import Fraction
from typing import Literal, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .codec import (
    InvalidFormatError, decimal_conf, best_fit_entry, format_value, parse_value, scaled_value, to_plain_string,
)
from .prefixes import PrefixEntry
from .utils import fmt_type, fmt_value


# Methods --------------------------------------------------------------------------------------------------------------

def std_decimal(
        value,
        *,
        on_error: Literal["raise", "none"] = "raise",
        allow_bool: bool = False,
        allow_str: bool = True,
) -> Decimal | None:
    """
    Convert numeric values to a finite decimal.Decimal.

    Parameters
    ----------
    value : various
        SIDecimal, Decimal, int, float, Fraction, a numeral string with optional SI
        prefix ("2.5k"), or any type implementing ``__index__`` (NumPy integers).

    on_error : {"raise", "none"}, default "raise"
        How to handle TYPE ERRORS (unsupported types like list, dict):

        - "raise": Raise TypeError
        - "none": Return None (used by SIDecimal operators to return NotImplemented)

        Malformed strings and non-finite values always raise, regardless of this setting.

    allow_bool : bool, default False
        If True, convert bool to Decimal 0 or 1, else treat bool as type error.

    allow_str : bool, default True
        If False, treat str as type error.

    Returns
    -------
    Decimal
        int, Decimal and SIDecimal values are converted exactly. float and Fraction
        values are rounded to 16 significant digits (decimal64, half-even).

    None
        For None input, or type errors when on_error="none".

    Raises
    ------
    TypeError
        When on_error="raise" and the type is unsupported.
    InvalidFormatError
        When value is a string that is not a numeral with an optional SI prefix.
    ValueError
        When value is NaN or infinite.

    Examples
    --------
    >>> std_decimal(42)
    Decimal('42')
    >>> std_decimal("2.5k")
    Decimal('2500.0')
    >>> std_decimal(0.1)
    Decimal('0.1000000000000000')
    >>> std_decimal([1], on_error="none") is None
    True
    """
    if value is None:
        return None

    if isinstance(value, SIDecimal):
        return value.value

    if isinstance(value, bool):
        if allow_bool:
            return Decimal(int(value))
        return _type_error(
            f"boolean values not supported, got {value}. Set allow_bool=True to convert booleans",
            on_error,
        )

    if isinstance(value, str):
        if allow_str:
            return parse_value(value)
        return _type_error(f"numeric strings not supported, got {fmt_value(value)}", on_error)

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = decimal_conf.DECIMAL64.create_decimal_from_float(value)
    elif isinstance(value, Fraction):
        if value.denominator == 1:
            result = Decimal(value.numerator)
        else:
            result = decimal_conf.DECIMAL64.divide(Decimal(value.numerator), Decimal(value.denominator))
    elif hasattr(value, "__index__"):
        try:
            result = Decimal(operator.index(value))
        except (TypeError, ValueError) as e:
            if on_error == "raise":
                raise TypeError(f"cannot convert {fmt_type(value)} to int via __index__: {e}") from e
            return None
    else:
        return _type_error(
            f"unsupported numeric type: {fmt_type(value)}. "
            f"Expected SIDecimal, Decimal, int, float, Fraction, str or types implementing __index__",
            on_error,
        )

    if result.is_nan():
        raise ValueError("NaN values are not supported")
    if result.is_infinite():
        raise ValueError("Infinite values are not supported")
    return result


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True, eq=False, repr=False)
class SIDecimal:
    """
    Immutable decimal number whose string form carries the best-fit SI prefix.

    The constructor accepts anything std_decimal() does, so ``SIDecimal("2.5k")``,
    ``SIDecimal(2500)`` and ``SIDecimal(Decimal("2500"))`` are all equal.

    Addition, subtraction, multiplication and remainder are exact. Division and powers
    round to 16 significant digits unless another context is given. Comparisons,
    equality and hashing are numeric and exact: ``SIDecimal("1k") == 1000``, while
    ``SIDecimal("0.1") != 0.1`` because the float is 0.1000000000000000055...

    Examples:
        >>> str(SIDecimal("1500") * 2)
        '3k'
        >>> SIDecimal("0.000072")
        SIDecimal('72u')
    """

    value: Decimal

    def __post_init__(self):
        if self.value is None:
            raise TypeError("SIDecimal value must not be None")
        object.__setattr__(self, "value", std_decimal(self.value))

    @classmethod
    def value_of(cls, value) -> Self:
        """Same as the constructor, for symmetry with parse-style APIs."""
        return cls(value)

    # ----- SI prefix queries -----

    @property
    def prefix(self) -> PrefixEntry:
        """The SI prefix used when converting this value to a string."""
        return best_fit_entry(self.value)

    @property
    def scaled_value(self) -> Decimal:
        """
        The value in units of its prefix, trailing zeros stripped.

        Example:
            SIDecimal(1500).scaled_value == Decimal("1.5")
        """
        return scaled_value(self.value, self.prefix)

    @property
    def scale(self) -> int:
        """Number of digits after the decimal point, negative for values like 1E+3."""
        return -self.value.as_tuple().exponent

    @property
    def precision(self) -> int:
        """Number of digits in the unscaled value."""
        return len(self.value.as_tuple().digits)

    # ----- String conversion -----

    def __str__(self) -> str:
        return format_value(self.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self}')"

    def to_plain_string(self) -> str:
        """Plain numeral without SI prefix or exponent, scale preserved."""
        return to_plain_string(self.value)

    def to_string(self, scale: int, rounding: str = ROUND_HALF_EVEN) -> str:
        """
        Round to the given number of digits after the decimal point, then render with SI prefix.

        Example:
            SIDecimal("1234.5678").to_string(2) == "1.23457k"
        """
        return format_value(self._quantize(scale, rounding))

    # ----- Arithmetic -----

    def add(self, other) -> Self:
        return self._wrap(decimal_conf.EXACT.add(self.value, self._require(other)))

    def subtract(self, other) -> Self:
        return self._wrap(decimal_conf.EXACT.subtract(self.value, self._require(other)))

    def multiply(self, other) -> Self:
        return self._wrap(decimal_conf.EXACT.multiply(self.value, self._require(other)))

    def divide(self, other, rounding: str | None = None, context: Context | None = None) -> Self:
        """
        Divide by other in the given context, decimal64 by default.

        With a rounding mode the quotient is then rounded to the scale of this value.

        Raises:
            InvalidFormatError: If other is zero.
        """
        divisor = self._require(other)
        if divisor.is_zero():
            raise InvalidFormatError(f"Division by zero: {self} / {fmt_value(other)}")

        quotient = (context or decimal_conf.DECIMAL64).divide(self.value, divisor)
        if rounding is not None:
            quotient = quotient.quantize(_quantum(self.scale), rounding=rounding, context=decimal_conf.EXACT)
        return self._wrap(quotient)

    def remainder(self, other) -> Self:
        """
        Exact remainder of the truncated division, with the sign of this value.

        Raises:
            InvalidFormatError: If other is zero.
        """
        divisor = self._require(other)
        if divisor.is_zero():
            raise InvalidFormatError(f"Division by zero: {self} % {fmt_value(other)}")
        return self._wrap(decimal_conf.EXACT.remainder(self.value, divisor))

    def pow(self, n: int, context: Context | None = None) -> Self:
        """
        Raise to an integer power in the given context, decimal64 by default.

        Raises:
            InvalidFormatError: If this value is zero and n is negative.
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"Integer power expected, got {fmt_type(n)}")
        if n < 0 and self.value.is_zero():
            raise InvalidFormatError(f"Division by zero: {self} ** {n}")
        return self._wrap((context or decimal_conf.DECIMAL64).power(self.value, n))

    def negate(self, context: Context | None = None) -> Self:
        return self._wrap((context or decimal_conf.EXACT).minus(self.value))

    def plus(self, context: Context | None = None) -> Self:
        """This value, rounded to the precision of context if given."""
        return self._wrap((context or decimal_conf.EXACT).plus(self.value))

    def abs(self, context: Context | None = None) -> Self:
        return self._wrap((context or decimal_conf.EXACT).abs(self.value))

    def round(self, context: Context) -> Self:
        """Round to the precision (significant digits) and rounding mode of context."""
        return self.plus(context)

    def set_scale(self, scale: int, rounding: str | None = None) -> Self:
        """
        Return a numerically equal value with the given number of digits after the decimal point.

        Raises:
            ValueError: If rounding is None and digits would be lost.
        """
        result = self._quantize(scale, rounding or ROUND_HALF_EVEN)
        if rounding is None and result != self.value:
            raise ValueError(f"Rounding necessary to set scale {scale} on {fmt_value(self.value)}")
        return self._wrap(result)

    def move_point_left(self, n: int) -> Self:
        """Exact shift of the decimal point n places to the left, scale kept non-negative."""
        return self._wrap(_shift(self.value, -n))

    def move_point_right(self, n: int) -> Self:
        """Exact shift of the decimal point n places to the right, scale kept non-negative."""
        return self._wrap(_shift(self.value, n))

    def min(self, other) -> Self:
        other = self._wrap(self._require(other))
        return self if self <= other else other

    def max(self, other) -> Self:
        other = self._wrap(self._require(other))
        return self if self >= other else other

    # ----- Operators -----

    def __add__(self, other):
        if (d := _operand(other)) is None:
            return NotImplemented
        return self.add(d)

    __radd__ = __add__

    def __sub__(self, other):
        if (d := _operand(other)) is None:
            return NotImplemented
        return self.subtract(d)

    def __rsub__(self, other):
        if (d := _operand(other)) is None:
            return NotImplemented
        return self._wrap(d).subtract(self)

    def __mul__(self, other):
        if (d := _operand(other)) is None:
            return NotImplemented
        return self.multiply(d)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if (d := _operand(other)) is None:
            return NotImplemented
        return self.divide(d)

    def __rtruediv__(self, other):
        if (d := _operand(other)) is None:
            return NotImplemented
        return self._wrap(d).divide(self)

    def __mod__(self, other):
        if (d := _operand(other)) is None:
            return NotImplemented
        return self.remainder(d)

    def __rmod__(self, other):
        if (d := _operand(other)) is None:
            return NotImplemented
        return self._wrap(d).remainder(self)

    def __pow__(self, n):
        if isinstance(n, bool) or not isinstance(n, int):
            return NotImplemented
        return self.pow(n)

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self.plus()

    def __abs__(self):
        return self.abs()

    def __round__(self, ndigits: int | None = None):
        if ndigits is None:
            return int(self._quantize(0, ROUND_HALF_EVEN))
        return self._wrap(self._quantize(ndigits, ROUND_HALF_EVEN))

    # ----- Comparison and conversion -----

    def __eq__(self, other) -> bool:
        if (d := _comparand(other)) is None:
            return NotImplemented
        return self.value == d

    def __lt__(self, other) -> bool:
        if (d := _comparand(other)) is None:
            return NotImplemented
        return self.value < d

    def __le__(self, other) -> bool:
        if (d := _comparand(other)) is None:
            return NotImplemented
        return self.value <= d

    def __gt__(self, other) -> bool:
        if (d := _comparand(other)) is None:
            return NotImplemented
        return self.value > d

    def __ge__(self, other) -> bool:
        if (d := _comparand(other)) is None:
            return NotImplemented
        return self.value >= d

    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return int(self.value)

    def __float__(self) -> float:
        return float(self.value)

    def __bool__(self) -> bool:
        return not self.value.is_zero()

    # ----- Helpers -----

    def _wrap(self, value: Decimal) -> Self:
        return type(self)(value)

    def _require(self, other) -> Decimal:
        """Operand as Decimal for the named arithmetic methods, which also accept numeric strings."""
        if isinstance(other, SIDecimal):
            return other.value
        return std_decimal(other)

    def _quantize(self, scale: int, rounding: str) -> Decimal:
        return self.value.quantize(_quantum(scale), rounding=rounding, context=decimal_conf.EXACT)


# Private Methods ------------------------------------------------------------------------------------------------------

def _operand(other) -> Decimal | None:
    """Operand for binary operators; None when the operator should return NotImplemented."""
    return std_decimal(other, on_error="none", allow_str=False)


def _comparand(other) -> Decimal | float | Fraction | None:
    """
    Operand for comparisons; None when the operator should return NotImplemented.

    float and Fraction operands are returned unchanged so Decimal compares them exactly,
    keeping equality consistent with hash().
    """
    if isinstance(other, float) and not math.isnan(other):
        return other
    if isinstance(other, Fraction):
        return other
    return _operand(other)


def _quantum(scale: int) -> Decimal:
    """Decimal 1 with the given scale, e.g. Decimal('0.01') for scale 2."""
    return Decimal((0, (1,), -scale))


def _shift(value: Decimal, places: int) -> Decimal:
    shifted = value.scaleb(places, context=decimal_conf.EXACT)
    if shifted.as_tuple().exponent > 0:
        shifted = shifted.quantize(_quantum(0), context=decimal_conf.EXACT)
    return shifted


def _type_error(message: str, on_error: str) -> None:
    if on_error == "raise":
        raise TypeError(message)
    return None
