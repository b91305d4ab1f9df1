#
# siprefix - Codec Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
from decimal import Decimal, localcontext

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from siprefix import prefixes
from siprefix.codec import (
    InvalidFormatError,
    best_fit_entry,
    compare_values,
    format_value,
    normalize_value,
    parse_prefix,
    parse_value,
    scaled_value,
    to_plain_string,
    values_equal,
)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestParseValue:

    @pytest.mark.parametrize(
        "string, expected",
        [
            pytest.param("2.5k", Decimal("2500"), id="kilo"),
            pytest.param("42G", Decimal("42000000000"), id="giga"),
            pytest.param("72u", Decimal("0.000072"), id="micro"),
            pytest.param("-1.5m", Decimal("-0.0015"), id="negative-milli"),
            pytest.param("+3M", Decimal("3000000"), id="plus-sign"),
            pytest.param("5da", Decimal("50"), id="deka"),
            pytest.param("5d", Decimal("0.5"), id="deci"),
            pytest.param("5c", Decimal("0.05"), id="centi"),
            pytest.param("5h", Decimal("500"), id="hecto"),
            pytest.param("1q", Decimal("1e-30"), id="quecto"),
            pytest.param("1Q", Decimal("1e30"), id="quetta"),
            pytest.param("2500", Decimal("2500"), id="plain-int"),
            pytest.param("-0.5", Decimal("-0.5"), id="plain-negative"),
            pytest.param(".5", Decimal("0.5"), id="leading-dot"),
            pytest.param("1.", Decimal("1"), id="trailing-dot"),
            pytest.param("1e3", Decimal("1000"), id="e-notation"),
            pytest.param("1.5E-2k", Decimal("15"), id="e-notation-prefixed"),
            pytest.param("0", Decimal("0"), id="zero"),
        ],
    )
    def test_valid(self, string, expected):
        assert parse_value(string) == expected

    def test_exact_beyond_context_precision(self):
        """Digits beyond the default 28-digit context survive parsing."""
        digits = "1234567890" * 5
        value = parse_value(f"{digits}.123456789Q")
        assert value == Decimal(f"{digits}123456789e21")
        assert to_plain_string(value) == f"{digits}123456789" + "0" * 21 + ".000000000"

    def test_exact_with_low_context_precision(self):
        with localcontext() as ctx:
            ctx.prec = 3
            assert parse_value("1.23456k") == Decimal("1234.56")

    def test_keeps_numeral_scale(self):
        assert to_plain_string(parse_value("2.5k")) == "2500.0"
        assert to_plain_string(parse_value("1.500m")) == "0.001500"

    @pytest.mark.parametrize(
        "string",
        [
            pytest.param("", id="empty"),
            pytest.param("abc", id="letters"),
            pytest.param("1.2.3k", id="double-dot"),
            pytest.param("k", id="symbol-only"),
            pytest.param("1kk", id="double-prefix"),
            pytest.param("1K", id="unknown-symbol"),
            pytest.param("1 k", id="inner-space"),
            pytest.param(" 1", id="leading-space"),
            pytest.param("1_000", id="underscore"),
            pytest.param("NaN", id="nan"),
            pytest.param("Infinity", id="infinity"),
            pytest.param("--1", id="double-sign"),
            pytest.param("1e", id="incomplete-exponent"),
            pytest.param("1µ", id="micro-sign"),
            pytest.param("١٢", id="non-ascii-digits"),
            pytest.param("1e999999999999999999Q", id="exponent-overflow-after-prefix"),
        ],
    )
    def test_invalid(self, string):
        with pytest.raises(InvalidFormatError):
            parse_value(string)

    def test_exponent_overflow_message(self):
        with pytest.raises(InvalidFormatError, match="Invalid numeric value"):
            parse_value("1e999999999999999999Q")

    def test_invalid_message(self):
        with pytest.raises(InvalidFormatError, match=r"Invalid numeric value <str: '1.2.3k'>"):
            parse_value("1.2.3k")

    def test_invalid_format_is_value_error(self):
        with pytest.raises(ValueError):
            parse_value("abc")

    def test_type_error(self):
        with pytest.raises(TypeError, match="must be a str"):
            parse_value(2500)


class TestParsePrefix:

    @pytest.mark.parametrize(
        "string, expected",
        [
            pytest.param("42G", prefixes.GIGA, id="giga"),
            pytest.param("2.5k", prefixes.KILO, id="kilo"),
            pytest.param("-1m", prefixes.MILLI, id="milli"),
            pytest.param("5da", prefixes.DEKA, id="deka-before-atto"),
            pytest.param("5a", prefixes.ATTO, id="atto"),
            pytest.param("3Q", prefixes.QUETTA, id="quetta"),
            pytest.param("42", prefixes.NONE, id="digits-only"),
        ],
    )
    def test_valid(self, string, expected):
        assert parse_prefix(string) is expected

    @pytest.mark.parametrize(
        "string",
        [
            pytest.param("", id="empty"),
            pytest.param("abc", id="letters"),
            pytest.param("1.2.3k", id="double-dot"),
            pytest.param("G", id="symbol-only"),
            pytest.param("1.5", id="fraction-without-prefix"),
            pytest.param("-5", id="sign-without-prefix"),
            pytest.param("1x", id="unknown-symbol"),
        ],
    )
    def test_invalid(self, string):
        with pytest.raises(InvalidFormatError):
            parse_prefix(string)

    def test_unknown_prefix_message(self):
        with pytest.raises(InvalidFormatError, match="Unknown prefix"):
            parse_prefix("1x")


class TestBestFitEntry:

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(Decimal("0"), prefixes.NONE, id="zero"),
            pytest.param(Decimal("-0.000"), prefixes.NONE, id="negative-zero"),
            pytest.param(Decimal("1"), prefixes.NONE, id="one"),
            pytest.param(Decimal("999"), prefixes.NONE, id="below-kilo"),
            pytest.param(Decimal("1000"), prefixes.KILO, id="kilo-boundary"),
            pytest.param(Decimal("1E+3"), prefixes.KILO, id="kilo-e-notation"),
            pytest.param(Decimal("1000.000"), prefixes.KILO, id="kilo-trailing-zeros"),
            pytest.param(Decimal("-2500"), prefixes.KILO, id="negative"),
            pytest.param(Decimal("0.5"), prefixes.MILLI, id="tenths"),
            pytest.param(Decimal("0.05"), prefixes.MILLI, id="hundredths"),
            pytest.param(Decimal("0.001"), prefixes.MILLI, id="milli-boundary"),
            pytest.param(Decimal("0.000999"), prefixes.MICRO, id="below-milli"),
            pytest.param(Decimal("0.000072"), prefixes.MICRO, id="micro"),
            pytest.param(Decimal("1e30"), prefixes.QUETTA, id="quetta-boundary"),
            pytest.param(Decimal("1e-30"), prefixes.QUECTO, id="quecto-boundary"),
            pytest.param(Decimal("1e45"), prefixes.QUETTA, id="above-range"),
            pytest.param(Decimal("1e-45"), prefixes.QUECTO, id="below-range"),
            pytest.param(2500, prefixes.KILO, id="int"),
        ],
    )
    def test_best_fit(self, value, expected):
        assert best_fit_entry(value) is expected

    def test_exact_near_power_of_ten(self):
        """A float log10 would round these up to the next power of ten."""
        assert best_fit_entry(Decimal("999.99999999999999999999")) is prefixes.NONE
        assert best_fit_entry(Decimal("0.00099999999999999999999")) is prefixes.MICRO

    @pytest.mark.parametrize("exponent", [-30, -27, -3, 0, 3, 6, 27, 30])
    def test_every_multiple_of_three(self, exponent):
        value = Decimal((0, (4, 2), exponent))
        expected = prefixes.entry_by_exponent(((exponent + 1) // 3) * 3)
        assert best_fit_entry(value) is expected

    def test_irregular_prefixes_never_selected(self):
        irregular = {prefixes.DECI, prefixes.CENTI, prefixes.DEKA, prefixes.HECTO}
        for exponent in range(-35, 36):
            assert best_fit_entry(Decimal((0, (1,), exponent))) not in irregular

    def test_non_finite(self):
        with pytest.raises(InvalidFormatError, match="Finite value expected"):
            best_fit_entry(Decimal("Infinity"))

    def test_type_error(self):
        with pytest.raises(TypeError):
            best_fit_entry(2.5)


class TestScaledValue:

    @pytest.mark.parametrize(
        "value, entry, expected",
        [
            pytest.param(Decimal("2500"), prefixes.KILO, "2.5", id="kilo"),
            pytest.param(Decimal("-2500.000"), prefixes.KILO, "-2.5", id="negative-stripped"),
            pytest.param(Decimal("0.000072"), prefixes.MICRO, "72", id="micro"),
            pytest.param(Decimal("1e33"), prefixes.QUETTA, "1E+3", id="beyond-quetta"),
            pytest.param(Decimal("1500"), prefixes.NONE, "1.5E+3", id="identity-strips"),
        ],
    )
    def test_scaled(self, value, entry, expected):
        result = scaled_value(value, entry)
        assert str(result) == expected

    def test_exact_long_mantissa(self):
        value = Decimal("123456789012345678901234567890123456789")
        scaled = scaled_value(value, prefixes.QUETTA)
        assert scaled == Decimal("123456789.012345678901234567890123456789")


class TestNormalizeValue:

    @pytest.mark.parametrize(
        "string, expected",
        [
            pytest.param("2500", "2.5k", id="kilo"),
            pytest.param("0.000072", "72u", id="micro"),
            pytest.param("0", "0", id="zero"),
            pytest.param("-0.00", "0", id="negative-zero"),
            pytest.param("0k", "0", id="zero-prefixed"),
            pytest.param("1000k", "1M", id="carry-up"),
            pytest.param("0.001k", "1", id="carry-down"),
            pytest.param("-1500000", "-1.5M", id="negative"),
            pytest.param("0.5", "500m", id="tenths"),
            pytest.param("5da", "50", id="deka"),
            pytest.param("12.340000", "12.34", id="trailing-zeros"),
            pytest.param("100", "100", id="no-trailing-dot"),
            pytest.param("1e30", "1Q", id="quetta"),
            pytest.param("1e-30", "1q", id="quecto"),
            pytest.param("1e33", "1000Q", id="above-range-clamped"),
            pytest.param("1e-33", "0.001q", id="below-range-clamped"),
            pytest.param("123456789012345678901234567890.5", "123.4567890123456789012345678905R",
                         id="long-mantissa"),
        ],
    )
    def test_normalize(self, string, expected):
        assert normalize_value(string) == expected

    def test_idempotent(self):
        once = normalize_value("123456.789")
        assert normalize_value(once) == once

    @pytest.mark.parametrize(
        "plain",
        ["1e-30", "0.000000000000000000000000000123", "-7.25", "999.999", "1000", "31415926.5358979",
         "-0.0000004", "8.5e29"],
    )
    def test_round_trip(self, plain):
        value = Decimal(plain)
        assert parse_value(normalize_value(to_plain_string(value))) == value

    @pytest.mark.parametrize("string", ["abc", "", "1.2.3k"])
    def test_invalid(self, string):
        with pytest.raises(InvalidFormatError):
            normalize_value(string)


class TestFormatValue:

    def test_format(self):
        assert format_value(Decimal("2500")) == "2.5k"
        assert format_value(Decimal("-0.000072")) == "-72u"
        assert format_value(0) == "0"


class TestCompareValues:

    @pytest.mark.parametrize(
        "value1, value2, expected",
        [
            pytest.param("1M", "1000k", 0, id="equal-prefixes"),
            pytest.param("1.5G", "2000M", -1, id="less"),
            pytest.param("2000M", "1.5G", 1, id="greater"),
            pytest.param("1000", "1k", 0, id="plain-vs-prefixed"),
            pytest.param("1.000k", "1k", 0, id="scale-independent"),
            pytest.param("-1k", "1m", -1, id="negative"),
            pytest.param("0", "-0", 0, id="signed-zero"),
            pytest.param("1q", "0", 1, id="tiny-positive"),
        ],
    )
    def test_compare(self, value1, value2, expected):
        assert compare_values(value1, value2) == expected

    def test_values_equal(self):
        assert values_equal("1M", "1000k") is True
        assert values_equal("1M", "1001k") is False

    @pytest.mark.parametrize(
        "value1, value2",
        [
            pytest.param("abc", "1k", id="left"),
            pytest.param("1k", "1.2.3k", id="right"),
        ],
    )
    def test_invalid(self, value1, value2):
        with pytest.raises(InvalidFormatError):
            compare_values(value1, value2)
        with pytest.raises(InvalidFormatError):
            values_equal(value1, value2)
