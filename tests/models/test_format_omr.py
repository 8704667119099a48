from decimal import Decimal

from billrecon.models import format_omr, parse_amount


class TestFormatOmr:
    def test_zero(self):
        assert format_omr(Decimal("0")) == "OMR 0.000"

    def test_three_decimals(self):
        assert format_omr(Decimal("1.5")) == "OMR 1.500"

    def test_thousands_separator(self):
        assert format_omr(Decimal("2850")) == "OMR 2,850.000"

    def test_rounds_extra_precision(self):
        assert format_omr(Decimal("0.0004")) == "OMR 0.000"


class TestParseAmount:
    def test_plain_integer(self):
        assert parse_amount("2850") == Decimal("2850")

    def test_decimal(self):
        assert parse_amount("2850.500") == Decimal("2850.500")

    def test_thousands_separator(self):
        assert parse_amount("2,850.500") == Decimal("2850.500")

    def test_empty_string(self):
        assert parse_amount("") is None

    def test_whitespace(self):
        assert parse_amount("   ") is None

    def test_invalid_text(self):
        assert parse_amount("abc") is None

    def test_non_finite(self):
        assert parse_amount("NaN") is None
        assert parse_amount("Infinity") is None

    def test_negative_is_parsed(self):
        assert parse_amount("-5") == Decimal("-5")
