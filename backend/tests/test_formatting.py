"""
Tests for Naira display and input parsing helpers.
"""

from taxbuddy.core.formatting import (
    format_currency,
    format_number_with_commas,
    format_percent,
    parse_formatted_number,
)


class TestFormatCurrency:
    def test_whole_naira(self):
        assert format_currency(1_234_567) == "₦1,234,567"

    def test_zero(self):
        assert format_currency(0) == "₦0"

    def test_rounds_half_up(self):
        assert format_currency(1_234.5) == "₦1,235"
        assert format_currency(59_449.49) == "₦59,449"

    def test_negative(self):
        assert format_currency(-1_500) == "-₦1,500"

    def test_float_result_field(self):
        assert format_currency(713_400.0) == "₦713,400"


class TestFormatNumberWithCommas:
    def test_groups_digits(self):
        assert format_number_with_commas("1200000") == "1,200,000"
        assert format_number_with_commas(1_200_000) == "1,200,000"
        assert format_number_with_commas(1_200_000.0) == "1,200,000"

    def test_strips_non_digits(self):
        assert format_number_with_commas("₦1,2a34") == "1,234"

    def test_empty(self):
        assert format_number_with_commas("") == ""
        assert format_number_with_commas(None) == ""
        assert format_number_with_commas("abc") == ""

    def test_zero(self):
        assert format_number_with_commas(0) == "0"


class TestParseFormattedNumber:
    def test_parses_separators(self):
        assert parse_formatted_number("1,200,000") == 1_200_000

    def test_strips_currency_symbol(self):
        assert parse_formatted_number("₦5,000") == 5_000

    def test_empty(self):
        assert parse_formatted_number("") == 0
        assert parse_formatted_number(None) == 0
        assert parse_formatted_number("n/a") == 0

    def test_round_trip(self):
        for value in [0, 7, 999, 1_000, 800_000, 2_200_000, 50_000_000, 123_456_789_012]:
            assert parse_formatted_number(format_number_with_commas(value)) == value


def test_format_percent():
    assert format_percent(11.89) == "11.89%"
    assert format_percent(0) == "0.00%"
