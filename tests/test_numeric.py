"""Tests for locale-aware number parsing and formatting."""

import math

import pytest

from src.estimator.numeric import as_float, format_decimal, format_integer, format_plain, parse_number


class TestParseNumber:
    def test_numbers_pass_through(self):
        assert parse_number(5) == 5
        assert parse_number(2.5) == 2.5

    def test_numeric_nan_passes_through(self):
        assert math.isnan(parse_number(float("nan")))

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_is_zero(self, raw):
        assert parse_number(raw) == 0

    def test_thousands_separators_stripped(self):
        assert parse_number("1.000.000") == 1_000_000

    def test_decimal_comma(self):
        assert parse_number("0,5") == 0.5
        assert parse_number("1.234,75") == 1234.75

    def test_ambiguous_dots_all_stripped(self):
        """Every dot is a thousands separator, wherever it sits."""
        assert parse_number("12.34.56") == 123456

    def test_whitespace_removed(self):
        assert parse_number(" 1 000 ") == 1000

    def test_sign_and_exponent(self):
        assert parse_number("-5") == -5
        assert parse_number("1,5e3") == 1500

    def test_integer_text_gives_int(self):
        assert isinstance(parse_number("42"), int)

    @pytest.mark.parametrize("raw", ["abc", "12a", "1_000", ",", "-", "0x10", "1,2,3"])
    def test_malformed_is_zero(self, raw):
        assert parse_number(raw) == 0

    @pytest.mark.parametrize("raw", ["inf", "Infinity", "nan", "1e999"])
    def test_non_finite_text_is_zero(self, raw):
        assert parse_number(raw) == 0

    def test_very_long_integer_text(self):
        assert parse_number("0" * 5000 + "1") == 1
        assert parse_number("1" + "0" * 5000) == 0

    def test_out_of_range_int_passes_through(self):
        assert parse_number(10**400) == 10**400


class TestFormatInteger:
    def test_groups_thousands_with_dots(self):
        assert format_integer(1_000_000) == "1.000.000"

    def test_small_numbers_ungrouped(self):
        assert format_integer(999) == "999"
        assert format_integer(0) == "0"

    def test_rounds_half_up(self):
        assert format_integer(1234567.5) == "1.234.568"
        assert format_integer(2.5) == "3"
        assert format_integer(0.4) == "0"

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_placeholder(self, value):
        assert format_integer(value) == "-"

    def test_out_of_range_int_placeholder(self):
        assert format_integer(10**400) == "-"

    def test_large_int_exact(self):
        assert format_integer(10**20) == "100.000.000.000.000.000.000"

    @pytest.mark.parametrize("n", [0, 1, 999, 1000, 123_456, 1_000_000, 987_654_321])
    def test_parse_recovers_formatted_integer(self, n):
        assert parse_number(format_integer(n)) == n


class TestFormatDecimal:
    def test_default_two_digits(self):
        assert format_decimal(10) == "10,00"

    def test_fixed_digits(self):
        assert format_decimal(0.2, 3) == "0,200"
        assert format_decimal(2, 1) == "2,0"

    def test_grouping_and_decimal_comma(self):
        assert format_decimal(1234.5) == "1.234,50"

    def test_halves_round_away_from_zero(self):
        assert format_decimal(0.0625, 3) == "0,063"
        assert format_decimal(-0.0625, 3) == "-0,063"
        assert format_decimal(2.5, 0) == "3"
        assert format_decimal(1.005) == "1,01"

    def test_out_of_range_int_placeholder(self):
        assert format_decimal(10**400) == "-"

    def test_largest_float(self):
        assert format_decimal(1.7976931348623157e308).endswith(",00")

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_placeholder(self, value):
        assert format_decimal(value, 3) == "-"

    def test_parse_recovers_formatted_decimal(self):
        assert parse_number(format_decimal(1234.5)) == 1234.5


class TestFormatPlain:
    def test_keeps_all_digits(self):
        assert format_plain(0.25) == "0,25"
        assert format_plain(0.125) == "0,125"

    def test_whole_numbers_without_fraction(self):
        assert format_plain(5.0) == "5"
        assert format_plain(1_000_000) == "1.000.000"

    def test_small_values_not_in_exponent_form(self):
        assert format_plain(1e-7) == "0,0000001"

    @pytest.mark.parametrize("value", [math.inf, math.nan, 10**400])
    def test_non_finite_placeholder(self, value):
        assert format_plain(value) == "-"


class TestAsFloat:
    def test_regular_numbers(self):
        assert as_float(3) == 3.0
        assert isinstance(as_float(3), float)

    def test_out_of_range_ints_become_infinite(self):
        assert as_float(10**400) == math.inf
        assert as_float(-(10**400)) == -math.inf
