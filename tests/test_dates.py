"""Tests for date formatting."""

import pytest

from cv_renderer.utils.dates import format_date, format_date_range


class TestFormatDate:
    def test_year_month(self):
        assert format_date("2022-08") == "Aug 2022"

    def test_september_abbreviation(self):
        assert format_date("2021-09") == "Sept 2021"

    def test_single_digit_month(self):
        assert format_date("2020-1") == "Jan 2020"

    def test_bare_year_unchanged(self):
        assert format_date("2013", year_only=True) == "2013"
        assert format_date("2013") == "2013"

    def test_integer_year(self):
        assert format_date(2013) == "2013"

    def test_year_only_keeps_month_of_year_month(self):
        assert format_date("2022-08", year_only=True) == "Aug 2022"

    def test_year_only_short_circuits_four_characters(self):
        assert format_date("2013", year_only=True) == "2013"
        assert format_date(2013, year_only=True) == "2013"

    @pytest.mark.parametrize("raw", ["2022-13", "2022-00", "Summer 2020", "08/2022"])
    def test_malformed_returned_raw(self, raw):
        assert format_date(raw) == raw

    def test_empty(self):
        assert format_date(None) == ""
        assert format_date("") == ""
        assert format_date("   ") == ""


class TestFormatDateRange:
    def test_closed_range(self):
        assert format_date_range("2022-08", "2023-12") == "Aug 2022 - Dec 2023"

    def test_open_range_is_present(self):
        assert format_date_range("2023-12", None) == "Dec 2023 - Present"

    def test_expected_end(self):
        assert format_date_range("2019", None, expected_end="2025-06") == "2019 - Expected Jun 2025"

    def test_end_wins_over_expected(self):
        assert format_date_range("2013", "2017", expected_end="2016") == "2013 - 2017"

    def test_missing_start(self):
        assert format_date_range(None, "2017") == "2017"

    def test_year_only_range(self):
        result = format_date_range("2019", None, year_only=True, expected_end="2025-06")
        assert result == "2019 - Expected Jun 2025"
