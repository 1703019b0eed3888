"""Tests for shared date helpers."""

from datetime import date, datetime

import pytest

from railcal.utils import format_display_date, format_month_label, parse_iso_date


class TestParseIsoDate:
    def test_parses_string(self):
        assert parse_iso_date("2026-03-05") == date(2026, 3, 5)

    def test_strips_whitespace(self):
        assert parse_iso_date("  2026-03-05 ") == date(2026, 3, 5)

    def test_date_passes_through(self):
        assert parse_iso_date(date(2026, 3, 5)) == date(2026, 3, 5)

    def test_datetime_truncated_to_day(self):
        result = parse_iso_date(datetime(2026, 3, 5, 23, 59))
        assert result == date(2026, 3, 5)
        assert type(result) is date

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_iso_date("next tuesday")

    def test_rejects_impossible_day(self):
        with pytest.raises(ValueError):
            parse_iso_date("2026-02-30")


class TestFormatting:
    def test_display_date(self):
        assert format_display_date(date(2026, 3, 5)) == "Thursday, March 5, 2026"

    def test_display_date_has_no_zero_padding(self):
        assert format_display_date(date(2026, 6, 8)) == "Monday, June 8, 2026"

    def test_month_label(self):
        assert format_month_label(2026, 3) == "March 2026"
        assert format_month_label(2027, 1) == "January 2027"
