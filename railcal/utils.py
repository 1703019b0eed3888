"""Shared date helpers used across the calendar."""

from datetime import date, datetime
from typing import Union


def parse_iso_date(value: Union[str, date]) -> date:
    """Parse a ``YYYY-MM-DD`` string into a calendar day.

    Datetimes are truncated to their date so a clicked day never shifts
    through a timezone conversion.

    Examples:
        >>> parse_iso_date("2026-03-05")
        datetime.date(2026, 3, 5)
        >>> parse_iso_date(" 2026-03-05 ")
        datetime.date(2026, 3, 5)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


def format_display_date(day: date) -> str:
    """Long human form of a day.

    Examples:
        >>> format_display_date(date(2026, 3, 5))
        'Thursday, March 5, 2026'
    """
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def format_month_label(year: int, month: int) -> str:
    """
    Examples:
        >>> format_month_label(2026, 3)
        'March 2026'
    """
    return f"{date(year, month, 1):%B} {year}"
