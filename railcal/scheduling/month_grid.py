"""
Month grid arithmetic.

A CalendarMonth holds the contiguous days of one month, padded with
leading blanks so the first day lands in its weekday column of a
Sunday-first week.
"""

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional

from railcal.scheduling.booking_window import BookingWindow
from railcal.utils import format_month_label

WEEKDAY_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int

    @classmethod
    def of(cls, day: date) -> "CalendarMonth":
        return cls(day.year, day.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def leading_blanks(self) -> int:
        # date.weekday() is Monday=0; the grid starts on Sunday.
        return (self.first_day.weekday() + 1) % 7

    @property
    def days(self) -> list[date]:
        count = calendar.monthrange(self.year, self.month)[1]
        return [date(self.year, self.month, d) for d in range(1, count + 1)]

    @property
    def cells(self) -> list[Optional[date]]:
        """Blank-padded days in grid order."""
        padding: list[Optional[date]] = [None] * self.leading_blanks
        return padding + list(self.days)

    @property
    def label(self) -> str:
        return format_month_label(self.year, self.month)

    def shifted(self, offset: int) -> "CalendarMonth":
        index = self.year * 12 + (self.month - 1) + offset
        return CalendarMonth(index // 12, index % 12 + 1)

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month

    def __lt__(self, other: "CalendarMonth") -> bool:
        return (self.year, self.month) < (other.year, other.month)

    def __le__(self, other: "CalendarMonth") -> bool:
        return (self.year, self.month) <= (other.year, other.month)


def can_navigate_prev(month: CalendarMonth, today: date) -> bool:
    """No browsing before the month containing today."""
    return CalendarMonth.of(today) < month


def can_navigate_next(month: CalendarMonth, window: BookingWindow) -> bool:
    """The next month must start on or before the last bookable day."""
    return month.shifted(1).first_day <= window.max_booking_date
