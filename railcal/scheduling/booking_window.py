"""
Rolling booking window.

A date is bookable only if ``today <= d <= today + window_days``. The
window is derived from the clock every time it is needed, never stored,
so it rolls over at midnight without any bookkeeping.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Optional

from railcal.config import settings
from railcal.errors import CalendarError, PastDateSelected, WindowExceeded

TodayProvider = Callable[[], date]


@dataclass(frozen=True)
class BookingWindow:
    today: date
    days: int = settings.window.window_days

    @classmethod
    def current(
        cls, today_provider: TodayProvider = date.today, days: Optional[int] = None
    ) -> "BookingWindow":
        """Build the window for the provider's current day."""
        return cls(
            today=today_provider(),
            days=settings.window.window_days if days is None else days,
        )

    @property
    def max_booking_date(self) -> date:
        return self.today + timedelta(days=self.days)

    def contains(self, day: date) -> bool:
        return self.today <= day <= self.max_booking_date

    def violation(self, day: date) -> Optional[CalendarError]:
        """Return the window rule ``day`` breaks, or None if it is bookable."""
        if day < self.today:
            return PastDateSelected(day)
        if day > self.max_booking_date:
            return WindowExceeded(day, self.max_booking_date, self.days)
        return None
