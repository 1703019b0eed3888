from railcal.scheduling.booking_window import BookingWindow
from railcal.scheduling.month_grid import (
    WEEKDAY_HEADERS,
    CalendarMonth,
    can_navigate_next,
    can_navigate_prev,
)

__all__ = [
    "BookingWindow",
    "CalendarMonth",
    "WEEKDAY_HEADERS",
    "can_navigate_prev",
    "can_navigate_next",
]
