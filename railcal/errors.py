"""
Error taxonomy for date selection.

CalendarError subclasses describe why a click did not produce a
selection. The calendar keeps them as its current notice instead of
raising them to the caller; the message is what the user is shown.
GatewayError is raised by gateways and converted by the calendar.
"""

from datetime import date
from typing import Optional

DEFAULT_NOT_OPERATIONAL_REASON = "Service unavailable"


class CalendarError(Exception):
    """Base class for user-facing date selection failures."""

    code = "calendar_error"
    default_message = "This date cannot be selected."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class PastDateSelected(CalendarError):
    code = "past_date"
    default_message = "Cannot book past dates."

    def __init__(self, day: date) -> None:
        self.day = day
        super().__init__()


class WindowExceeded(CalendarError):
    code = "window_exceeded"

    def __init__(self, day: date, max_booking_date: date, window_days: int) -> None:
        self.day = day
        self.max_booking_date = max_booking_date
        super().__init__(
            f"Booking not available beyond {window_days} days from today "
            f"(max date: {max_booking_date.isoformat()})."
        )


class NotAuthenticated(CalendarError):
    code = "not_authenticated"
    default_message = "Please log in to select a travel date."


class DateUnavailable(CalendarError):
    code = "date_unavailable"
    default_message = "This date is not available for booking."


class SeatsExhausted(CalendarError):
    code = "seats_exhausted"
    default_message = "No seats available for this date."


class TrainNotOperational(CalendarError):
    """The train does not run on the day; ``reason`` is the server's text."""

    code = "train_not_operational"

    def __init__(self, day: date, reason: Optional[str] = None) -> None:
        self.day = day
        self.reason = reason
        super().__init__(
            f"Train not operational on {day.isoformat()}. "
            f"Reason: {reason or DEFAULT_NOT_OPERATIONAL_REASON}"
        )


class AvailabilityFetchFailed(CalendarError):
    code = "availability_fetch_failed"

    def __init__(self, day: date) -> None:
        self.day = day
        super().__init__(
            f"Seat availability for {day.isoformat()} could not be loaded. "
            "Please try again."
        )


class OperationalCheckFailed(CalendarError):
    code = "operational_check_failed"

    def __init__(self, day: date) -> None:
        self.day = day
        super().__init__("Unable to verify train operational status. Please try again.")


class GatewayError(Exception):
    """Raised when a gateway request fails or returns an unusable payload."""
