"""Calendar ID logging context for tracing work across modules.

Every AvailabilityCalendar has an id. While it loads a month or handles
a click it publishes that id in a context variable, and the
CalendarIdFilter stamps it on each log record, so the requests issued
for one calendar can be followed through the gateway logs.

Usage:
    from railcal.logging_context import get_calendar_logger, set_calendar_id

    set_calendar_id("CAL-1a2b3c4d")
    logger = get_calendar_logger(__name__)
    logger.info("Loading month")  # → [CAL-1a2b3c4d] Loading month
"""

import logging
import uuid
from contextvars import ContextVar

_calendar_id: ContextVar[str] = ContextVar("calendar_id", default="-")


def new_calendar_id() -> str:
    """Generate a fresh calendar id."""
    return f"CAL-{uuid.uuid4().hex[:8]}"


def set_calendar_id(calendar_id: str) -> None:
    """Set the calendar id for the current async context."""
    _calendar_id.set(calendar_id)


def get_calendar_id() -> str:
    """Retrieve the current calendar id."""
    return _calendar_id.get()


class CalendarIdFilter(logging.Filter):
    """Injects calendar_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.calendar_id = _calendar_id.get()  # type: ignore[attr-defined]
        return True


def get_calendar_logger(name: str) -> logging.Logger:
    """Return a logger with the CalendarIdFilter attached.

    The filter adds ``calendar_id`` to each record so formatters can
    include ``%(calendar_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, CalendarIdFilter) for f in logger.filters):
        logger.addFilter(CalendarIdFilter())
    return logger
