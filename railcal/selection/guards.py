"""
Local checks a date click must pass before any network call.

Three independent guards, run in order:
1. SessionGuard: a session token must be present
2. WindowGuard: the date must lie inside the booking window
3. StatusGuard: the cached status must still allow a selection

They are composed into a ClickGuardPipeline that reports the first
failure.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from railcal.errors import (
    AvailabilityFetchFailed,
    CalendarError,
    DateUnavailable,
    NotAuthenticated,
    TrainNotOperational,
)
from railcal.scheduling.booking_window import BookingWindow
from railcal.schemas.availability_schema import DateAvailability, SeatStatus
from railcal.tools.session import SessionProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuardResult:
    """Outcome of a single guard check."""
    passed: bool
    error: Optional[CalendarError] = None

    @property
    def violation_type(self) -> Optional[str]:
        return self.error.code if self.error else None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


PASSED = GuardResult(passed=True)


class SessionGuard:
    def __init__(self, session: SessionProvider) -> None:
        self.session = session

    def check(self) -> GuardResult:
        if self.session.has_active_session():
            return PASSED
        return GuardResult(passed=False, error=NotAuthenticated())


class WindowGuard:
    def check(self, day: date, window: BookingWindow) -> GuardResult:
        violation = window.violation(day)
        if violation is None:
            return PASSED
        return GuardResult(passed=False, error=violation)


class StatusGuard:
    """Rejects dates whose cached status already rules them out."""

    def check(self, availability: DateAvailability) -> GuardResult:
        status = availability.status
        if status in (SeatStatus.AVAILABLE, SeatStatus.FULL):
            return PASSED
        if status == SeatStatus.TRAIN_NOT_OPERATIONAL:
            error: CalendarError = TrainNotOperational(
                availability.date, availability.operational_reason
            )
        elif status == SeatStatus.UNKNOWN:
            error = AvailabilityFetchFailed(availability.date)
        else:
            error = DateUnavailable()
        return GuardResult(passed=False, error=error)


class ClickGuardPipeline:
    """Runs the click guards in order and stops at the first failure."""

    def __init__(self, session: SessionProvider) -> None:
        self.session = SessionGuard(session)
        self.window = WindowGuard()
        self.status = StatusGuard()

    def check_click(
        self, availability: DateAvailability, window: BookingWindow
    ) -> GuardResult:
        for result in (
            self.session.check(),
            self.window.check(availability.date, window),
            self.status.check(availability),
        ):
            if not result.passed:
                logger.info(
                    "Click on %s rejected: %s", availability.iso_date, result.violation_type
                )
                return result
        return PASSED
