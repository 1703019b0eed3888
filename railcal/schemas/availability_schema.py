"""Per-date seat availability models."""

import logging
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)


class SeatStatus(str, Enum):
    AVAILABLE = "available"
    FULL = "full"
    UNAVAILABLE = "unavailable"
    TRAIN_NOT_OPERATIONAL = "train-not-operational"
    UNKNOWN = "unknown"


SEAT_COUNTED_STATUSES = (SeatStatus.AVAILABLE, SeatStatus.FULL)


class DateAvailability(BaseModel):
    """Seat availability and status of one travel date."""

    date: date
    available_seats: int = Field(default=0, ge=0)
    booked_seats: int = Field(default=0, ge=0)
    total_seats: int = Field(default=0, ge=0)
    status: SeatStatus
    operational_reason: Optional[str] = None

    @model_validator(mode="after")
    def _check_counts(self) -> "DateAvailability":
        if self.status in SEAT_COUNTED_STATUSES:
            if self.available_seats + self.booked_seats != self.total_seats:
                raise ValueError(
                    f"available ({self.available_seats}) + booked ({self.booked_seats}) "
                    f"must equal total ({self.total_seats}) for status {self.status.value}"
                )
        if self.operational_reason is not None and self.status != SeatStatus.TRAIN_NOT_OPERATIONAL:
            raise ValueError("operational_reason is only set for train-not-operational dates")
        return self

    @classmethod
    def outside_window(cls, day: date, total_seats: int) -> "DateAvailability":
        return cls(date=day, total_seats=total_seats, status=SeatStatus.UNAVAILABLE)

    @classmethod
    def fetch_failed(cls, day: date, total_seats: int) -> "DateAvailability":
        return cls(date=day, total_seats=total_seats, status=SeatStatus.UNKNOWN)

    @classmethod
    def from_booked_count(cls, day: date, total_seats: int, booked: int) -> "DateAvailability":
        """Derive availability from the server's booked-seat count.

        A count above capacity is clamped so the seat invariant holds;
        the date is then simply full.
        """
        if booked > total_seats:
            logger.warning(
                "Booked count %d exceeds capacity %d on %s; treating date as full",
                booked, total_seats, day.isoformat(),
            )
            booked = total_seats
        available = total_seats - booked
        return cls(
            date=day,
            available_seats=available,
            booked_seats=booked,
            total_seats=total_seats,
            status=SeatStatus.FULL if available <= 0 else SeatStatus.AVAILABLE,
        )

    def mark_not_operational(self, reason: Optional[str]) -> "DateAvailability":
        """Return a copy corrected to train-not-operational."""
        return self.model_copy(
            update={"status": SeatStatus.TRAIN_NOT_OPERATIONAL, "operational_reason": reason}
        )

    @property
    def iso_date(self) -> str:
        return self.date.isoformat()
