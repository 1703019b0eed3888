"""Selected travel date and the booking data prepared with it."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class DateSelection(BaseModel):
    """A date that passed every check and was handed to the caller."""

    train_id: str
    date: date
    display_date: str
    train_name: Optional[str] = None
    route: Optional[str] = None
    total_seats: int = 0
    available_seats: int = Field(default=0, ge=0)
    selected_at: datetime

    @property
    def iso_date(self) -> str:
        return self.date.isoformat()
