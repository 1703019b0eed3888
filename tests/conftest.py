"""Shared test fixtures and helpers."""

import asyncio
from datetime import date
from typing import Callable, Optional

import pytest

from railcal.schemas.train_schema import OperationalStatus, TrainDetails
from railcal.selection.availability_calendar import AvailabilityCalendar
from railcal.selection.state_machine import CalendarStateMachine
from railcal.tools.mock_gateway import MockGateway
from railcal.tools.selection_store import MemorySelectionStore
from railcal.tools.session import TokenSession

# Tuesday. March 2026 starts on a Sunday; the window ends on 2026-06-08.
TODAY = date(2026, 3, 10)
MAX_BOOKING_DATE = date(2026, 6, 8)
TRAIN_ID = "12"
TOTAL_SEATS = 100


class Recorder:
    """Collects onDateSelect / onClose invocations."""

    def __init__(self) -> None:
        self.selected: list[str] = []
        self.closed = 0

    def on_date_select(self, iso_date: str) -> None:
        self.selected.append(iso_date)

    def on_close(self) -> None:
        self.closed += 1


class GatedGateway(MockGateway):
    """MockGateway that holds chosen calls until released."""

    def __init__(
        self,
        gate_month: Optional[int] = None,
        gate_status: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.gate_month = gate_month
        self.gate_status = gate_status
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def get_booked_seats(self, train_id: str, day: date) -> int:
        if self.gate_month is not None and day.month == self.gate_month:
            self.started.set()
            await self.release.wait()
        return await super().get_booked_seats(train_id, day)

    async def get_operational_status(self, train_id: str, day: date) -> OperationalStatus:
        if self.gate_status:
            self.started.set()
            await self.release.wait()
        return await super().get_operational_status(train_id, day)


@pytest.fixture
def state_machine():
    return CalendarStateMachine()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def train_details():
    return TrainDetails(
        train_id=TRAIN_ID,
        train_name="Coastal Express",
        source="Chennai",
        destination="Bengaluru",
        total_seats=TOTAL_SEATS,
    )


@pytest.fixture
def logged_in():
    return TokenSession("token-abc")


@pytest.fixture
def gateway():
    return MockGateway(capacity=TOTAL_SEATS, booked={}, closures={})


@pytest.fixture
def make_calendar(recorder, train_details, logged_in) -> Callable[..., AvailabilityCalendar]:
    """Factory building a calendar pinned to TODAY."""

    def _make(
        gateway: MockGateway,
        session: Optional[TokenSession] = None,
        details: Optional[TrainDetails] = train_details,
        **kwargs,
    ) -> AvailabilityCalendar:
        return AvailabilityCalendar(
            train_id=TRAIN_ID,
            train_details=details,
            gateway=gateway,
            session=session if session is not None else logged_in,
            on_date_select=recorder.on_date_select,
            on_close=recorder.on_close,
            today_provider=lambda: TODAY,
            window_days=90,
            request_timeout=kwargs.pop("request_timeout", 2.0),
            selection_store=kwargs.pop("selection_store", MemorySelectionStore()),
            **kwargs,
        )

    return _make
