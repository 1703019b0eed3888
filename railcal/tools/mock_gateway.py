"""
Offline gateway with a deterministic schedule.

Stands in for the API gateway in the console demo and in tests. Booked
counts and closures are derived from a seeded generator per date, so
the same date always answers the same way. Explicit overrides, failing
dates and latency can be injected to exercise every calendar path.
"""

import asyncio
import logging
import random
from datetime import date
from typing import Optional

from railcal.errors import GatewayError
from railcal.schemas.train_schema import OperationalStatus, TrainDetails

logger = logging.getLogger(__name__)

# Schedule generation parameters
SCHEDULE_SEED = 42
DEFAULT_CAPACITY = 120
FULL_PROBABILITY = 0.1
CLOSURE_PROBABILITY = 0.05

CLOSURE_REASONS = [
    "Scheduled maintenance",
    "Track repair work",
    "Weather conditions",
]


class MockGateway:
    """In-memory TrainGateway.

    Args:
        capacity: total seats reported by ``get_train_details``.
        booked: explicit booked counts. When given, unlisted dates have
            no bookings and nothing is generated.
        closures: explicit ``{date: reason}`` non-operational days. When
            given, no closures are generated.
        failing_dates: dates whose availability request fails.
        failing_status_dates: dates whose operational-status request fails.
        latency: seconds every call sleeps before answering.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        seed: int = SCHEDULE_SEED,
        booked: Optional[dict[date, int]] = None,
        closures: Optional[dict[date, str]] = None,
        failing_dates: Optional[set[date]] = None,
        failing_status_dates: Optional[set[date]] = None,
        latency: float = 0.0,
        train_name: str = "Coastal Express",
        source: str = "Chennai",
        destination: str = "Bengaluru",
    ) -> None:
        self.capacity = capacity
        self.seed = seed
        self.booked = booked
        self.closures = closures
        self.failing_dates = set(failing_dates or ())
        self.failing_status_dates = set(failing_status_dates or ())
        self.latency = latency
        self.train_name = train_name
        self.source = source
        self.destination = destination
        self.calls: list[tuple[str, str, Optional[date]]] = []

    def _rng(self, train_id: str, day: date) -> random.Random:
        return random.Random(f"{self.seed}:{train_id}:{day.isoformat()}")

    async def _pause(self) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)

    def calls_for(self, operation: str) -> list[tuple[str, str, Optional[date]]]:
        return [c for c in self.calls if c[0] == operation]

    async def get_booked_seats(self, train_id: str, day: date) -> int:
        self.calls.append(("booked_seats", train_id, day))
        await self._pause()
        if day in self.failing_dates:
            raise GatewayError(f"Simulated availability failure for {day.isoformat()}")

        if self.booked is not None:
            return self.booked.get(day, 0)

        rng = self._rng(train_id, day)
        if rng.random() < FULL_PROBABILITY:
            return self.capacity
        return rng.randint(0, self.capacity - 1)

    async def get_operational_status(self, train_id: str, day: date) -> OperationalStatus:
        self.calls.append(("operational_status", train_id, day))
        await self._pause()
        if day in self.failing_status_dates:
            raise GatewayError(f"Simulated status failure for {day.isoformat()}")

        if self.closures is not None:
            reason = self.closures.get(day)
        else:
            rng = self._rng(f"{train_id}:status", day)
            reason = rng.choice(CLOSURE_REASONS) if rng.random() < CLOSURE_PROBABILITY else None

        if reason is None:
            return OperationalStatus(is_operational=True)
        return OperationalStatus(is_operational=False, reason=reason)

    async def get_train_details(self, train_id: str) -> TrainDetails:
        self.calls.append(("train_details", train_id, None))
        await self._pause()
        return TrainDetails(
            train_id=train_id,
            train_name=self.train_name,
            source=self.source,
            destination=self.destination,
            total_seats=self.capacity,
        )
