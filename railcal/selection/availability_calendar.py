"""
Availability calendar for one train.

Presents a navigable month of travel dates, annotates every date inside
the booking window with seat availability fetched from the gateway, and
hands a validated date back to the caller through ``on_date_select``.

Month loads are numbered. A load whose number is no longer current when
it finishes is discarded, so a slow response for a month the user has
already left never overwrites the month on screen. Every gateway call
is bounded by the configured request timeout.

Usage:
    calendar = AvailabilityCalendar(
        train_id="12",
        train_details=details,
        gateway=gateway,
        session=TokenSession(token),
        on_date_select=lambda iso: print("selected", iso),
        on_close=lambda: print("closed"),
    )
    await calendar.mount()
    result = await calendar.click("2026-03-14")
"""

import asyncio
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Optional, Union

from railcal.config import settings
from railcal.errors import (
    CalendarError,
    GatewayError,
    NotAuthenticated,
    OperationalCheckFailed,
    SeatsExhausted,
    TrainNotOperational,
)
from railcal.logging_context import get_calendar_logger, new_calendar_id, set_calendar_id
from railcal.scheduling.booking_window import BookingWindow, TodayProvider
from railcal.scheduling.month_grid import CalendarMonth, can_navigate_next, can_navigate_prev
from railcal.schemas.availability_schema import DateAvailability, SeatStatus
from railcal.schemas.selection_schema import DateSelection
from railcal.schemas.train_schema import OperationalStatus, TrainDetails
from railcal.selection.guards import ClickGuardPipeline
from railcal.selection.state_machine import (
    CalendarState,
    CalendarStateMachine,
    InvalidTransitionError,
    SelectionTrigger,
)
from railcal.tools.gateway_client import TrainGateway
from railcal.tools.selection_store import SelectionStore
from railcal.tools.session import SessionProvider
from railcal.utils import format_display_date, parse_iso_date

logger = get_calendar_logger(__name__)

NAV_PREV = "prev"
NAV_NEXT = "next"


@dataclass
class CalendarCell:
    """One populated grid cell."""
    day: int
    date: date
    availability: Optional[DateAvailability]
    is_today: bool = False
    is_selected: bool = False


@dataclass
class ClickResult:
    """What a click did."""
    date: date
    state: CalendarState
    handled: bool = True
    error: Optional[CalendarError] = None
    selection: Optional[DateSelection] = None

    @property
    def selected(self) -> bool:
        return self.selection is not None


class AvailabilityCalendar:
    """Month grid of travel dates with gated date selection."""

    def __init__(
        self,
        train_id: str,
        gateway: TrainGateway,
        session: SessionProvider,
        on_date_select: Callable[[str], None],
        on_close: Callable[[], None],
        train_details: Optional[TrainDetails] = None,
        today_provider: TodayProvider = date.today,
        window_days: Optional[int] = None,
        request_timeout: Optional[float] = None,
        max_concurrent_requests: Optional[int] = None,
        selection_store: Optional[SelectionStore] = None,
    ) -> None:
        if not train_id or not str(train_id).strip():
            raise ValueError("train_id is required")

        self.train_id = str(train_id).strip()
        self.train_details = train_details
        self.calendar_id = new_calendar_id()

        self._gateway = gateway
        self._session = session
        self._on_date_select = on_date_select
        self._on_close = on_close
        self._today_provider = today_provider
        self._window_days = window_days or settings.window.window_days
        self._timeout = request_timeout or settings.api.request_timeout_sec
        self._max_concurrent = max_concurrent_requests or settings.api.max_concurrent_requests
        self._store = selection_store

        self._guards = ClickGuardPipeline(session)
        self._state_machine = CalendarStateMachine()
        self._month_offset = 0
        self._generation = 0
        self._loading = False
        self._availability: dict[date, DateAvailability] = {}
        self._selection: Optional[DateSelection] = None
        self._closed = False

    # ------------------------------------------------------------------ #
    # Observable state
    # ------------------------------------------------------------------ #

    @property
    def total_seats(self) -> int:
        return self.train_details.total_seats if self.train_details else 0

    @property
    def state(self) -> CalendarState:
        return self._state_machine.current_state

    @property
    def state_machine(self) -> CalendarStateMachine:
        return self._state_machine

    @property
    def notice(self) -> Optional[CalendarError]:
        return self._state_machine.notice

    @property
    def selection(self) -> Optional[DateSelection]:
        return self._selection

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def availability(self) -> dict[date, DateAvailability]:
        return dict(self._availability)

    def today(self) -> date:
        return self._today_provider()

    def window(self) -> BookingWindow:
        return BookingWindow(today=self.today(), days=self._window_days)

    def visible_month(self) -> CalendarMonth:
        return CalendarMonth.of(self.today()).shifted(self._month_offset)

    def can_navigate_prev(self) -> bool:
        return can_navigate_prev(self.visible_month(), self.today())

    def can_navigate_next(self) -> bool:
        return can_navigate_next(self.visible_month(), self.window())

    def grid(self) -> list[Optional[CalendarCell]]:
        """The visible month as blank-padded cells."""
        today = self.today()
        selected = self._selection.date if self._selection else None
        cells: list[Optional[CalendarCell]] = []
        for day in self.visible_month().cells:
            if day is None:
                cells.append(None)
                continue
            cells.append(CalendarCell(
                day=day.day,
                date=day,
                availability=self._availability.get(day),
                is_today=day == today,
                is_selected=day == selected,
            ))
        return cells

    # ------------------------------------------------------------------ #
    # Month load
    # ------------------------------------------------------------------ #

    async def mount(self) -> dict[date, DateAvailability]:
        """Load the month containing today."""
        self._month_offset = 0
        return await self.load_month()

    async def load_month(self) -> dict[date, DateAvailability]:
        """
        Classify every day of the visible month.

        Days outside the booking window are marked unavailable without a
        request. Days inside it are fetched concurrently; a failed or
        timed-out fetch marks the day unknown.

        Returns:
            The assembled map. It is only installed if no newer load
            started while this one was in flight.
        """
        if self._closed:
            return dict(self._availability)

        set_calendar_id(self.calendar_id)
        self._generation += 1
        generation = self._generation
        month = self.visible_month()
        window = self.window()
        total = self.total_seats

        self._loading = True
        self._availability = {}
        logger.info("Loading %s for train %s (load #%d)", month.label, self.train_id, generation)

        semaphore = asyncio.Semaphore(self._max_concurrent)

        async def fetch(day: date) -> DateAvailability:
            async with semaphore:
                return await self._fetch_day(day, total)

        entries: dict[date, DateAvailability] = {}
        pending: list[date] = []
        for day in month.days:
            if window.contains(day):
                pending.append(day)
            else:
                entries[day] = DateAvailability.outside_window(day, total)

        try:
            fetched = await asyncio.gather(*(fetch(day) for day in pending))
        finally:
            if generation == self._generation:
                self._loading = False

        for entry in fetched:
            entries[entry.date] = entry

        if generation != self._generation:
            logger.debug("Discarding stale load #%d for %s", generation, month.label)
            return entries

        self._availability = entries
        logger.info(
            "Loaded %s: %d in window, %d unknown",
            month.label,
            len(pending),
            sum(1 for e in entries.values() if e.status == SeatStatus.UNKNOWN),
        )
        return dict(entries)

    async def _fetch_day(self, day: date, total: int) -> DateAvailability:
        try:
            booked = await asyncio.wait_for(
                self._gateway.get_booked_seats(self.train_id, day), self._timeout
            )
            logger.debug("Booked seats on %s: %s", day.isoformat(), booked)
            return DateAvailability.from_booked_count(day, total, booked)
        except asyncio.TimeoutError:
            logger.warning("Availability request for %s timed out", day.isoformat())
        except GatewayError as e:
            logger.warning("Availability request for %s failed: %s", day.isoformat(), e)
        except ValueError as e:
            logger.warning("Unusable booked count for %s: %s", day.isoformat(), e)
        except Exception:
            logger.exception("Availability request for %s raised unexpectedly", day.isoformat())
        return DateAvailability.fetch_failed(day, total)

    async def navigate(self, direction: str) -> bool:
        """
        Move one month back or forward and reload.

        Returns:
            False if navigation in that direction is disabled or the
            calendar is closed.
        """
        if self._closed:
            return False

        if direction == NAV_PREV:
            allowed, step = self.can_navigate_prev(), -1
        elif direction == NAV_NEXT:
            allowed, step = self.can_navigate_next(), 1
        else:
            raise ValueError(f"direction must be '{NAV_PREV}' or '{NAV_NEXT}', got {direction!r}")

        if not allowed:
            logger.debug("Navigation %s disabled at %s", direction, self.visible_month().label)
            return False

        self._month_offset += step
        await self.load_month()
        return True

    # ------------------------------------------------------------------ #
    # Date click
    # ------------------------------------------------------------------ #

    async def click(self, day: Union[str, date]) -> ClickResult:
        """
        Handle a click on a day cell.

        Never raises for a rejected date: the reason is kept as the
        calendar's notice and returned in the result. ``on_date_select``
        fires only when the date is in the window, the session is
        present, the train runs and seats remain. Clicks on a closed
        calendar, and checks that finish after their month left the
        screen, come back with ``handled=False``.
        """
        set_calendar_id(self.calendar_id)
        day = parse_iso_date(day)

        if self._closed:
            logger.debug("Click on %s ignored: calendar is closed", day.isoformat())
            return ClickResult(date=day, state=self.state, handled=False)

        if self.state == CalendarState.CHECKING_OPERATIONAL:
            logger.debug("Click on %s ignored while a check is in flight", day.isoformat())
            return ClickResult(date=day, state=self.state, handled=False)

        availability = self._availability.get(day)
        if availability is None:
            logger.debug("Click on %s ignored: no availability loaded", day.isoformat())
            return ClickResult(date=day, state=self.state, handled=False)

        if self._state_machine.is_showing_notice():
            self._state_machine.transition(SelectionTrigger.NOTICE_DISMISSED)
        elif self.state == CalendarState.SELECTED:
            self.clear_selection()

        guard = self._guards.check_click(availability, self.window())
        if not guard.passed:
            trigger = (
                SelectionTrigger.LOGIN_MISSING
                if isinstance(guard.error, NotAuthenticated)
                else SelectionTrigger.DATE_REJECTED
            )
            self._state_machine.transition(trigger, guard.error)
            return ClickResult(date=day, state=self.state, error=guard.error)

        self._state_machine.transition(SelectionTrigger.OPERATIONAL_CHECK_STARTED)
        try:
            status = await self._check_operational(day)
        except (GatewayError, asyncio.TimeoutError) as e:
            logger.warning(
                "Operational check for %s failed: %s", day.isoformat(), str(e) or "timeout"
            )
            return self._fail_check(day)
        except (Exception, asyncio.CancelledError):
            self._fail_check(day)
            raise

        if self._closed or not self.visible_month().contains(day):
            logger.info("Dropping operational check for %s: no longer on screen", day.isoformat())
            self._state_machine.transition(SelectionTrigger.CHECK_ABANDONED)
            return ClickResult(date=day, state=self.state, handled=False)

        if not status.is_operational:
            return self._reject_not_operational(availability, status)

        if availability.status == SeatStatus.FULL:
            error = SeatsExhausted()
            self._state_machine.transition(SelectionTrigger.SEATS_EXHAUSTED, error)
            return ClickResult(date=day, state=self.state, error=error)

        selection = self._select(availability)
        return ClickResult(date=day, state=self.state, selection=selection)

    async def _check_operational(self, day: date) -> OperationalStatus:
        logger.debug("Checking operational status for %s", day.isoformat())
        return await asyncio.wait_for(
            self._gateway.get_operational_status(self.train_id, day), self._timeout
        )

    def _fail_check(self, day: date) -> ClickResult:
        error = OperationalCheckFailed(day)
        self._state_machine.transition(SelectionTrigger.CHECK_FAILED, error)
        return ClickResult(date=day, state=self.state, error=error)

    def _reject_not_operational(
        self, availability: DateAvailability, status: OperationalStatus
    ) -> ClickResult:
        day = availability.date
        # Only correct the cache if it still holds the entry that was clicked.
        if self._availability.get(day) is availability:
            self._availability[day] = availability.mark_not_operational(status.reason)
        error = TrainNotOperational(day, status.reason)
        self._state_machine.transition(SelectionTrigger.NOT_OPERATIONAL, error)
        logger.info("Train %s not operational on %s: %s", self.train_id, day, status.reason)
        return ClickResult(date=day, state=self.state, error=error)

    def _select(self, availability: DateAvailability) -> DateSelection:
        details = self.train_details
        selection = DateSelection(
            train_id=self.train_id,
            date=availability.date,
            display_date=format_display_date(availability.date),
            train_name=details.train_name if details else None,
            route=details.route if details else None,
            total_seats=self.total_seats,
            available_seats=availability.available_seats,
            selected_at=datetime.now(timezone.utc),
        )
        self._selection = selection
        self._state_machine.transition(SelectionTrigger.DATE_CONFIRMED)
        logger.info("Travel date selected: %s", selection.display_date)

        if self._store is not None:
            self._store.save(selection)
        self._on_date_select(selection.iso_date)
        return selection

    # ------------------------------------------------------------------ #
    # Notice, selection and dismissal
    # ------------------------------------------------------------------ #

    def dismiss(self) -> None:
        """Acknowledge the current login prompt or error."""
        self._state_machine.transition(SelectionTrigger.NOTICE_DISMISSED)

    def clear_selection(self) -> None:
        self._state_machine.transition(SelectionTrigger.SELECTION_CLEARED)
        self._selection = None

    def confirm(self) -> DateSelection:
        """Proceed with the selected date and dismiss the calendar.

        Raises:
            InvalidTransitionError: If no date is selected.
        """
        if self.state != CalendarState.SELECTED or self._selection is None:
            raise InvalidTransitionError(
                f"Nothing to confirm in state '{self.state.value}'"
            )
        logger.info("Proceeding with booking for %s", self._selection.iso_date)
        self.close()
        return self._selection

    def close(self) -> None:
        self._closed = True
        self._on_close()
