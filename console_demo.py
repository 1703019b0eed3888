"""
Console calendar: pick a travel date in the terminal.

Renders the availability calendar as a coloured month grid and drives it
with typed commands. By default it runs against the offline mock
gateway: no backend, no network calls. Designed for demo walkthroughs.

Usage:
    python console_demo.py
    python console_demo.py --scenario booking
    python console_demo.py --scenario login
"""

import argparse
import asyncio
from datetime import date
from typing import Optional

from railcal.config import settings
from railcal.schemas.availability_schema import SeatStatus
from railcal.schemas.train_schema import TrainDetails
from railcal.scheduling.month_grid import WEEKDAY_HEADERS
from railcal.selection.availability_calendar import (
    NAV_NEXT,
    NAV_PREV,
    AvailabilityCalendar,
    CalendarCell,
)
from railcal.selection.state_machine import CalendarState, InvalidTransitionError
from railcal.tools.gateway_client import TrainGateway
from railcal.tools.mock_gateway import MockGateway
from railcal.tools.selection_store import store_from_settings
from railcal.tools.session import TokenSession
from railcal.utils import parse_iso_date

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
MAGENTA = "\033[95m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"
REVERSE = "\033[7m"

STATUS_COLOURS: dict[SeatStatus, str] = {
    SeatStatus.AVAILABLE: GREEN,
    SeatStatus.FULL: RED,
    SeatStatus.TRAIN_NOT_OPERATIONAL: MAGENTA,
    SeatStatus.UNAVAILABLE: DIM,
    SeatStatus.UNKNOWN: YELLOW,
}

LEGEND = [
    (SeatStatus.AVAILABLE, "Available"),
    (SeatStatus.FULL, "Full"),
    (SeatStatus.TRAIN_NOT_OPERATIONAL, "Train Not Running"),
    (SeatStatus.UNAVAILABLE, "Past/Beyond window"),
    (SeatStatus.UNKNOWN, "Could not load"),
]

HELP = (
    "Commands: n / p (month), <day> or YYYY-MM-DD (pick date), login <token>, "
    "logout, ok (dismiss), clear, confirm, quit"
)


class ConsoleSession:
    """Interactive terminal front end for one AvailabilityCalendar."""

    # Pre-scripted scenarios for --scenario flag
    SCENARIOS: dict[str, list[str]] = {
        "booking": ["login demo-token", "+3", "confirm"],
        "login": ["+3", "ok", "login demo-token", "+3", "clear", "+3", "confirm"],
        "browse": ["p", "n", "n", "n", "n", "p"],
    }

    MAX_INPUT_LENGTH = 100

    def __init__(
        self,
        gateway: TrainGateway,
        train_id: str,
        train_details: Optional[TrainDetails] = None,
        session: Optional[TokenSession] = None,
    ) -> None:
        self.session = session or TokenSession.from_settings()
        self.selected_dates: list[str] = []
        self.calendar = AvailabilityCalendar(
            train_id=train_id,
            train_details=train_details,
            gateway=gateway,
            session=self.session,
            on_date_select=self._on_date_select,
            on_close=self._on_close,
            selection_store=store_from_settings(),
        )

    def say(self, text: str, colour: str = GREEN) -> None:
        print(f"{colour}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _on_date_select(self, iso_date: str) -> None:
        self.selected_dates.append(iso_date)
        self.system_log(f"onDateSelect({iso_date})")

    def _on_close(self) -> None:
        self.system_log("onClose()")

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #

    def _cell_text(self, cell: Optional[CalendarCell]) -> str:
        if cell is None:
            return " " * 9
        text = f"{cell.day:>2}"
        seats = "   "
        colour = DIM
        if cell.availability is not None:
            colour = STATUS_COLOURS[cell.availability.status]
            if cell.availability.status in (SeatStatus.AVAILABLE, SeatStatus.FULL):
                seats = f"{cell.availability.available_seats:>3}"
        marker = "*" if cell.is_today else " "
        body = f"{text}{marker}{seats}"
        if cell.is_selected:
            return f" {REVERSE}{colour}{body}{RESET}  "
        return f" {colour}{body}{RESET}  "

    def render(self) -> None:
        cal = self.calendar
        details = cal.train_details
        print()
        print(f"{BOLD}{'=' * 64}{RESET}")
        print(f"{BOLD}  Select Travel Date{RESET}")
        if details is not None:
            print(f"  {details.train_name or cal.train_id}  {details.route or ''}")
        print(f"  Total Seats: {cal.total_seats}")
        print(f"{BOLD}{'=' * 64}{RESET}")

        prev_arrow = "<" if cal.can_navigate_prev() else " "
        next_arrow = ">" if cal.can_navigate_next() else " "
        print(f"  {prev_arrow}  {BOLD}{cal.visible_month().label:^52}{RESET}  {next_arrow}")
        print("".join(f" {h:^7}  " for h in WEEKDAY_HEADERS))

        cells = cal.grid()
        for start in range(0, len(cells), 7):
            print("".join(self._cell_text(c) for c in cells[start:start + 7]))

        print()
        print("  " + "   ".join(
            f"{STATUS_COLOURS[status]}■{RESET} {label}" for status, label in LEGEND
        ))
        print(f"{DIM}  Booking available up to {settings.window.window_days} days "
              f"in advance only. Operational status is checked when you pick a date.{RESET}")

        if cal.selection is not None:
            self.say(f"  Selected: {cal.selection.display_date}  (confirm / clear)", BOLD)
        if cal.notice is not None:
            self.say(f"  {cal.notice.message}", RED)
        if cal.loading:
            self.system_log("Loading...")

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def _resolve_day(self, text: str) -> Optional[date]:
        """Accept a day of the visible month, ``+N`` days from today, or an ISO date."""
        if text.startswith("+") and text[1:].isdigit():
            return date.fromordinal(self.calendar.today().toordinal() + int(text[1:]))
        if text.isdigit():
            month = self.calendar.visible_month()
            try:
                return date(month.year, month.month, int(text))
            except ValueError:
                return None
        try:
            return parse_iso_date(text)
        except ValueError:
            return None

    async def process(self, text: str) -> bool:
        """Run one command. Returns False when the session should end."""
        cal = self.calendar
        lower = text.lower()

        if lower in ("quit", "exit", "q"):
            cal.close()
            return False
        if lower in ("help", "?"):
            self.system_log(HELP)
            return True
        if lower == "n":
            if not await cal.navigate(NAV_NEXT):
                self.say("Cannot browse past the booking window.", YELLOW)
            return True
        if lower == "p":
            if not await cal.navigate(NAV_PREV):
                self.say("Cannot browse before the current month.", YELLOW)
            return True
        if lower.startswith("login"):
            token = text[len("login"):].strip()
            if not token:
                self.say("Usage: login <token>", YELLOW)
            else:
                self.session.set_token(token)
            return True
        if lower == "logout":
            self.session.clear()
            return True
        if lower == "ok":
            if cal.state in (CalendarState.LOGIN_REQUIRED, CalendarState.ERROR):
                cal.dismiss()
            return True
        if lower == "clear":
            if cal.state == CalendarState.SELECTED:
                cal.clear_selection()
            return True
        if lower == "confirm":
            try:
                selection = cal.confirm()
            except InvalidTransitionError:
                self.say("Pick a date first.", YELLOW)
                return True
            self.say(f"Proceeding with booking for {selection.display_date}.", BOLD)
            return False

        day = self._resolve_day(text)
        if day is None:
            self.say(f"Unrecognised command: {text!r}. {HELP}", YELLOW)
            return True

        result = await cal.click(day)
        if not result.handled:
            self.say(f"{day.isoformat()} is not in the month on screen.", YELLOW)
        self.system_log(f"State: {cal.state.value}")
        return True

    # ------------------------------------------------------------------ #
    # Loops
    # ------------------------------------------------------------------ #

    async def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        await self.calendar.mount()
        self.render()
        for step in steps:
            print(f"\n{BLUE}[User] {RESET}{step}")
            keep_going = await self.process(step)
            self.render()
            if not keep_going:
                break

        self._summary(f"Scenario '{scenario}' complete.")

    async def run(self) -> None:
        await self.calendar.mount()
        self.system_log(HELP)
        while not self.calendar.closed:
            self.render()
            user_input = input(f"\n{BLUE}[User] {RESET}").strip()
            if not user_input:
                continue
            if len(user_input) > self.MAX_INPUT_LENGTH:
                self.say("That command is too long.", YELLOW)
                continue
            if not await self.process(user_input):
                break

        self._summary("Session ended.")

    def _summary(self, title: str) -> None:
        print(f"\n{BOLD}{'=' * 64}{RESET}")
        print(f"{BOLD}  {title}{RESET}")
        print(f"{DIM}  State trace: {' -> '.join(self.calendar.state_machine.get_state_trace())}{RESET}")
        print(f"{DIM}  Dates handed to caller: {self.selected_dates or 'none'}{RESET}")
        print(f"{BOLD}{'=' * 64}{RESET}")


async def _mock_session(train_id: str) -> ConsoleSession:
    gateway = MockGateway()
    details = await gateway.get_train_details(train_id)
    return ConsoleSession(gateway, train_id, details)


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline availability calendar demo")
    parser.add_argument("--scenario", choices=sorted(ConsoleSession.SCENARIOS))
    parser.add_argument("--train-id", default="12")
    args = parser.parse_args()

    async def _run() -> None:
        console = await _mock_session(args.train_id)
        if args.scenario:
            await console.run_scenario(args.scenario)
        else:
            await console.run()

    asyncio.run(_run())


if __name__ == "__main__":
    main()
