"""
Finite state machine for the date-selection flow.

A click either ends in a notice (login prompt or error) that is
dismissed back to IDLE, or passes the operational check and lands in
SELECTED, where the user proceeds or clears the selection.

Usage:
    sm = CalendarStateMachine()
    sm.transition(SelectionTrigger.OPERATIONAL_CHECK_STARTED)
    assert sm.current_state == CalendarState.CHECKING_OPERATIONAL
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from railcal.errors import CalendarError

logger = logging.getLogger(__name__)


class CalendarState(str, Enum):
    """All states of the date-selection flow."""
    IDLE = "idle"
    CHECKING_OPERATIONAL = "checking_operational"
    SELECTED = "selected"
    LOGIN_REQUIRED = "login_required"
    ERROR = "error"


class SelectionTrigger(str, Enum):
    """Events that cause state transitions."""
    LOGIN_MISSING = "login_missing"
    DATE_REJECTED = "date_rejected"
    OPERATIONAL_CHECK_STARTED = "operational_check_started"
    DATE_CONFIRMED = "date_confirmed"
    NOT_OPERATIONAL = "not_operational"
    SEATS_EXHAUSTED = "seats_exhausted"
    CHECK_FAILED = "check_failed"
    CHECK_ABANDONED = "check_abandoned"
    NOTICE_DISMISSED = "notice_dismissed"
    SELECTION_CLEARED = "selection_cleared"


NOTICE_STATES = (CalendarState.LOGIN_REQUIRED, CalendarState.ERROR)


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: CalendarState
    to_state: CalendarState
    trigger: SelectionTrigger


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: CalendarState
    entered_at: datetime
    trigger: Optional[SelectionTrigger] = None
    notice: Optional[CalendarError] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class CalendarStateMachine:
    """
    Single source of truth for where the selection flow is.

    Notice states carry the CalendarError that put them there; leaving
    a notice state clears it.
    """

    TRANSITIONS: list[Transition] = [
        # --- Local guards ---
        Transition(CalendarState.IDLE, CalendarState.LOGIN_REQUIRED,
                   SelectionTrigger.LOGIN_MISSING),
        Transition(CalendarState.IDLE, CalendarState.ERROR,
                   SelectionTrigger.DATE_REJECTED),

        # --- Operational check ---
        Transition(CalendarState.IDLE, CalendarState.CHECKING_OPERATIONAL,
                   SelectionTrigger.OPERATIONAL_CHECK_STARTED),
        Transition(CalendarState.CHECKING_OPERATIONAL, CalendarState.SELECTED,
                   SelectionTrigger.DATE_CONFIRMED),
        Transition(CalendarState.CHECKING_OPERATIONAL, CalendarState.ERROR,
                   SelectionTrigger.NOT_OPERATIONAL),
        Transition(CalendarState.CHECKING_OPERATIONAL, CalendarState.ERROR,
                   SelectionTrigger.SEATS_EXHAUSTED),
        Transition(CalendarState.CHECKING_OPERATIONAL, CalendarState.ERROR,
                   SelectionTrigger.CHECK_FAILED),
        Transition(CalendarState.CHECKING_OPERATIONAL, CalendarState.IDLE,
                   SelectionTrigger.CHECK_ABANDONED),

        # --- Back to idle ---
        Transition(CalendarState.LOGIN_REQUIRED, CalendarState.IDLE,
                   SelectionTrigger.NOTICE_DISMISSED),
        Transition(CalendarState.ERROR, CalendarState.IDLE,
                   SelectionTrigger.NOTICE_DISMISSED),
        Transition(CalendarState.SELECTED, CalendarState.IDLE,
                   SelectionTrigger.SELECTION_CLEARED),
    ]

    def __init__(self) -> None:
        self._current_state = CalendarState.IDLE
        self._notice: Optional[CalendarError] = None
        self._history: list[StateEntry] = [
            StateEntry(state=CalendarState.IDLE, entered_at=datetime.now(timezone.utc))
        ]
        self._error_count: int = 0

    @property
    def current_state(self) -> CalendarState:
        return self._current_state

    @property
    def notice(self) -> Optional[CalendarError]:
        return self._notice

    @property
    def error_count(self) -> int:
        return self._error_count

    def transition(
        self, trigger: SelectionTrigger, notice: Optional[CalendarError] = None
    ) -> CalendarState:
        """
        Execute a state transition.

        Args:
            trigger: The event triggering the transition.
            notice: The error shown to the user when entering a notice state.

        Returns:
            The new state.

        Raises:
            InvalidTransitionError: If no valid transition exists, or a
                notice state is entered without a notice.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                if t.to_state in NOTICE_STATES and notice is None:
                    raise InvalidTransitionError(
                        f"Entering '{t.to_state.value}' requires a notice"
                    )

                old_state = self._current_state
                self._current_state = t.to_state
                self._notice = notice if t.to_state in NOTICE_STATES else None

                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                    notice=self._notice,
                ))

                if t.to_state == CalendarState.ERROR:
                    self._error_count += 1

                logger.debug(
                    "State transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[SelectionTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        """Return the full state transition history."""
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]

    def is_showing_notice(self) -> bool:
        return self._current_state in NOTICE_STATES
