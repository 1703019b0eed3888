"""Tests for the date-selection state machine."""

from datetime import date

import pytest

from railcal.errors import NotAuthenticated, OperationalCheckFailed, SeatsExhausted
from railcal.selection.state_machine import (
    CalendarState,
    CalendarStateMachine,
    InvalidTransitionError,
    SelectionTrigger,
)

DAY = date(2026, 3, 14)


class TestInitialState:
    def test_starts_idle(self, state_machine):
        assert state_machine.current_state == CalendarState.IDLE

    def test_initial_history_has_one_entry(self, state_machine):
        assert len(state_machine.get_history()) == 1

    def test_no_notice_at_start(self, state_machine):
        assert state_machine.notice is None
        assert not state_machine.is_showing_notice()

    def test_initial_error_count_is_zero(self, state_machine):
        assert state_machine.error_count == 0


class TestLocalGuards:
    def test_login_missing_shows_login_prompt(self, state_machine):
        notice = NotAuthenticated()
        new = state_machine.transition(SelectionTrigger.LOGIN_MISSING, notice)
        assert new == CalendarState.LOGIN_REQUIRED
        assert state_machine.notice is notice

    def test_notice_state_requires_notice(self, state_machine):
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(SelectionTrigger.LOGIN_MISSING)

    def test_dismiss_returns_to_idle_and_clears_notice(self, state_machine):
        state_machine.transition(SelectionTrigger.DATE_REJECTED, SeatsExhausted())
        new = state_machine.transition(SelectionTrigger.NOTICE_DISMISSED)
        assert new == CalendarState.IDLE
        assert state_machine.notice is None


class TestOperationalCheck:
    def test_check_then_confirm_selects(self, state_machine):
        state_machine.transition(SelectionTrigger.OPERATIONAL_CHECK_STARTED)
        new = state_machine.transition(SelectionTrigger.DATE_CONFIRMED)
        assert new == CalendarState.SELECTED

    def test_check_failure_goes_to_error(self, state_machine):
        state_machine.transition(SelectionTrigger.OPERATIONAL_CHECK_STARTED)
        new = state_machine.transition(
            SelectionTrigger.CHECK_FAILED, OperationalCheckFailed(DAY)
        )
        assert new == CalendarState.ERROR
        assert state_machine.error_count == 1

    def test_cannot_select_without_check(self, state_machine):
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(SelectionTrigger.DATE_CONFIRMED)

    def test_clear_selection_returns_to_idle(self, state_machine):
        state_machine.transition(SelectionTrigger.OPERATIONAL_CHECK_STARTED)
        state_machine.transition(SelectionTrigger.DATE_CONFIRMED)
        new = state_machine.transition(SelectionTrigger.SELECTION_CLEARED)
        assert new == CalendarState.IDLE

    def test_abandoned_check_returns_to_idle(self, state_machine):
        state_machine.transition(SelectionTrigger.OPERATIONAL_CHECK_STARTED)
        new = state_machine.transition(SelectionTrigger.CHECK_ABANDONED)
        assert new == CalendarState.IDLE
        assert state_machine.notice is None

    def test_cannot_dismiss_while_checking(self, state_machine):
        state_machine.transition(SelectionTrigger.OPERATIONAL_CHECK_STARTED)
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(SelectionTrigger.NOTICE_DISMISSED)


class TestHistory:
    def test_state_trace(self, state_machine):
        state_machine.transition(SelectionTrigger.OPERATIONAL_CHECK_STARTED)
        state_machine.transition(SelectionTrigger.SEATS_EXHAUSTED, SeatsExhausted())
        state_machine.transition(SelectionTrigger.NOTICE_DISMISSED)
        assert state_machine.get_state_trace() == [
            "idle", "checking_operational", "error", "idle",
        ]

    def test_history_records_notice(self, state_machine):
        notice = NotAuthenticated()
        state_machine.transition(SelectionTrigger.LOGIN_MISSING, notice)
        assert state_machine.get_history()[-1].notice is notice

    def test_valid_triggers_from_idle(self, state_machine):
        assert set(state_machine.get_valid_triggers()) == {
            SelectionTrigger.LOGIN_MISSING,
            SelectionTrigger.DATE_REJECTED,
            SelectionTrigger.OPERATIONAL_CHECK_STARTED,
        }

    def test_invalid_transition_lists_valid_triggers(self, state_machine):
        with pytest.raises(InvalidTransitionError, match="Valid triggers"):
            state_machine.transition(SelectionTrigger.SELECTION_CLEARED)
