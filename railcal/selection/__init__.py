from railcal.selection.availability_calendar import (
    AvailabilityCalendar,
    CalendarCell,
    ClickResult,
)
from railcal.selection.guards import ClickGuardPipeline, GuardResult
from railcal.selection.state_machine import (
    CalendarState,
    CalendarStateMachine,
    InvalidTransitionError,
    SelectionTrigger,
)

__all__ = [
    "AvailabilityCalendar",
    "CalendarCell",
    "ClickResult",
    "ClickGuardPipeline",
    "GuardResult",
    "CalendarState",
    "CalendarStateMachine",
    "InvalidTransitionError",
    "SelectionTrigger",
]
