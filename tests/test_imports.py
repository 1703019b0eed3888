"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_schema_package(self):
        from railcal.schemas import (
            DateAvailability, DateSelection, OperationalStatus, SeatStatus, TrainDetails,
        )
        assert SeatStatus.TRAIN_NOT_OPERATIONAL == "train-not-operational"
        assert DateAvailability is not None
        assert DateSelection is not None
        assert OperationalStatus is not None
        assert TrainDetails is not None


class TestSchedulingImports:
    def test_import_scheduling_package(self):
        from railcal.scheduling import BookingWindow, CalendarMonth, WEEKDAY_HEADERS
        assert WEEKDAY_HEADERS[0] == "Sun"
        assert CalendarMonth(2026, 3).label == "March 2026"
        assert BookingWindow is not None


class TestSelectionImports:
    def test_import_state_machine(self):
        from railcal.selection import CalendarState, CalendarStateMachine
        sm = CalendarStateMachine()
        assert sm.current_state == CalendarState.IDLE

    def test_import_guards(self):
        from railcal.selection import ClickGuardPipeline
        from railcal.tools import TokenSession
        pipeline = ClickGuardPipeline(TokenSession())
        assert pipeline is not None

    def test_import_calendar(self):
        from railcal.selection import AvailabilityCalendar
        assert callable(AvailabilityCalendar)


class TestToolImports:
    def test_import_tools_package(self):
        from railcal.tools import (
            GatewayClient, JsonSelectionStore, MemorySelectionStore, MockGateway, TokenSession,
        )
        assert callable(GatewayClient)
        assert callable(JsonSelectionStore)
        assert MemorySelectionStore().load() is None
        assert MockGateway().calls == []
        assert not TokenSession().has_active_session()


class TestConfigImport:
    def test_import_config(self):
        from railcal.config import settings
        assert settings.api.gateway_url.startswith("http")
        assert settings.api.request_timeout_sec > 0
        assert settings.window.window_days >= 1


class TestConsoleDemo:
    def test_console_session_builds(self):
        from console_demo import ConsoleSession
        from railcal.selection import CalendarState
        from railcal.tools import MockGateway, TokenSession

        session = ConsoleSession(MockGateway(), "12", session=TokenSession())
        assert session.calendar.state == CalendarState.IDLE
        assert session.selected_dates == []
