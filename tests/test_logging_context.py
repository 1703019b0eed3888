"""Tests for calendar id propagation into log records."""

import logging

from railcal.logging_context import (
    CalendarIdFilter,
    get_calendar_id,
    get_calendar_logger,
    new_calendar_id,
    set_calendar_id,
)


def test_new_ids_are_prefixed_and_distinct():
    first, second = new_calendar_id(), new_calendar_id()
    assert first.startswith("CAL-")
    assert len(first) == len("CAL-") + 8
    assert first != second


def test_filter_stamps_current_id():
    set_calendar_id("CAL-feedbeef")
    record = logging.LogRecord("railcal", logging.INFO, __file__, 1, "msg", None, None)
    assert CalendarIdFilter().filter(record)
    assert record.calendar_id == "CAL-feedbeef"
    assert get_calendar_id() == "CAL-feedbeef"


def test_filter_attached_once():
    logger = get_calendar_logger("railcal.tests.once")
    get_calendar_logger("railcal.tests.once")
    assert sum(isinstance(f, CalendarIdFilter) for f in logger.filters) == 1
