"""Tests for last-selection persistence."""

import json
from datetime import date, datetime, timezone

import pytest

from railcal.schemas.selection_schema import DateSelection
from railcal.tools.selection_store import JsonSelectionStore, MemorySelectionStore


@pytest.fixture
def selection():
    return DateSelection(
        train_id="12",
        date=date(2026, 3, 20),
        display_date="Friday, March 20, 2026",
        train_name="Coastal Express",
        route="Chennai → Bengaluru",
        total_seats=100,
        available_seats=75,
        selected_at=datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc),
    )


class TestMemorySelectionStore:
    def test_keeps_last(self, selection):
        store = MemorySelectionStore()
        store.save(selection)
        assert store.load() is selection


class TestJsonSelectionStore:
    def test_writes_date_and_train_id(self, tmp_path, selection):
        path = tmp_path / "last_selection.json"
        JsonSelectionStore(path).save(selection)

        record = json.loads(path.read_text(encoding="utf-8"))
        assert record["selected_travel_date"] == "2026-03-20"
        assert record["selected_train_id"] == "12"

    def test_load_restores_selection(self, tmp_path, selection):
        store = JsonSelectionStore(tmp_path / "nested" / "last.json")
        store.save(selection)
        assert store.load() == selection

    def test_missing_file_loads_none(self, tmp_path):
        assert JsonSelectionStore(tmp_path / "absent.json").load() is None

    def test_corrupt_file_loads_none(self, tmp_path):
        path = tmp_path / "last.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonSelectionStore(path).load() is None

    def test_write_failure_does_not_raise(self, tmp_path, selection):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        # Parent is a regular file, so the directory cannot be created.
        JsonSelectionStore(blocker / "last.json").save(selection)
