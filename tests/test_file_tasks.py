"""Tests for the JSON file task store."""

import json
from datetime import date

import pytest

from taskcal.adapters.file_tasks import JsonTaskStore
from taskcal.errors import BackendError


@pytest.fixture
def store(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "1",
                    "title": "Standup",
                    "status": "pending",
                    "start_date": "2024-01-01",
                    "due_date": "2024-01-31",
                    "recurring_type": "weekdays",
                    "recurrence_meta": {},
                },
                {"id": "2", "title": "Dentist", "status": "ongoing", "start_date": "2024-01-10"},
            ]
        )
    )
    return JsonTaskStore(path)


class TestJsonTaskStore:
    def test_missing_file_is_empty(self, tmp_path):
        assert JsonTaskStore(tmp_path / "nope.json").fetch_all() == []

    def test_fetch_all(self, store):
        tasks = store.fetch_all()
        assert [t.id for t in tasks] == ["1", "2"]
        assert tasks[0].recurring_type == "weekdays"
        assert tasks[1].start_date == date(2024, 1, 10)

    def test_fetch_one(self, store):
        assert store.fetch("2").title == "Dentist"
        assert store.fetch("99") is None

    def test_update_persists(self, store):
        store.update("1", {"status": "complete"})
        assert store.fetch("1").status == "complete"
        # other columns untouched
        assert store.fetch("1").due_date == date(2024, 1, 31)

    def test_update_unknown_id(self, store):
        with pytest.raises(BackendError):
            store.update("99", {"status": "complete"})

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text("{not json")
        with pytest.raises(BackendError, match="Invalid task file"):
            JsonTaskStore(path).fetch_all()

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text('{"id": "1"}')
        with pytest.raises(BackendError):
            JsonTaskStore(path).fetch_all()

    def test_skips_rows_without_id(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([{"title": "orphan"}, {"id": "ok", "title": "Fine"}]))
        assert [t.id for t in JsonTaskStore(path).fetch_all()] == ["ok"]

    def test_non_string_status_and_type(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([{"id": 3, "title": "Odd", "status": 1, "recurring_type": 0}]))
        (task,) = JsonTaskStore(path).fetch_all()
        assert task.status == "1"
        assert task.recurring_type == "none"
