"""Tests for the click CLI."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from taskcal.cli import main
from taskcal.config import Config


@pytest.fixture
def tasks_file(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "weekend",
                    "title": "Long run",
                    "status": "pending",
                    "start_date": "2024-01-01",
                    "due_date": "2024-01-14",
                    "recurring_type": "weekends",
                },
                {
                    "id": "rent",
                    "title": "Pay rent",
                    "status": "complete",
                    "start_date": "2024-01-01",
                    "due_date": "2024-03-31",
                    "recurring_type": "monthly",
                    "recurrence_meta": {"dayOfMonth": 15},
                },
            ]
        )
    )
    return path


@pytest.fixture
def run(tasks_file):
    runner = CliRunner()
    config = Config(tasks_file=str(tasks_file))

    def invoke(*args):
        with patch("taskcal.cli.load_config", return_value=config):
            return runner.invoke(main, list(args))

    return invoke


class TestOccurrences:
    def test_json_month(self, run):
        result = run("occurrences", "--month", "2024-01", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        keys = [o["key"] for o in data["occurrences"]]
        assert keys == [
            "weekend-2024-01-06",
            "weekend-2024-01-07",
            "weekend-2024-01-13",
            "weekend-2024-01-14",
            "rent-2024-01-15",
        ]
        assert data["completion_pct"] == 20

    def test_single_day(self, run):
        result = run("occurrences", "--date", "2024-02-15", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["month"] == "2024-02"
        assert [o["key"] for o in data["occurrences"]] == ["rent-2024-02-15"]

    def test_text_output(self, run):
        result = run("occurrences", "--month", "2024-01")
        assert result.exit_code == 0
        assert "Saturday, January 06" in result.output
        assert "(recurs: weekends)" in result.output
        assert "5 occurrence(s)" in result.output

    def test_bad_month(self, run):
        result = run("occurrences", "--month", "January")
        assert result.exit_code != 0


class TestCalendar:
    def test_grid(self, run):
        result = run("calendar", "--month", "2024-01")
        assert result.exit_code == 0
        assert "January 2024" in result.output
        assert " 15✓" in result.output
        assert "Month completion: 20%" in result.output


class TestQuickActions:
    def test_complete_toggles(self, run, tasks_file):
        result = run("complete", "weekend")
        assert result.exit_code == 0
        assert "marked complete" in result.output
        rows = json.loads(tasks_file.read_text())
        assert rows[0]["status"] == "complete"

    def test_complete_unknown_task(self, run):
        result = run("complete", "missing")
        assert result.exit_code == 1
        assert "Task not found: missing" in result.output

    def test_postpone(self, run, tasks_file):
        result = run("postpone", "weekend")
        assert result.exit_code == 0
        assert "now due 2024-01-15" in result.output


class TestTasksAndCheck:
    def test_tasks_search(self, run):
        result = run("tasks", "--search", "rent", "--json")
        assert result.exit_code == 0
        assert [t["id"] for t in json.loads(result.output)] == ["rent"]

    def test_check_valid(self, run):
        result = run("check")
        assert result.exit_code == 0
        assert "All recurrence settings are valid" in result.output

    def test_check_invalid(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"id": "m", "recurring_type": "monthly", "recurrence_meta": {}}]))
        with patch("taskcal.cli.load_config", return_value=Config(tasks_file=str(path))):
            result = CliRunner().invoke(main, ["check"])
        assert result.exit_code == 1
        assert "dayOfMonth" in result.output
