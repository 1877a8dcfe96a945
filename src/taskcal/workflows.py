"""Workflow layer between the CLI and the storage adapters.

Each function resolves a repository from config, runs the pure core over
the loaded tasks, and (for quick actions) writes the change back.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from .adapters.file_tasks import JsonTaskStore
from .adapters.supabase_rest import SupabaseTaskAdapter
from .config import Config
from .core.calendar import (
    filter_by_status,
    month_completion_pct,
    month_window,
    occurrences_on,
)
from .core.recurrence import validate_recurrence
from .core.tasks import Occurrence, Task, expand_tasks, postponed_due_date, toggled_status
from .errors import TaskNotFoundError
from .ports.task_repo import TaskRepository

logger = logging.getLogger(__name__)


@dataclass
class MonthView:
    """Occurrences for one calendar month, as shown by the calendar page."""

    year: int
    month: int
    occurrences: list[Occurrence]
    displayed: list[Occurrence]
    completion_pct: int


def get_repository(config: Config) -> TaskRepository:
    """Resolve the task store from config."""
    match config.backend:
        case "file":
            return JsonTaskStore(config.tasks_path)
        case "supabase":
            return SupabaseTaskAdapter(config)
        case _:
            raise ValueError(f"Unknown backend: {config.backend}")


def build_month_view(
    repo: TaskRepository,
    year: int,
    month: int,
    now: datetime,
    status: str = "all",
    selected: date | None = None,
) -> MonthView:
    """
    Expand every task into the month and apply the day/status selection.

    Completion percentage always covers the whole month.
    """
    first, last = month_window(year, month)
    occurrences = expand_tasks(repo.fetch_all(), now, first, last)

    displayed = occurrences_on(occurrences, selected) if selected else occurrences
    displayed = filter_by_status(displayed, status)

    return MonthView(
        year=year,
        month=month,
        occurrences=occurrences,
        displayed=displayed,
        completion_pct=month_completion_pct(occurrences, year, month),
    )


def _require(repo: TaskRepository, task_id: str) -> Task:
    task = repo.fetch(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


def toggle_complete(repo: TaskRepository, task_id: str) -> str:
    """Flip a task between complete and pending. Returns the new status."""
    task = _require(repo, task_id)
    new_status = toggled_status(task.status)
    repo.update(task_id, {"status": new_status})
    logger.info(f"Task {task_id} marked {new_status}")
    return new_status


def postpone_task(repo: TaskRepository, task_id: str, occurrence_date: date | None = None) -> date:
    """Push a task's due date back one day. Returns the new due date."""
    task = _require(repo, task_id)
    new_due = postponed_due_date(task, occurrence_date or task.start_date)
    if new_due is None:
        raise ValueError(f"Task {task_id} has no due date or occurrence date to postpone from")
    repo.update(task_id, {"due_date": new_due.isoformat()})
    logger.info(f"Task {task_id} postponed to {new_due.isoformat()}")
    return new_due


def check_recurrence(repo: TaskRepository) -> dict[str, dict[str, str]]:
    """Validate recurrence fields of every task. Maps task id to field errors."""
    problems = {}
    for task in repo.fetch_all():
        errors = validate_recurrence(task.recurring_type, task.recurrence_meta)
        if errors:
            problems[task.id] = errors
    return problems
