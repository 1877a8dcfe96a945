"""Pure task domain logic - no I/O dependencies."""

import json
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from .recurrence import RecurrenceRule, expand_dates, parse_rule

PENDING = "pending"
ONGOING = "ongoing"
COMPLETE = "complete"
OVERDUE = "overdue"

STATUSES = (PENDING, ONGOING, COMPLETE, OVERDUE)

END_OF_DAY = time(23, 59, 59)


def _parse_date(value) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).split("T")[0])
    except ValueError:
        return None


def _parse_time(value) -> time | None:
    if isinstance(value, time):
        return value
    if not value:
        return None
    try:
        return time.fromisoformat(str(value))
    except ValueError:
        return None


def _parse_meta(value) -> dict:
    if isinstance(value, dict):
        return value
    if isinstance(value, str) and value.strip():
        try:
            data = json.loads(value)
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}
    return {}


@dataclass
class Task:
    """A task as stored by the backend; only scheduling fields are typed."""

    id: str
    title: str
    status: str = PENDING
    start_date: date | None = None
    due_date: date | None = None
    due_time: time | None = None
    recurring_type: str = "none"
    recurrence_meta: dict = field(default_factory=dict)
    priority: str = "Medium"
    description: str = ""

    @property
    def is_complete(self) -> bool:
        return self.status == COMPLETE

    @property
    def is_recurring(self) -> bool:
        return self.recurring_type != "none"

    @property
    def rule(self) -> RecurrenceRule:
        return parse_rule(self.recurring_type, self.recurrence_meta)

    def due_at(self) -> datetime | None:
        """Due timestamp; end of day when no due time is set."""
        if not self.due_date:
            return None
        return datetime.combine(self.due_date, self.due_time or END_OF_DAY)

    def occurrence_dates(self) -> list[date]:
        """Dates on which this task occurs."""
        return expand_dates(self.start_date, self.due_date, self.rule)

    @classmethod
    def from_record(cls, data: dict) -> "Task":
        """Create Task from a backend row, tolerating missing or bad fields."""
        return cls(
            id=str(data["id"]),
            title=data.get("title") or data.get("name") or "Untitled",
            status=str(data.get("status") or PENDING).lower(),
            start_date=_parse_date(data.get("start_date")),
            due_date=_parse_date(data.get("due_date")),
            due_time=_parse_time(data.get("due_time")),
            recurring_type=str(data.get("recurring_type") or "none").lower(),
            recurrence_meta=_parse_meta(data.get("recurrence_meta")),
            priority=data.get("priority") or "Medium",
            description=data.get("description") or "",
        )

    def to_record(self) -> dict:
        """Serialize back to backend column names."""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "due_time": self.due_time.isoformat() if self.due_time else None,
            "recurring_type": self.recurring_type,
            "recurrence_meta": self.recurrence_meta,
            "priority": self.priority,
            "description": self.description,
        }


@dataclass
class Occurrence:
    """One dated instance of a task. Derived, never stored."""

    task: Task
    date: date
    status: str

    @property
    def key(self) -> str:
        return f"{self.task.id}-{self.date.isoformat()}"

    @property
    def title(self) -> str:
        return self.task.title


def derive_status(task: Task, now: datetime) -> str:
    """
    Display status for a task's occurrences at `now`.

    Overdue when the due timestamp has strictly passed and the task is not
    complete; otherwise the stored status unchanged.
    """
    due_at = task.due_at()
    if due_at is not None and due_at < now and not task.is_complete:
        return OVERDUE
    return task.status


def expand_task(
    task: Task,
    now: datetime,
    window_start: date | None = None,
    window_end: date | None = None,
) -> list[Occurrence]:
    """
    Expand a task into occurrences, optionally limited to an inclusive window.

    Pure function - no I/O.
    """
    status = derive_status(task, now)
    return [
        Occurrence(task=task, date=d, status=status)
        for d in task.occurrence_dates()
        if (window_start is None or d >= window_start)
        and (window_end is None or d <= window_end)
    ]


def expand_tasks(
    tasks: list[Task],
    now: datetime,
    window_start: date | None = None,
    window_end: date | None = None,
) -> list[Occurrence]:
    """Expand many tasks; sorted by date then task id, unique by key."""
    seen = set()
    occurrences = []
    for task in tasks:
        for occ in expand_task(task, now, window_start, window_end):
            if occ.key in seen:
                continue
            seen.add(occ.key)
            occurrences.append(occ)
    return sorted(occurrences, key=lambda o: (o.date, o.task.id))


def toggled_status(status: str) -> str:
    """complete <-> pending; anything else becomes complete."""
    return PENDING if status == COMPLETE else COMPLETE


def postponed_due_date(task: Task, occurrence_date: date | None = None) -> date | None:
    """
    Due date pushed back one day.

    Tasks without a due date are pushed to the day after the occurrence.
    """
    base = task.due_date or occurrence_date
    if base is None:
        return None
    return base + timedelta(days=1)


def _week_bounds(today: date) -> tuple[date, date]:
    """Sunday-to-Saturday week containing today."""
    sunday = today - timedelta(days=(today.weekday() + 1) % 7)
    return sunday, sunday + timedelta(days=6)


def filter_tasks(tasks: list[Task], name: str, today: date) -> list[Task]:
    """
    Apply a named filter: a status, or a due-date bucket relative to today.

    Unknown names return every task.
    """
    match name:
        case "complete" | "pending" | "ongoing" | "overdue":
            return [t for t in tasks if t.status == name]
        case "today":
            return [t for t in tasks if t.due_date == today]
        case "tomorrow":
            return [t for t in tasks if t.due_date == today + timedelta(days=1)]
        case "weekly":
            first, last = _week_bounds(today)
            return [t for t in tasks if t.due_date and first <= t.due_date <= last]
        case "monthly":
            return [
                t
                for t in tasks
                if t.due_date
                and (t.due_date.year, t.due_date.month) == (today.year, today.month)
            ]
        case _:
            return list(tasks)


def search_tasks(tasks: list[Task], query: str) -> list[Task]:
    """Case-insensitive title substring search; blank query matches all."""
    query = query.strip().lower()
    if not query:
        return list(tasks)
    return [t for t in tasks if query in t.title.lower()]
