"""Functional core - pure business logic with no I/O."""

from .recurrence import (
    MonthlyRecurrence,
    NoRecurrence,
    RecurrenceRule,
    WeekdayRecurrence,
    WeekendRecurrence,
    expand_dates,
    expand_occurrences,
    parse_rule,
    validate_recurrence,
)
from .tasks import Occurrence, Task, derive_status, expand_task, expand_tasks
from .calendar import day_badges, month_completion_pct, month_window

__all__ = [
    # Recurrence
    "RecurrenceRule",
    "NoRecurrence",
    "WeekdayRecurrence",
    "WeekendRecurrence",
    "MonthlyRecurrence",
    "parse_rule",
    "expand_dates",
    "expand_occurrences",
    "validate_recurrence",
    # Tasks
    "Task",
    "Occurrence",
    "derive_status",
    "expand_task",
    "expand_tasks",
    # Calendar
    "month_window",
    "month_completion_pct",
    "day_badges",
]
