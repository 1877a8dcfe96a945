"""Pure recurrence logic - no I/O dependencies."""

import re
from dataclasses import dataclass
from datetime import date, timedelta

# Safety bound on days scanned per expansion (3 years).
MAX_SCAN_DAYS = 1095

RECURRING_TYPES = ("none", "weekdays", "weekends", "monthly")

_DIGITS = re.compile(r"^\d+$")


@dataclass(frozen=True)
class NoRecurrence:
    """A one-off task: occurs once, on its start date."""


@dataclass(frozen=True)
class WeekdayRecurrence:
    """Monday-Friday, every N weeks counted from the start week."""

    interval_weeks: int = 1


@dataclass(frozen=True)
class WeekendRecurrence:
    """Saturday and Sunday, every N weeks counted from the start week."""

    interval_weeks: int = 1


@dataclass(frozen=True)
class MonthlyRecurrence:
    """
    A fixed day of the month, every N months counted from the start month.

    day_of_month of None means "same day as the start date".
    """

    day_of_month: int | None = None
    interval_months: int = 1


RecurrenceRule = NoRecurrence | WeekdayRecurrence | WeekendRecurrence | MonthlyRecurrence


def _positive_int(value) -> int | None:
    """Coerce a loosely-typed form value to a positive int, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float):
        return int(value) if value.is_integer() and value > 0 else None
    if isinstance(value, str) and _DIGITS.match(value.strip()):
        parsed = int(value.strip())
        return parsed if parsed > 0 else None
    return None


def parse_rule(recurring_type: str | None, meta: dict | None = None) -> RecurrenceRule:
    """
    Build a recurrence rule from a task's stored fields.

    Lenient: unknown types become NoRecurrence and unparseable numeric
    parameters fall back to their defaults.
    """
    kind = (recurring_type or "none").strip().lower()
    meta = meta if isinstance(meta, dict) else {}

    match kind:
        case "weekdays":
            return WeekdayRecurrence(_positive_int(meta.get("intervalWeeks")) or 1)
        case "weekends":
            return WeekendRecurrence(_positive_int(meta.get("intervalWeeks")) or 1)
        case "monthly":
            day = _positive_int(meta.get("dayOfMonth"))
            if day is not None and day > 31:
                day = None
            return MonthlyRecurrence(
                day_of_month=day,
                interval_months=_positive_int(meta.get("intervalMonths")) or 1,
            )
        case _:
            return NoRecurrence()


def validate_recurrence(recurring_type: str | None, meta: dict | None) -> dict[str, str]:
    """
    Form-level validation of recurrence parameters.

    Returns a mapping of field name to error message; empty when valid.
    Expansion never calls this - it tolerates bad input on its own.
    """
    errors: dict[str, str] = {}
    kind = (recurring_type or "none").strip().lower()
    meta = meta if isinstance(meta, dict) else {}

    if kind not in RECURRING_TYPES:
        errors["recurring_type"] = f"Unknown recurrence type: {kind}"

    # Coerced exactly as parse_rule does
    def check_interval(key: str) -> None:
        value = meta.get(key)
        if value is None or value == "":
            return
        if _positive_int(value) is None:
            errors[key] = "Interval must be a positive integer"

    if kind in ("weekdays", "weekends"):
        check_interval("intervalWeeks")

    if kind == "monthly":
        day = _positive_int(meta.get("dayOfMonth"))
        if day is None or day > 31:
            errors["dayOfMonth"] = "Day of month must be between 1 and 31"
        check_interval("intervalMonths")

    return errors


def _week_index(start: date, current: date) -> int:
    """
    Whole weeks between the Monday of start's week and current.

    Interval weeks run Monday-Sunday so a Saturday/Sunday pair always
    lands in the same week; the calendar grid and the "this week" task
    filter use Sunday-first weeks instead.
    """
    start_monday = start - timedelta(days=start.weekday())
    return (current - start_monday).days // 7


def _month_index(start: date, current: date) -> int:
    return (current.year - start.year) * 12 + (current.month - start.month)


def is_hit(rule: RecurrenceRule, start: date, current: date) -> bool:
    """Does the rule place an occurrence on `current`?"""
    match rule:
        case WeekdayRecurrence(interval_weeks=n):
            return current.weekday() < 5 and _week_index(start, current) % n == 0
        case WeekendRecurrence(interval_weeks=n):
            return current.weekday() >= 5 and _week_index(start, current) % n == 0
        case MonthlyRecurrence(day_of_month=day, interval_months=n):
            target = day if day is not None else start.day
            # Short months simply have no matching day (no clamping)
            return current.day == target and _month_index(start, current) % n == 0
        case _:
            return current == start


def expand_dates(
    start_date: date | None,
    due_date: date | None = None,
    rule: RecurrenceRule | None = None,
    max_days: int = MAX_SCAN_DAYS,
) -> list[date]:
    """
    Enumerate the dates on which a task occurs, ascending.

    Pure function - no I/O, never raises.

    Args:
        start_date: First possible occurrence; None yields no occurrences.
        due_date: Last possible occurrence (inclusive); defaults to start_date.
        rule: Parsed recurrence rule; defaults to NoRecurrence.
        max_days: Ceiling on calendar days scanned from start_date.

    Returns:
        Distinct dates in [start_date, due_date], ascending.
    """
    if start_date is None:
        return []
    end = due_date or start_date
    if end < start_date:
        return []

    rule = rule or NoRecurrence()
    if isinstance(rule, NoRecurrence):
        return [start_date]

    dates = []
    current = start_date
    steps = 0
    while current <= end and steps < max_days:
        if is_hit(rule, start_date, current):
            dates.append(current)
        current += timedelta(days=1)
        steps += 1

    return dates


def expand_occurrences(
    start_date: date | None,
    due_date: date | None = None,
    recurring_type: str | None = "none",
    recurrence_meta: dict | None = None,
) -> list[date]:
    """Expand raw stored recurrence fields (parses the rule first)."""
    return expand_dates(start_date, due_date, parse_rule(recurring_type, recurrence_meta))
