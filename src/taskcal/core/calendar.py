"""Pure calendar view logic - no I/O dependencies."""

import calendar
from datetime import date

from .tasks import COMPLETE, ONGOING, OVERDUE, PENDING, Occurrence

# Which status colors a day when several occurrences share it
BADGE_PRIORITY = (OVERDUE, PENDING, ONGOING, COMPLETE)


def month_window(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move delta months forward (or back) from year/month."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def occurrences_on(occurrences: list[Occurrence], day: date) -> list[Occurrence]:
    return [o for o in occurrences if o.date == day]


def occurrences_in_month(occurrences: list[Occurrence], year: int, month: int) -> list[Occurrence]:
    return [o for o in occurrences if o.date.year == year and o.date.month == month]


def filter_by_status(occurrences: list[Occurrence], status: str) -> list[Occurrence]:
    """Keep occurrences with the given status; "all" keeps everything."""
    if status == "all":
        return list(occurrences)
    return [o for o in occurrences if o.status == status]


def month_completion_pct(occurrences: list[Occurrence], year: int, month: int) -> int:
    """Share of the month's occurrences that are complete, rounded half up."""
    month_occ = occurrences_in_month(occurrences, year, month)
    if not month_occ:
        return 0
    done = sum(1 for o in month_occ if o.status == COMPLETE)
    # Half up; round() would round 12.5 down to 12
    return (done * 200 + len(month_occ)) // (2 * len(month_occ))


def day_badges(occurrences: list[Occurrence]) -> dict[date, str]:
    """
    One badge status per day.

    The most pressing status present wins (overdue first, complete last);
    a day holding only unknown statuses shows its first occurrence's status.
    """
    by_day: dict[date, list[str]] = {}
    for occ in occurrences:
        by_day.setdefault(occ.date, []).append(occ.status)

    badges = {}
    for day, statuses in by_day.items():
        badges[day] = next((s for s in BADGE_PRIORITY if s in statuses), statuses[0])
    return badges


def month_grid(year: int, month: int) -> list[list[date | None]]:
    """Weeks of the month (Sunday first), padded with None."""
    cal = calendar.Calendar(firstweekday=calendar.SUNDAY)
    return [
        [d if d.month == month else None for d in week]
        for week in cal.monthdatescalendar(year, month)
    ]
