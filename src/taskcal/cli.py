"""taskcal CLI - recurring task calendar."""

import json
import logging
import sys
from datetime import date

import click

from .config import Config, load_config
from .core.calendar import day_badges, month_grid
from .core.tasks import STATUSES, Occurrence, filter_tasks, search_tasks
from .errors import AuthenticationError, BackendError, TaskNotFoundError
from .workflows import (
    build_month_view,
    check_recurrence,
    get_repository,
    postpone_task,
    toggle_complete,
)

BADGE_MARKS = {"overdue": "!", "pending": "*", "ongoing": "~", "complete": "✓"}

TASK_FILTERS = ("all", *STATUSES, "today", "tomorrow", "weekly", "monthly")


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _config() -> Config:
    try:
        return load_config()
    except ValueError as e:
        _fail(f"Configuration error: {e}")


def _parse_month(value: str | None, config: Config) -> tuple[int, int]:
    """Parse YYYY-MM, defaulting to the current month."""
    if not value:
        today = config.today()
        return today.year, today.month
    try:
        year, month = (int(part) for part in value.split("-"))
    except ValueError:
        raise click.BadParameter(f"'{value}' is not YYYY-MM", param_hint="--month")
    if not 1 <= month <= 12:
        raise click.BadParameter(f"'{value}' is not YYYY-MM", param_hint="--month")
    return year, month


def _parse_date(value: str | None, hint: str) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not YYYY-MM-DD", param_hint=hint)


def _serialize_occurrence(o: Occurrence) -> dict:
    return {
        "key": o.key,
        "task_id": o.task.id,
        "title": o.title,
        "date": o.date.isoformat(),
        "status": o.status,
        "recurring_type": o.task.recurring_type,
    }


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """taskcal - recurring task calendar."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--month", "month_str", default=None, help="Month to show (YYYY-MM), defaults to this month")
@click.option("--date", "-d", "date_str", default=None, help="Only show occurrences on this day (YYYY-MM-DD)")
@click.option("--status", default="all", type=click.Choice(["all", *STATUSES]), help="Filter by status")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def occurrences(month_str: str | None, date_str: str | None, status: str, as_json: bool):
    """List task occurrences for a month or a single day."""
    config = _config()
    selected = _parse_date(date_str, "--date")
    if selected and not month_str:
        year, month = selected.year, selected.month
    else:
        year, month = _parse_month(month_str, config)

    try:
        view = build_month_view(get_repository(config), year, month, config.now(), status, selected)
    except (AuthenticationError, BackendError) as e:
        _fail(str(e))

    if as_json:
        click.echo(
            json.dumps(
                {
                    "month": f"{year:04d}-{month:02d}",
                    "completion_pct": view.completion_pct,
                    "occurrences": [_serialize_occurrence(o) for o in view.displayed],
                },
                indent=2,
            )
        )
        return

    if not view.displayed:
        click.echo("No occurrences.")
    current_date = None
    for occ in view.displayed:
        if occ.date != current_date:
            if current_date is not None:
                click.echo()
            click.echo(f"### {occ.date.strftime('%A, %B %d')}")
            current_date = occ.date
        recurs = f" (recurs: {occ.task.recurring_type})" if occ.task.is_recurring else ""
        click.echo(f"  [{occ.status:8}] {occ.title}{recurs}")

    click.echo(f"\n{len(view.displayed)} occurrence(s), month completion {view.completion_pct}%")


@main.command()
@click.option("--month", "month_str", default=None, help="Month to show (YYYY-MM), defaults to this month")
def calendar(month_str: str | None):
    """Show a month grid with a status badge per day."""
    config = _config()
    year, month = _parse_month(month_str, config)

    try:
        view = build_month_view(get_repository(config), year, month, config.now())
    except (AuthenticationError, BackendError) as e:
        _fail(str(e))

    badges = day_badges(view.occurrences)

    click.echo(date(year, month, 1).strftime("%B %Y").center(28))
    click.echo("".join(f"{d:>4}" for d in ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")))
    for week in month_grid(year, month):
        cells = []
        for d in week:
            if d is None:
                cells.append("    ")
            else:
                cells.append(f"{d.day:>3}{BADGE_MARKS.get(badges.get(d), ' ')}")
        click.echo("".join(cells).rstrip())

    legend = "  ".join(f"{mark} {name}" for name, mark in BADGE_MARKS.items())
    click.echo(f"\n{legend}")
    click.echo(f"Month completion: {view.completion_pct}%")


@main.command()
@click.option("--filter", "filter_name", default="all", type=click.Choice(TASK_FILTERS), help="Named filter")
@click.option("--search", "-s", default="", help="Title substring")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tasks(filter_name: str, search: str, as_json: bool):
    """List stored tasks."""
    config = _config()
    try:
        all_tasks = get_repository(config).fetch_all()
    except (AuthenticationError, BackendError) as e:
        _fail(str(e))

    selected = search_tasks(filter_tasks(all_tasks, filter_name, config.today()), search)

    if as_json:
        click.echo(json.dumps([t.to_record() for t in selected], indent=2))
        return

    if not selected:
        click.echo("No tasks.")
        return

    for task in selected:
        due = f" (due {task.due_date})" if task.due_date else ""
        click.echo(f"[{task.status:8}] {task.id}: {task.title}{due}")


@main.command()
@click.argument("task_id")
def complete(task_id: str):
    """Toggle a task between complete and pending."""
    config = _config()
    try:
        new_status = toggle_complete(get_repository(config), task_id)
    except (AuthenticationError, BackendError, TaskNotFoundError) as e:
        _fail(str(e))

    if new_status == "complete":
        click.echo(f"✓ Task {task_id} marked complete")
    else:
        click.echo(f"Task {task_id} marked pending")


@main.command()
@click.argument("task_id")
@click.option("--from", "from_str", default=None, help="Occurrence date to postpone from (YYYY-MM-DD)")
def postpone(task_id: str, from_str: str | None):
    """Postpone a task's due date by one day."""
    config = _config()
    occurrence_date = _parse_date(from_str, "--from")
    try:
        new_due = postpone_task(get_repository(config), task_id, occurrence_date)
    except (AuthenticationError, BackendError, TaskNotFoundError, ValueError) as e:
        _fail(str(e))

    click.echo(f"Task {task_id} now due {new_due.isoformat()}")


@main.command()
def check():
    """Validate recurrence settings of every task."""
    config = _config()
    try:
        problems = check_recurrence(get_repository(config))
    except (AuthenticationError, BackendError) as e:
        _fail(str(e))

    if not problems:
        click.echo("✓ All recurrence settings are valid")
        return

    for task_id, errors in problems.items():
        click.echo(f"Task {task_id}:")
        for field_name, message in errors.items():
            click.echo(f"  ✗ {field_name}: {message}")
    sys.exit(1)


if __name__ == "__main__":
    main()
