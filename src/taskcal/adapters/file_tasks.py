"""File-based task storage adapter."""

import json
import logging
from pathlib import Path

from taskcal.core.tasks import Task
from taskcal.errors import BackendError

logger = logging.getLogger(__name__)


class JsonTaskStore:
    """
    JSON file task storage.

    Implements TaskRepository protocol. The file holds a list of task rows
    using the backend's column names; it is re-read on every call.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read_rows(self) -> list[dict]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise BackendError(f"Invalid task file {self.path}: {e}") from e
        if not isinstance(data, list):
            raise BackendError(f"Invalid task file {self.path}: expected a list of tasks")
        return data

    def _write_rows(self, rows: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(rows, indent=2, default=str))

    def fetch_all(self) -> list[Task]:
        """Fetch all tasks; rows without an id are skipped."""
        tasks = []
        for row in self._read_rows():
            if not isinstance(row, dict) or "id" not in row:
                logger.warning(f"Skipping malformed task row in {self.path}: {row!r}")
                continue
            tasks.append(Task.from_record(row))
        return tasks

    def fetch(self, task_id: str) -> Task | None:
        return next((t for t in self.fetch_all() if t.id == task_id), None)

    def update(self, task_id: str, changes: dict) -> None:
        """Apply column changes to a stored task."""
        rows = self._read_rows()
        for row in rows:
            if isinstance(row, dict) and str(row.get("id")) == task_id:
                row.update(changes)
                self._write_rows(rows)
                return
        raise BackendError(f"No task with id {task_id} in {self.path}")
