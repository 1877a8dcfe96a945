"""Task repository interface."""

from typing import Protocol

from taskcal.core.tasks import Task


class TaskRepository(Protocol):
    """Interface for loading and updating tasks in any backend."""

    def fetch_all(self) -> list[Task]:
        """Fetch all tasks."""
        ...

    def fetch(self, task_id: str) -> Task | None:
        """Fetch one task by id. Returns None if not found."""
        ...

    def update(self, task_id: str, changes: dict) -> None:
        """Apply column changes to a stored task."""
        ...
