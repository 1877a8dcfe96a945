"""Exceptions raised by adapters and workflows."""


class AuthenticationError(Exception):
    """Raised when backend credentials are missing or rejected."""

    pass


class BackendError(Exception):
    """Raised when the task store cannot be read or written."""

    pass


class TaskNotFoundError(KeyError):
    """Raised when a task id does not exist in the store."""

    def __str__(self) -> str:
        return f"Task not found: {self.args[0]}" if self.args else "Task not found"
