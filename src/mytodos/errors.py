"""Error taxonomy shared by the task store, the web API and the client."""

from typing import Optional


class TodoError(Exception):
    """Base exception for MyTODOs operations."""
    pass


class ValidationError(TodoError):
    """A task description was empty or whitespace-only."""
    pass


class NotFoundError(TodoError):
    """No task exists with the requested id."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task '{task_id}' not found")


class TransportError(TodoError):
    """The remote task store could not be reached or answered with a non-2xx status.

    Only ever raised on the client side; the store itself never sees it.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
