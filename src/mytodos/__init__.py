"""MyTODOs - a minimal task tracker with an offline-tolerant client."""

__version__ = "1.0.0"

from .task import Task
from .errors import TodoError, ValidationError, NotFoundError, TransportError

__all__ = [
    "Task",
    "TodoError",
    "ValidationError",
    "NotFoundError",
    "TransportError",
    "__version__",
]
