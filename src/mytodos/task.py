"""Task data model for the MyTODOs application."""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import ValidationError


def new_task_id() -> str:
    """Return a fresh opaque task identifier."""
    return str(uuid.uuid4())


def require_description(description: Optional[str]) -> str:
    """Reject a blank description; return it unchanged otherwise."""
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("Description is required.")
    return description


def clean_description(description: Optional[str]) -> str:
    """Trim a description and reject it if nothing is left."""
    return require_description(description).strip()


@dataclass
class Task:
    """A description plus a completion flag, identified by a unique id."""

    id: str
    description: str
    is_completed: bool = False

    def toggled(self) -> "Task":
        """Return a copy with the completion flag flipped."""
        return Task(id=self.id, description=self.description, is_completed=not self.is_completed)

    def copy(self) -> "Task":
        return Task(id=self.id, description=self.description, is_completed=self.is_completed)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the task to its wire/cache representation."""
        return {
            "id": self.id,
            "description": self.description,
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create a Task from its wire/cache representation.

        Raises:
            ValueError: If the id is missing or the description is not a non-empty string
        """
        task_id = data.get("id")
        description = data.get("description")
        if task_id is None or not str(task_id):
            raise ValueError("Task is missing its id")
        if not isinstance(description, str) or not description.strip():
            raise ValueError(f"Task {task_id} has no description")
        return cls(
            id=str(task_id),
            description=description,
            is_completed=bool(data.get("isCompleted", False)),
        )
