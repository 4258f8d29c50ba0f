"""In-memory task store.

The store is the authoritative registry behind the REST API. It keeps tasks
in insertion order and serializes every operation through a single mutex, so
concurrent requests observe a consistent list. Nothing is persisted: state
resets when the process restarts.
"""

import logging
import threading
from typing import List, Optional

from .errors import NotFoundError
from .task import Task, clean_description, new_task_id, require_description


logger = logging.getLogger(__name__)


class TaskStore:
    """Lock-guarded, insertion-ordered collection of tasks."""

    def __init__(self):
        self._tasks: List[Task] = []
        self._lock = threading.Lock()

    def _find(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(task_id)

    def list(self) -> List[Task]:
        """Return copies of all tasks in insertion order."""
        with self._lock:
            return [task.copy() for task in self._tasks]

    def get(self, task_id: str) -> Task:
        with self._lock:
            return self._find(task_id).copy()

    def create(self, description: str, is_completed: bool = False) -> Task:
        """Create a task with a store-assigned id.

        Raises:
            ValidationError: If the description is blank
        """
        cleaned = clean_description(description)
        with self._lock:
            task = Task(id=new_task_id(), description=cleaned, is_completed=is_completed)
            self._tasks.append(task)
            logger.info(f"Created task {task.id}")
            return task.copy()

    def update(self, task_id: str, description: str, is_completed: bool) -> None:
        """Replace description and completion flag of an existing task.

        Raises:
            NotFoundError: If no task has this id
            ValidationError: If the new description is blank
        """
        with self._lock:
            task = self._find(task_id)
            task.description = require_description(description)
            task.is_completed = is_completed
            logger.info(f"Updated task {task_id} (completed={is_completed})")

    def delete(self, task_id: str) -> None:
        """Remove a task.

        Raises:
            NotFoundError: If no task has this id
        """
        with self._lock:
            task = self._find(task_id)
            self._tasks.remove(task)
            logger.info(f"Deleted task {task_id}")

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()


# Global store instance
_store_instance: Optional[TaskStore] = None


def get_task_store() -> TaskStore:
    """Get the process-wide task store."""
    global _store_instance

    if _store_instance is None:
        _store_instance = TaskStore()

    return _store_instance


def reset_task_store() -> None:
    """Reset the global store instance (useful for testing)."""
    global _store_instance
    _store_instance = None
