"""Client sync layer for MyTODOs.

Mirrors the remote task store in a local cache, tries every mutation against
the store first and falls back to a local-only mutation when the store cannot
be reached. Each mutation reports which path it took through a
MutationResult. Locally applied mutations are never re-synced.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..errors import NotFoundError, TransportError
from ..task import Task, clean_description, new_task_id, require_description
from .api import TasksAPI
from .cache import TaskCache


logger = logging.getLogger(__name__)


class SyncPath(Enum):
    """Which side a mutation was applied to."""
    REMOTE = "remote"  # store accepted it, local state reconciled
    LOCAL = "local"    # store unavailable, applied to the cache only


class TaskFilter(Enum):
    """Display filters."""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass
class MutationResult:
    """Outcome of a client operation."""

    path: SyncPath
    notice: str
    task: Optional[Task] = None
    error: Optional[TransportError] = None

    @property
    def synced(self) -> bool:
        return self.path is SyncPath.REMOTE


def filter_tasks(tasks: List[Task], task_filter: TaskFilter = TaskFilter.ALL) -> List[Task]:
    """Project the task list through a display filter without mutating it."""
    task_filter = TaskFilter(task_filter)
    if task_filter is TaskFilter.ACTIVE:
        return [task for task in tasks if not task.is_completed]
    if task_filter is TaskFilter.COMPLETED:
        return [task for task in tasks if task.is_completed]
    return list(tasks)


class ClientSyncLayer:
    """UI-facing task list backed by a remote store and a local cache."""

    def __init__(self, api: TasksAPI, cache: TaskCache):
        self.api = api
        self.cache = cache
        self._tasks: List[Task] = []
        self._pending_delete: Optional[str] = None

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    @property
    def pending_delete(self) -> Optional[Task]:
        if self._pending_delete is None:
            return None
        return self._find(self._pending_delete)

    def _find(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(task_id)

    def _set_tasks(self, tasks: List[Task]) -> None:
        self._tasks = tasks
        self.cache.save(self._tasks)

    def _replace(self, updated: Task) -> None:
        self._set_tasks([updated if task.id == updated.id else task for task in self._tasks])

    def _remove(self, task_id: str) -> None:
        self._set_tasks([task for task in self._tasks if task.id != task_id])

    def _fallback(self, action: str, error: TransportError) -> None:
        logger.warning(f"Store unavailable, {action} applied locally: {error}")

    async def load(self) -> MutationResult:
        """Populate the task list.

        A cached list always wins over the store; the store is only asked
        when nothing is cached yet.
        """
        cached = self.cache.load()
        if cached is not None:
            self._tasks = cached
            logger.debug(f"Loaded {len(cached)} tasks from local cache")
            return MutationResult(SyncPath.LOCAL, f"Loaded {len(cached)} tasks from local cache.")

        try:
            tasks = await self.api.list_tasks()
        except TransportError as e:
            logger.warning(f"Unable to load tasks from server: {e}")
            self._tasks = []
            return MutationResult(SyncPath.LOCAL, "Unable to load tasks from server.", error=e)

        self._set_tasks(tasks)
        return MutationResult(SyncPath.REMOTE, f"Loaded {len(tasks)} tasks from server.")

    async def add(self, description: str) -> MutationResult:
        """Create a task, remotely if possible.

        Raises:
            ValidationError: If the description is blank (nothing is sent)
        """
        cleaned = clean_description(description)
        try:
            task = await self.api.create_task(cleaned, False)
        except TransportError as e:
            self._fallback("create", e)
            task = Task(id=new_task_id(), description=cleaned, is_completed=False)
            self._set_tasks(self._tasks + [task])
            return MutationResult(SyncPath.LOCAL, "Task added locally (server unavailable)", task, e)

        self._set_tasks(self._tasks + [task])
        return MutationResult(SyncPath.REMOTE, "Task added!", task)

    async def update(self, task_id: str, description: str, is_completed: bool) -> MutationResult:
        """Replace a task's description and completion flag.

        Raises:
            NotFoundError: If the task is not in the displayed list
            ValidationError: If the description is blank
        """
        self._find(task_id)
        updated = Task(id=task_id, description=require_description(description), is_completed=is_completed)
        return await self._apply_update(updated, "Task updated!")

    async def toggle(self, task_id: str) -> MutationResult:
        """Flip a task's completion flag.

        Raises:
            NotFoundError: If the task is not in the displayed list
        """
        updated = self._find(task_id).toggled()
        notice = "Marked as completed" if updated.is_completed else "Marked as active"
        return await self._apply_update(updated, notice)

    async def _apply_update(self, updated: Task, notice: str) -> MutationResult:
        try:
            await self.api.update_task(updated)
        except TransportError as e:
            self._fallback("update", e)
            self._replace(updated)
            return MutationResult(SyncPath.LOCAL, "Task updated locally (server unavailable)", updated, e)

        self._replace(updated)
        return MutationResult(SyncPath.REMOTE, notice, updated)

    def request_delete(self, task_id: str) -> Task:
        """First phase of a delete: record the intent and return the task.

        Raises:
            NotFoundError: If the task is not in the displayed list
        """
        task = self._find(task_id)
        self._pending_delete = task_id
        return task

    def cancel_delete(self) -> None:
        self._pending_delete = None

    async def confirm_delete(self) -> Optional[MutationResult]:
        """Second phase of a delete: remove the pending task, if any."""
        task_id = self._pending_delete
        if task_id is None:
            return None
        self._pending_delete = None

        task = next((t for t in self._tasks if t.id == task_id), None)
        try:
            await self.api.delete_task(task_id)
        except TransportError as e:
            self._fallback("delete", e)
            self._remove(task_id)
            return MutationResult(SyncPath.LOCAL, "Task deleted locally (server unavailable)", task, e)

        self._remove(task_id)
        return MutationResult(SyncPath.REMOTE, "Task deleted!", task)

    def filtered(self, task_filter: TaskFilter = TaskFilter.ALL) -> List[Task]:
        return filter_tasks(self._tasks, task_filter)

    def clear_cache(self) -> None:
        """Forget the cached list so the next load asks the store again."""
        self.cache.clear()
        logger.info("Local task cache cleared")
