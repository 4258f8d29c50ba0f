"""Client side of MyTODOs: remote API, local cache and the sync layer."""

from .api import TasksAPI
from .cache import LocalStorage, TaskCache, TASKS_KEY
from .sync import ClientSyncLayer, MutationResult, SyncPath, TaskFilter, filter_tasks

__all__ = [
    "TasksAPI",
    "LocalStorage",
    "TaskCache",
    "TASKS_KEY",
    "ClientSyncLayer",
    "MutationResult",
    "SyncPath",
    "TaskFilter",
    "filter_tasks",
]
