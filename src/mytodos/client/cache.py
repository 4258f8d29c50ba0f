"""Local cache for the client: a file-backed key/value "local storage".

The file holds a JSON object mapping string keys to string values. The task
list lives under a single fixed key as one serialized JSON array.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..task import Task


logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"


class LocalStorage:
    """File-backed string key/value store."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable local storage {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed local storage {self.path}")
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class TaskCache:
    """The client's cached copy of the task list."""

    def __init__(self, storage: LocalStorage, key: str = TASKS_KEY):
        self.storage = storage
        self.key = key

    def exists(self) -> bool:
        return self.load() is not None

    def load(self) -> Optional[List[Task]]:
        """Return the cached tasks, or None when nothing usable is cached."""
        raw = self.storage.get_item(self.key)
        if raw is None:
            return None
        try:
            items = json.loads(raw)
            return [Task.from_dict(item) for item in items]
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Discarding corrupt task cache: {e}")
            return None

    def save(self, tasks: List[Task]) -> None:
        self.storage.set_item(self.key, json.dumps([task.to_dict() for task in tasks]))

    def clear(self) -> None:
        self.storage.remove_item(self.key)
