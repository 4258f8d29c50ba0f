"""HTTP client for the remote MyTODOs task store."""

import logging
from typing import Any, List, Optional

import httpx

from ..errors import TransportError
from ..task import Task


logger = logging.getLogger(__name__)


class TasksAPI:
    """Async client for the task store's REST endpoints.

    Every failure, whether the store is unreachable, times out or answers
    with a non-2xx status, surfaces as a TransportError.
    """

    def __init__(self, base_url: str, timeout: float = 30.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the client.

        Args:
            base_url: URL of the tasks collection, e.g. http://localhost:5160/api/tasks
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.headers = {"Content-Type": "application/json"}
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def _url(self, task_id: Optional[str] = None) -> str:
        if task_id is None:
            return self.base_url
        return f"{self.base_url}/{task_id}"

    async def _make_request(self, method: str, url: str, data: Optional[Any] = None) -> httpx.Response:
        """Send a request and translate every failure into TransportError.

        Raises:
            TransportError: On network failure or a non-2xx response
        """
        try:
            response = await self.client.request(method, url, headers=self.headers, json=data)
        except httpx.TimeoutException:
            raise TransportError(f"{method} {url} timed out")
        except httpx.RequestError as e:
            raise TransportError(f"{method} {url} failed: {e}")

        if not response.is_success:
            raise TransportError(
                f"{method} {url} returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        return response

    async def list_tasks(self) -> List[Task]:
        """Get all tasks from the store."""
        response = await self._make_request("GET", self._url())
        try:
            return [Task.from_dict(item) for item in response.json()]
        except (ValueError, TypeError, AttributeError) as e:
            raise TransportError(f"Invalid task list from store: {e}")

    async def create_task(self, description: str, is_completed: bool = False) -> Task:
        """Create a task; the returned task carries the store-assigned id."""
        data = {"description": description, "isCompleted": is_completed, "id": ""}
        response = await self._make_request("POST", self._url(), data)
        try:
            return Task.from_dict(response.json())
        except (ValueError, TypeError, AttributeError) as e:
            raise TransportError(f"Invalid task from store: {e}")

    async def update_task(self, task: Task) -> None:
        """Replace a task's full state on the store."""
        await self._make_request("PUT", self._url(task.id), task.to_dict())

    async def delete_task(self, task_id: str) -> None:
        """Delete a task on the store."""
        await self._make_request("DELETE", self._url(task_id))
