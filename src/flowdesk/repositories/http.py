"""REST backend collaborators."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError

from ..errors import AuthError, NotFoundError, RemoteError
from ..models import Task, TaskDraft, TimeEntry, TimeEntryDraft

logger = logging.getLogger(__name__)


class HttpBackendClient:
    """Async JSON client for the hosted backend.

    Provides a thin wrapper around httpx with:
    - Bearer token authentication
    - Mapping of HTTP failures onto the flowdesk error taxonomy
    - Request timing in the logs
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the backend client.

        Args:
            base_url: API root, e.g. https://api.example.com/v1
            token: Optional bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> HttpBackendClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None for 204).

        Raises:
            AuthError: 401 or 403
            NotFoundError: 404
            RemoteError: transport failure, other HTTP errors, invalid JSON
        """
        label = f"{method} {path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        start_time = time.monotonic()
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s failed after %.0fms: %s", label, elapsed_ms, e)
            raise RemoteError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000

        if response.status_code in (401, 403):
            logger.error("%s: %d Unauthorized (%.0fms)", label, response.status_code, elapsed_ms)
            raise AuthError("The backend rejected the API token")
        if response.status_code == 404:
            logger.warning("%s: 404 Not Found (%.0fms)", label, elapsed_ms)
            raise NotFoundError(f"Not found: {path}")
        if response.status_code >= 400:
            logger.error("%s: HTTP %d (%.0fms)", label, response.status_code, elapsed_ms)
            raise RemoteError(f"HTTP {response.status_code}: {response.text}")

        logger.info("%s: %d (%.0fms)", label, response.status_code, elapsed_ms)
        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error("%s: Invalid JSON response (%.0fms)", label, elapsed_ms)
            raise RemoteError(f"Invalid JSON response: {e}") from e


def _parse(model: type[Any], payload: Any, what: str) -> Any:
    """Validate a response payload, reporting schema drift as a remote failure."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise RemoteError(f"Unexpected {what} payload: {e}") from e


class HttpTaskRepository:
    """Task collaborator backed by the REST backend."""

    def __init__(self, client: HttpBackendClient) -> None:
        self.client = client

    async def list_tasks(self, project_id: int | None = None) -> list[Task]:
        payload = await self.client.request("GET", "/tasks", params={"project_id": project_id})
        return [_parse(Task, item, "task") for item in payload or []]

    async def get_task(self, task_id: int) -> Task | None:
        try:
            payload = await self.client.request("GET", f"/tasks/{task_id}")
        except NotFoundError:
            return None
        return _parse(Task, payload, "task")

    async def create_task(self, draft: TaskDraft) -> Task:
        payload = await self.client.request(
            "POST", "/tasks", json=draft.model_dump(mode="json", exclude_none=True)
        )
        return _parse(Task, payload, "task")

    async def update_task(self, task: Task) -> Task:
        payload = await self.client.request(
            "PUT", f"/tasks/{task.id}", json=task.model_dump(mode="json")
        )
        return _parse(Task, payload, "task")

    async def update_task_status(self, task_id: int, status: str) -> Task:
        payload = await self.client.request(
            "PATCH", f"/tasks/{task_id}", json={"status": status}
        )
        return _parse(Task, payload, "task")

    async def delete_task(self, task_id: int) -> None:
        await self.client.request("DELETE", f"/tasks/{task_id}")


class HttpTimeEntryRepository:
    """Time entry collaborator backed by the REST backend."""

    def __init__(self, client: HttpBackendClient) -> None:
        self.client = client

    async def create_time_entry(self, draft: TimeEntryDraft) -> TimeEntry:
        payload = await self.client.request(
            "POST", "/time-entries", json=draft.model_dump(mode="json")
        )
        return _parse(TimeEntry, payload, "time entry")

    async def list_time_entries(
        self, project_id: int | None = None, task_id: int | None = None
    ) -> list[TimeEntry]:
        payload = await self.client.request(
            "GET",
            "/time-entries",
            params={"project_id": project_id, "task_id": task_id},
        )
        return [_parse(TimeEntry, item, "time entry") for item in payload or []]
