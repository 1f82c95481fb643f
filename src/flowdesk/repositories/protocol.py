"""Collaborator protocols consumed by the board and timer services."""

from typing import Protocol

from ..models import Task, TaskDraft, TimeEntry, TimeEntryDraft


class TaskRepositoryProtocol(Protocol):
    """Interface for task storage backends.

    Implementations include the in-memory mock collaborator and the
    HTTP backend. All methods may suspend; callers await them.

    Errors:
        NotFoundError: the task no longer exists remotely.
        RemoteError: transport or server failure.
    """

    async def list_tasks(self, project_id: int | None = None) -> list[Task]:
        """Load all tasks, optionally scoped to one project, in backend order."""
        ...

    async def get_task(self, task_id: int) -> Task | None:
        """Get a single task by ID, or None if it does not exist."""
        ...

    async def create_task(self, draft: TaskDraft) -> Task:
        """Create a task and return it with its assigned ID."""
        ...

    async def update_task(self, task: Task) -> Task:
        """Replace all editable fields of an existing task."""
        ...

    async def update_task_status(self, task_id: int, status: str) -> Task:
        """Change only the status of a task and return the stored task."""
        ...

    async def delete_task(self, task_id: int) -> None:
        """Delete a task by ID."""
        ...


class TimeEntryRepositoryProtocol(Protocol):
    """Interface for time entry storage backends."""

    async def create_time_entry(self, draft: TimeEntryDraft) -> TimeEntry:
        """Persist a finished timing session.

        Raises:
            RemoteError: the entry could not be stored.
        """
        ...

    async def list_time_entries(
        self, project_id: int | None = None, task_id: int | None = None
    ) -> list[TimeEntry]:
        """List entries, optionally filtered by project and/or task."""
        ...


class KeyValueStoreProtocol(Protocol):
    """Durable local string store (the browser's localStorage equivalent).

    Both methods raise PersistenceError when the store is unusable.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...
