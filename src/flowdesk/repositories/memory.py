"""In-memory collaborators used for mock data and tests."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..errors import NotFoundError
from ..models import STATUS_PENDING, Task, TaskDraft, TimeEntry, TimeEntryDraft

logger = logging.getLogger(__name__)


class InMemoryTaskRepository:
    """Task collaborator backed by a dict, preserving insertion order."""

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: dict[int, Task] = {}
        for task in tasks:
            self._tasks[task.id] = task.model_copy(deep=True)
        self._next_id = max(self._tasks, default=0) + 1

    async def list_tasks(self, project_id: int | None = None) -> list[Task]:
        tasks = [t.model_copy(deep=True) for t in self._tasks.values()]
        if project_id is not None:
            tasks = [t for t in tasks if t.project_id == project_id]
        return tasks

    async def get_task(self, task_id: int) -> Task | None:
        task = self._tasks.get(task_id)
        return task.model_copy(deep=True) if task else None

    async def create_task(self, draft: TaskDraft) -> Task:
        data = draft.model_dump()
        data["status"] = data["status"] or STATUS_PENDING
        task = Task(id=self._next_id, **data)
        self._next_id += 1
        self._tasks[task.id] = task
        logger.debug("Created task %d in memory", task.id)
        return task.model_copy(deep=True)

    async def update_task(self, task: Task) -> Task:
        self._require(task.id)
        self._tasks[task.id] = task.model_copy(deep=True)
        return task.model_copy(deep=True)

    async def update_task_status(self, task_id: int, status: str) -> Task:
        current = self._require(task_id)
        updated = current.model_copy(update={"status": status})
        self._tasks[task_id] = updated
        return updated.model_copy(deep=True)

    async def delete_task(self, task_id: int) -> None:
        self._require(task_id)
        del self._tasks[task_id]

    def _require(self, task_id: int) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found")
        return task


class InMemoryTimeEntryRepository:
    """Time entry collaborator backed by a list."""

    def __init__(self) -> None:
        self._entries: list[TimeEntry] = []

    @property
    def entries(self) -> list[TimeEntry]:
        return list(self._entries)

    async def create_time_entry(self, draft: TimeEntryDraft) -> TimeEntry:
        entry = TimeEntry.from_draft(len(self._entries) + 1, draft)
        self._entries.append(entry)
        return entry

    async def list_time_entries(
        self, project_id: int | None = None, task_id: int | None = None
    ) -> list[TimeEntry]:
        entries = self._entries
        if project_id is not None:
            entries = [e for e in entries if e.project_id == project_id]
        if task_id is not None:
            entries = [e for e in entries if e.task_id == task_id]
        return list(entries)
