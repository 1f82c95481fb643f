"""Tests for TaskService."""

import asyncio
from datetime import date
from unittest.mock import AsyncMock

import pytest

from flowdesk.errors import NotFoundError, RemoteError
from flowdesk.models import NotificationLevel, TaskDraft
from flowdesk.repositories import InMemoryTimeEntryRepository
from flowdesk.services import (
    TaskService,
    TimeEntryService,
    TimerService,
    TimeTrackingService,
)


@pytest.fixture
def entries() -> InMemoryTimeEntryRepository:
    return InMemoryTimeEntryRepository()


@pytest.fixture
def tracking(store, clock, entries, board, task_repo, notifications) -> TimeTrackingService:
    timers = TimerService(store, clock=clock)
    recorder = TimeEntryService(entries, notifications)
    return TimeTrackingService(timers, recorder, board, task_repo, notifications)


@pytest.fixture
def task_service(task_repo, board, notifications, tracking) -> TaskService:
    asyncio.run(board.load(project_id=1))
    return TaskService(task_repo, board, notifications, tracking=tracking)


def last(notifications):
    return notifications.history[-1]


class TestTaskServiceCreate:
    """Tests for task creation."""

    def test_create_defaults_to_first_column(self, task_service, board, notifications):
        task = asyncio.run(
            task_service.create_task(
                TaskDraft(title="Write Docs", project_id=1, due_date=date(2024, 2, 1))
            )
        )

        assert task.id == 10
        assert task.status == "pending"
        assert task.due_date == date(2024, 2, 1)
        assert last(notifications).level == NotificationLevel.SUCCESS
        assert 10 in [t.id for t in board.by_column()["pending"]]

    def test_create_resolves_aliases(self, task_service):
        task = asyncio.run(
            task_service.create_task(
                TaskDraft(title="Ship It", status="In Progress", priority="urgent")
            )
        )

        assert task.status == "in_progress"
        assert task.priority == "high"

    def test_create_failure_notifies(self, task_service, task_repo, notifications):
        task_repo.create_task = AsyncMock(side_effect=RemoteError("HTTP 500"))

        result = asyncio.run(task_service.create_task(TaskDraft(title="Nope")))

        assert result is None
        assert last(notifications).level == NotificationLevel.ERROR
        assert last(notifications).message == "Failed to create task. Please try again."


class TestTaskServiceUpdate:
    """Tests for editing tasks."""

    def test_update_task(self, task_service, board, notifications):
        task = board.get_task(7)
        task.title = "API Integration v2"
        task.status = "review"

        updated = asyncio.run(task_service.update_task(task))

        assert updated.title == "API Integration v2"
        assert board.get_task(7).status == "review"
        assert last(notifications).message == "Task updated successfully!"

    def test_update_missing_task(self, task_service, board, task_repo, notifications):
        task = board.get_task(7)
        asyncio.run(task_repo.delete_task(7))

        result = asyncio.run(task_service.update_task(task))

        assert result is None
        assert last(notifications).message == "This task no longer exists."
        assert board.get_task(7) is None

    def test_update_remote_failure(self, task_service, board, task_repo, notifications):
        task_repo.update_task = AsyncMock(side_effect=RemoteError("timeout"))

        result = asyncio.run(task_service.update_task(board.get_task(7)))

        assert result is None
        assert last(notifications).message == "Failed to update task. Please try again."


class TestTaskServiceDelete:
    """Tests for deleting tasks."""

    def test_delete_task(self, task_service, board, notifications):
        assert asyncio.run(task_service.delete_task(7))

        assert board.get_task(7) is None
        assert last(notifications).message == "Task deleted successfully!"

    def test_delete_already_gone(self, task_service, task_repo):
        asyncio.run(task_repo.delete_task(7))

        assert asyncio.run(task_service.delete_task(7))

    def test_delete_failure(self, task_service, task_repo, board, notifications):
        task_repo.delete_task = AsyncMock(side_effect=RemoteError("HTTP 502"))

        assert not asyncio.run(task_service.delete_task(7))
        assert board.get_task(7) is not None
        assert last(notifications).level == NotificationLevel.ERROR

    def test_delete_stops_running_timer(self, task_service, tracking, entries, clock):
        """The running session is recorded before the task goes away."""
        tracking.start_timer(7)
        clock.advance(90)

        asyncio.run(task_service.delete_task(7))

        assert not tracking.timers.is_active(7)
        assert [e.duration for e in entries.entries] == [90]

    def test_delete_keeps_time_entries(self, task_service, tracking, entries, clock):
        """Historical entries for a deleted task are orphaned, not removed."""
        tracking.start_timer(7)
        clock.advance(30)
        asyncio.run(tracking.stop_timer(7))

        asyncio.run(task_service.delete_task(7))

        assert len(asyncio.run(entries.list_time_entries(task_id=7))) == 1

    def test_refresh_failure_warns(self, task_service, task_repo, notifications):
        task_repo.list_tasks = AsyncMock(side_effect=NotFoundError("project gone"))

        asyncio.run(task_service.delete_task(7))

        assert last(notifications).level == NotificationLevel.WARNING
