"""Shared fixtures for flowdesk tests."""

from datetime import UTC, datetime, timedelta

import pytest

from flowdesk.models import Task
from flowdesk.repositories import InMemoryTaskRepository, MemoryStore
from flowdesk.services import BoardService, NotificationService


class FakeClock:
    """Controllable replacement for now_utc()."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at a fixed instant until advanced."""
    return FakeClock(datetime(2024, 1, 15, 9, 0, 0, tzinfo=UTC))


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def notifications() -> NotificationService:
    return NotificationService()


@pytest.fixture
def sample_tasks() -> list[Task]:
    """A small project board across all default columns."""
    return [
        Task(id=3, title="Design Homepage", status="pending", priority="high", project_id=1),
        Task(id=7, title="API Integration", status="pending", project_id=1),
        Task(id=8, title="Payment Flow", status="in_progress", project_id=1),
        Task(id=9, title="User Testing", status="completed", priority="low", project_id=2),
    ]


@pytest.fixture
def task_repo(sample_tasks: list[Task]) -> InMemoryTaskRepository:
    return InMemoryTaskRepository(sample_tasks)


@pytest.fixture
def board(task_repo: InMemoryTaskRepository) -> BoardService:
    return BoardService(task_repo)
