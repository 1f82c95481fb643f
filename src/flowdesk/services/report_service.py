"""Service for time totals and project progress."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..models import BoardConfig, Task, TimeEntry
from ..repositories import TimeEntryRepositoryProtocol

if TYPE_CHECKING:
    from .config_service import ConfigService


class ReportService:
    """Additive totals over time entries and tasks."""

    def __init__(
        self,
        repository: TimeEntryRepositoryProtocol,
        config_service: ConfigService | None = None,
    ) -> None:
        self.repository = repository
        self._config_service = config_service

    def _get_board_config(self) -> BoardConfig:
        """Get board config, using default if no config service."""
        if self._config_service:
            return self._config_service.get_board_config()
        return BoardConfig.default()

    @staticmethod
    def total_duration(entries: Iterable[TimeEntry]) -> int:
        """Sum of entry durations in seconds."""
        return sum(entry.duration for entry in entries)

    async def project_time(self, project_id: int) -> int:
        """Seconds tracked against a project."""
        entries = await self.repository.list_time_entries(project_id=project_id)
        return self.total_duration(entries)

    async def task_time(self, task_id: int) -> int:
        """Seconds tracked against a task."""
        entries = await self.repository.list_time_entries(task_id=task_id)
        return self.total_duration(entries)

    def project_progress(self, tasks: Iterable[Task]) -> int:
        """Percentage of tasks in the final board column, rounded."""
        tasks = list(tasks)
        if not tasks:
            return 0
        final = self._get_board_config().final_column
        done = sum(1 for task in tasks if task.status == final)
        return round(done * 100 / len(tasks))
