"""Service for board state management."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..models import BoardConfig, Task
from ..repositories import TaskRepositoryProtocol

if TYPE_CHECKING:
    from .config_service import ConfigService

logger = logging.getLogger(__name__)


class BoardService:
    """
    Holds the in-memory task list the board renders.

    Task status is only ever written through apply_status() and
    revert_status(); everything else reads.
    """

    def __init__(
        self,
        repository: TaskRepositoryProtocol,
        config_service: ConfigService | None = None,
    ) -> None:
        self.repository = repository
        self._config_service = config_service
        self._tasks: list[Task] = []
        self._project_id: int | None = None
        self._issued_loads = 0
        self._applied_load = 0

    def _get_board_config(self) -> BoardConfig:
        """Get board config, using default if no config service."""
        if self._config_service:
            return self._config_service.get_board_config()
        return BoardConfig.default()

    @property
    def project_id(self) -> int | None:
        """Project the current task list is scoped to (None = all)."""
        return self._project_id

    @property
    def tasks(self) -> list[Task]:
        return [t.model_copy() for t in self._tasks]

    def get_task(self, task_id: int) -> Task | None:
        task = self._find(task_id)
        return task.model_copy() if task else None

    async def load(self, project_id: int | None = None) -> list[Task]:
        """
        Replace the task list with a fresh fetch from the repository.

        Overlapping loads resolve by request order: when an older request
        finishes after a newer one has been applied, its result is dropped.
        """
        self._issued_loads += 1
        load_id = self._issued_loads

        tasks = await self.repository.list_tasks(project_id)

        if load_id < self._applied_load:
            logger.debug(
                "Dropping stale board load #%d (already applied #%d)",
                load_id,
                self._applied_load,
            )
            return self.tasks

        config = self._get_board_config()
        loaded: list[Task] = []
        for task in tasks:
            task = task.model_copy()
            task.status = config.resolve_status(task.status)
            loaded.append(task)

        self._applied_load = load_id
        self._tasks = loaded
        self._project_id = project_id
        logger.info("Board loaded: %d tasks (project=%s)", len(loaded), project_id)
        return self.tasks

    def by_column(self, statuses: Iterable[str] | None = None) -> dict[str, list[Task]]:
        """
        Group tasks by status, one entry per requested status.

        Order within a column is fetch order. Tasks whose status is not
        requested are left out.
        """
        if statuses is None:
            statuses = self._get_board_config().column_ids

        columns: dict[str, list[Task]] = {status: [] for status in statuses}
        for task in self._tasks:
            column = columns.get(task.status)
            if column is not None:
                column.append(task.model_copy())
        return columns

    def apply_status(self, task_id: int, new_status: str) -> str | None:
        """
        Set a task's status locally, ahead of remote confirmation.

        Returns:
            The status the task had before, or None if it is not on the board.
        """
        task = self._find(task_id)
        if task is None:
            logger.debug("apply_status: task not on board: %d", task_id)
            return None

        previous = task.status
        task.status = new_status
        logger.debug("Task %d status %s -> %s (optimistic)", task_id, previous, new_status)
        return previous

    def revert_status(self, task_id: int, previous_status: str) -> bool:
        """
        Restore a task's status after a rejected change.

        Returns False when the task has left the board in the meantime.
        """
        task = self._find(task_id)
        if task is None:
            logger.debug("revert_status: task no longer on board: %d", task_id)
            return False

        logger.info("Task %d status reverted %s -> %s", task_id, task.status, previous_status)
        task.status = previous_status
        return True

    def _find(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None
