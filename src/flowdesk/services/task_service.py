"""Service for task CRUD operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import NotFoundError, RemoteError
from ..models import BoardConfig, Task, TaskDraft
from ..repositories import TaskRepositoryProtocol
from .board_service import BoardService
from .notification_service import NotificationService

if TYPE_CHECKING:
    from .config_service import ConfigService
    from .tracking_service import TimeTrackingService

logger = logging.getLogger(__name__)


class TaskService:
    """
    Create, edit and delete tasks from the task form.

    Each action reports its result as a notification and, on success,
    reloads the board so it reflects the backend.
    """

    def __init__(
        self,
        repository: TaskRepositoryProtocol,
        board: BoardService,
        notifications: NotificationService,
        config_service: ConfigService | None = None,
        tracking: TimeTrackingService | None = None,
    ) -> None:
        self.repository = repository
        self.board = board
        self.notifications = notifications
        self._config_service = config_service
        self._tracking = tracking

    def _get_board_config(self) -> BoardConfig:
        """Get board config, using default if no config service."""
        if self._config_service:
            return self._config_service.get_board_config()
        return BoardConfig.default()

    def _normalize(self, status: str | None, priority: str) -> tuple[str, str]:
        """Resolve aliases; a missing status means the first column."""
        config = self._get_board_config()
        resolved_status = config.resolve_status(status) if status else config.first_column
        return resolved_status, config.resolve_priority(priority)

    async def create_task(self, draft: TaskDraft) -> Task | None:
        """Create a task; returns None if the backend refused."""
        status, priority = self._normalize(draft.status, draft.priority)
        draft = draft.model_copy(update={"status": status, "priority": priority})

        try:
            task = await self.repository.create_task(draft)
        except RemoteError as e:
            logger.error("Failed to create task %r: %s", draft.title, e)
            self.notifications.error("Failed to create task. Please try again.")
            return None

        logger.info("Task created: %d (status=%s)", task.id, task.status)
        self.notifications.success("Task created successfully!", task.id)
        await self._refresh_board()
        return task

    async def update_task(self, task: Task) -> Task | None:
        """Save an edited task; returns None if the backend refused."""
        status, priority = self._normalize(task.status, task.priority)
        task = task.model_copy(update={"status": status, "priority": priority})

        try:
            updated = await self.repository.update_task(task)
        except NotFoundError as e:
            logger.warning("Task %d vanished before update: %s", task.id, e)
            self.notifications.error("This task no longer exists.", task.id)
            await self._refresh_board()
            return None
        except RemoteError as e:
            logger.error("Failed to update task %d: %s", task.id, e)
            self.notifications.error("Failed to update task. Please try again.", task.id)
            return None

        logger.info("Task updated: %d", updated.id)
        self.notifications.success("Task updated successfully!", updated.id)
        await self._refresh_board()
        return updated

    async def delete_task(self, task_id: int) -> bool:
        """
        Delete a task.

        A running timer on the task is stopped and recorded first. Existing
        time entries for the task are left in place.
        """
        if self._tracking and self._tracking.timers.is_active(task_id):
            logger.info("Stopping timer before deleting task %d", task_id)
            await self._tracking.stop_timer(task_id)

        try:
            await self.repository.delete_task(task_id)
        except NotFoundError:
            logger.info("Task %d was already deleted", task_id)
        except RemoteError as e:
            logger.error("Failed to delete task %d: %s", task_id, e)
            self.notifications.error("Failed to delete task. Please try again.", task_id)
            return False

        logger.info("Task deleted: %d", task_id)
        self.notifications.success("Task deleted successfully!", task_id)
        await self._refresh_board()
        return True

    async def _refresh_board(self) -> None:
        try:
            await self.board.load(self.board.project_id)
        except RemoteError as e:
            logger.warning("Board refresh failed: %s", e)
            self.notifications.warning("Could not refresh the board.")
