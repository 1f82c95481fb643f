"""Service turning board drops into confirmed or rolled-back status changes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import NotFoundError, RemoteError
from ..models import BoardConfig, DragGesture, DropOutcome, DropResult, DropTransaction
from ..repositories import TaskRepositoryProtocol
from .board_service import BoardService
from .notification_service import NotificationService

if TYPE_CHECKING:
    from .config_service import ConfigService

logger = logging.getLogger(__name__)


class DragDropService:
    """
    Applies a drop optimistically, then reconciles with the backend.

    Only one drop per task is reconciled at a time; a second drop for a task
    whose previous drop is still in flight is rejected, not queued.
    """

    def __init__(
        self,
        board: BoardService,
        repository: TaskRepositoryProtocol,
        notifications: NotificationService,
        config_service: ConfigService | None = None,
    ) -> None:
        self.board = board
        self.repository = repository
        self.notifications = notifications
        self._config_service = config_service
        self._in_flight: dict[int, DropTransaction] = {}

    def _get_board_config(self) -> BoardConfig:
        """Get board config, using default if no config service."""
        if self._config_service:
            return self._config_service.get_board_config()
        return BoardConfig.default()

    @property
    def in_flight(self) -> set[int]:
        """IDs of tasks with an unreconciled drop."""
        return set(self._in_flight)

    async def move(
        self, task_id: int, source_column: str | None, dest_column: str | None
    ) -> DropResult:
        """Handle a drop described by its raw fields."""
        return await self.handle_drop(
            DragGesture(task_id=task_id, source_column=source_column, dest_column=dest_column)
        )

    async def handle_drop(self, gesture: DragGesture) -> DropResult:
        """Process one drop gesture end to end."""
        task_id = gesture.task_id

        if gesture.is_noop:
            logger.debug("Drop ignored for task %d: no column change", task_id)
            return self._ignored(gesture)

        if task_id in self._in_flight:
            logger.info("Drop rejected for task %d: previous move still pending", task_id)
            self.notifications.warning(
                "This task is still being moved. Try again in a moment.", task_id=task_id
            )
            return DropResult(
                gesture=gesture,
                outcome=DropOutcome.REJECTED,
                status=self._current_status(task_id),
            )

        config = self._get_board_config()
        dest = config.resolve_status(gesture.dest_column or "")
        if dest not in config.column_ids:
            logger.warning("Drop ignored for task %d: unknown column %r", task_id, dest)
            return self._ignored(gesture)

        task = self.board.get_task(task_id)
        if task is None:
            logger.debug("Drop ignored for task %d: not on board", task_id)
            return self._ignored(gesture)
        if task.status == dest:
            return self._ignored(gesture)
        if gesture.source_column and config.resolve_status(gesture.source_column) != task.status:
            logger.warning(
                "Drop for task %d claims source %r but board has %r",
                task_id,
                gesture.source_column,
                task.status,
            )

        transaction = DropTransaction(gesture)
        previous = self.board.apply_status(task_id, dest)
        if previous is None:
            return self._ignored(gesture)
        transaction.begin(previous)
        self._in_flight[task_id] = transaction

        try:
            try:
                stored = await self.repository.update_task_status(task_id, dest)
            except RemoteError as e:
                restored = transaction.roll_back(e)
                self.board.revert_status(task_id, restored)
                logger.warning(
                    "Move of task %d to %s rolled back to %s: %s", task_id, dest, restored, e
                )
                self.notifications.error(self._failure_message(task.title, e), task_id=task_id)
                return DropResult(
                    gesture=gesture,
                    outcome=DropOutcome.ROLLED_BACK,
                    status=restored,
                    error=str(e),
                )

            transaction.confirm()
            final = config.resolve_status(stored.status)
            if final != dest:
                logger.info("Backend stored task %d as %s instead of %s", task_id, final, dest)
            # Backend has the last word; a reload during the request may have
            # replaced the optimistic status
            self.board.apply_status(task_id, final)

            logger.info("Move of task %d confirmed: %s -> %s", task_id, previous, final)
            self.notifications.success(
                f'Moved "{task.title}" to {config.get_title(final)}', task_id=task_id
            )
            return DropResult(gesture=gesture, outcome=DropOutcome.CONFIRMED, status=final)
        finally:
            del self._in_flight[task_id]

    def _current_status(self, task_id: int) -> str | None:
        task = self.board.get_task(task_id)
        return task.status if task else None

    def _ignored(self, gesture: DragGesture) -> DropResult:
        return DropResult(
            gesture=gesture,
            outcome=DropOutcome.IGNORED,
            status=self._current_status(gesture.task_id),
        )

    @staticmethod
    def _failure_message(title: str, error: RemoteError) -> str:
        if isinstance(error, NotFoundError):
            return f'"{title}" no longer exists. It was moved back.'
        return f'Failed to move "{title}". It was moved back to its previous column.'
