"""Service wiring timers to time entry recording."""

from __future__ import annotations

import logging

from ..errors import AlreadyActiveError, NotActiveError, RemoteError
from ..models import TimeEntry, TimerState
from ..repositories import TaskRepositoryProtocol
from .board_service import BoardService
from .notification_service import NotificationService
from .time_entry_service import TimeEntryService
from .timer_service import TimerService

logger = logging.getLogger(__name__)


class TimeTrackingService:
    """Start/stop actions as the UI triggers them, with notifications."""

    def __init__(
        self,
        timers: TimerService,
        recorder: TimeEntryService,
        board: BoardService,
        repository: TaskRepositoryProtocol,
        notifications: NotificationService,
    ) -> None:
        self.timers = timers
        self.recorder = recorder
        self.board = board
        self.repository = repository
        self.notifications = notifications

    def start_timer(self, task_id: int) -> TimerState:
        """Start a timer for a task.

        Raises:
            AlreadyActiveError: the task already has a running timer
        """
        try:
            timer = self.timers.start(task_id)
        except AlreadyActiveError:
            self.notifications.warning("A timer is already running for this task", task_id)
            raise
        self.notifications.info("Timer started", task_id)
        return timer

    async def stop_timer(self, task_id: int) -> TimeEntry | None:
        """Stop a task's timer and record the session.

        Returns the stored entry, or None if recording failed (the session
        is then buffered by the recorder).

        Raises:
            NotActiveError: the task has no running timer
        """
        try:
            stopped = self.timers.stop(task_id)
        except NotActiveError:
            self.notifications.warning("No timer is running for this task", task_id)
            raise
        project_id = await self._project_for(task_id)
        return await self.recorder.record_stopped(stopped, project_id)

    async def _project_for(self, task_id: int) -> int | None:
        task = self.board.get_task(task_id)
        if task is not None:
            return task.project_id

        try:
            task = await self.repository.get_task(task_id)
        except RemoteError as e:
            logger.warning("Could not look up project for task %d: %s", task_id, e)
            return None
        return task.project_id if task else None
