"""Service recording stopped timers as time entries."""

from __future__ import annotations

import json
import logging
from datetime import datetime

from pydantic import ValidationError

from ..errors import PersistenceError, RemoteError
from ..models import StoppedTimer, TimeEntry, TimeEntryDraft
from ..repositories import KeyValueStoreProtocol, TimeEntryRepositoryProtocol
from ..utils import format_duration
from .notification_service import NotificationService

logger = logging.getLogger(__name__)

PENDING_ENTRIES_KEY = "flowdesk.pending_time_entries"


class TimeEntryService:
    """
    Persists finished timing sessions through the time entry collaborator.

    A draft the backend refuses is kept in an unsent buffer (mirrored to
    the key-value store) until retry_pending() gets it stored.
    """

    def __init__(
        self,
        repository: TimeEntryRepositoryProtocol,
        notifications: NotificationService,
        store: KeyValueStoreProtocol | None = None,
    ) -> None:
        self.repository = repository
        self.notifications = notifications
        self._store = store
        self._pending: list[TimeEntryDraft] = []

    @property
    def pending(self) -> list[TimeEntryDraft]:
        """Drafts that still need to reach the backend."""
        return list(self._pending)

    async def record(
        self,
        task_id: int,
        project_id: int | None,
        start_time: datetime,
        end_time: datetime,
        duration: int,
    ) -> TimeEntry | None:
        """Store one time entry.

        Returns the stored entry, or None when the backend failed and the
        draft was buffered for retry.
        """
        draft = TimeEntryDraft(
            task_id=task_id,
            project_id=project_id,
            start_time=start_time,
            end_time=end_time,
            duration=duration,
        )
        entry = await self._submit(draft)
        if entry is None:
            self._buffer(draft)
            self.notifications.error(
                f"Could not save {format_duration(duration)} tracked on task {task_id}. "
                "It was kept and will be retried.",
                task_id=task_id,
            )
            return None

        self.notifications.success(
            f"Logged {format_duration(duration)} on task {task_id}", task_id=task_id
        )
        return entry

    async def record_stopped(
        self, stopped: StoppedTimer, project_id: int | None
    ) -> TimeEntry | None:
        """Record the span returned by TimerService.stop()."""
        return await self.record(
            stopped.task_id,
            project_id,
            stopped.start_time,
            stopped.end_time,
            stopped.duration,
        )

    async def retry_pending(self) -> list[TimeEntry]:
        """Resubmit every buffered draft; failures stay buffered."""
        if not self._pending:
            return []

        drafts, self._pending = self._pending, []
        saved: list[TimeEntry] = []
        for draft in drafts:
            entry = await self._submit(draft)
            if entry is None:
                self._pending.append(draft)
            else:
                saved.append(entry)
        self._persist()

        if saved:
            self.notifications.success(f"Saved {len(saved)} pending time entries")
        if self._pending:
            self.notifications.error(f"{len(self._pending)} time entries are still unsent")
        return saved

    def restore(self) -> int:
        """Load drafts buffered by a previous session; returns how many."""
        if self._store is None:
            return 0
        try:
            raw = self._store.get(PENDING_ENTRIES_KEY)
        except PersistenceError as e:
            logger.warning("Could not read unsent time entries: %s", e)
            return 0
        if not raw:
            return 0

        try:
            records = json.loads(raw)
        except ValueError as e:
            logger.warning("Discarding unreadable unsent entries: %s", e)
            return 0
        if not isinstance(records, list):
            logger.warning("Discarding unsent entries of type %s", type(records).__name__)
            return 0

        count = 0
        for record in records:
            try:
                draft = TimeEntryDraft.model_validate(record)
            except ValidationError as e:
                logger.warning("Skipping corrupt unsent entry: %s", e)
                continue
            if draft not in self._pending:
                self._pending.append(draft)
                count += 1
        if count:
            logger.info("Restored %d unsent time entries", count)
        return count

    async def _submit(self, draft: TimeEntryDraft) -> TimeEntry | None:
        try:
            entry = await self.repository.create_time_entry(draft)
        except RemoteError as e:
            logger.error(
                "Time entry for task %d (%ds) not stored: %s", draft.task_id, draft.duration, e
            )
            return None
        logger.info(
            "Time entry %d stored: task %d, %ds", entry.id, entry.task_id, entry.duration
        )
        return entry

    def _buffer(self, draft: TimeEntryDraft) -> None:
        self._pending.append(draft)
        self._persist()

    def _persist(self) -> None:
        if self._store is None:
            return
        payload = json.dumps([d.model_dump(mode="json") for d in self._pending])
        try:
            self._store.set(PENDING_ENTRIES_KEY, payload)
        except PersistenceError as e:
            logger.warning("Could not persist unsent time entries: %s", e)
