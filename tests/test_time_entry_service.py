"""Tests for TimeEntryService."""

import asyncio
import json
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from flowdesk.errors import RemoteError
from flowdesk.models import NotificationLevel, StoppedTimer, TimeEntryDraft
from flowdesk.repositories import InMemoryTimeEntryRepository, MemoryStore
from flowdesk.services import TimeEntryService
from flowdesk.services.time_entry_service import PENDING_ENTRIES_KEY


@pytest.fixture
def entries() -> InMemoryTimeEntryRepository:
    return InMemoryTimeEntryRepository()


@pytest.fixture
def recorder(entries, notifications, store) -> TimeEntryService:
    return TimeEntryService(entries, notifications, store)


def record(recorder: TimeEntryService, clock, duration: int = 65):
    start = clock.now
    return asyncio.run(
        recorder.record(3, 1, start, start + timedelta(seconds=duration), duration)
    )


class TestTimeEntryServiceRecord:
    """Tests for storing entries."""

    def test_record_stores_entry(self, recorder, entries, notifications, clock):
        entry = record(recorder, clock)

        assert entry is not None
        assert entry.task_id == 3
        assert entry.project_id == 1
        assert entry.duration == 65
        assert (entry.end_time - entry.start_time).total_seconds() == 65
        assert entries.entries == [entry]
        assert notifications.history[-1].level == NotificationLevel.SUCCESS
        assert "1m" in notifications.history[-1].message

    def test_record_stopped_timer(self, recorder, clock):
        stopped = StoppedTimer(
            task_id=7,
            start_time=clock.now,
            end_time=clock.now + timedelta(seconds=3600),
            duration=3600,
        )

        entry = asyncio.run(recorder.record_stopped(stopped, project_id=2))

        assert entry.task_id == 7
        assert entry.project_id == 2
        assert entry.duration == 3600

    def test_failure_buffers_and_reports(self, recorder, entries, notifications, store, clock):
        """A failed entry is reported and kept, not silently lost."""
        entries.create_time_entry = AsyncMock(side_effect=RemoteError("HTTP 503"))

        entry = record(recorder, clock)

        assert entry is None
        assert [d.duration for d in recorder.pending] == [65]
        errors = [n for n in notifications.history if n.level == NotificationLevel.ERROR]
        assert len(errors) == 1
        assert "kept" in errors[0].message
        assert errors[0].task_id == 3
        persisted = json.loads(store.data[PENDING_ENTRIES_KEY])
        assert persisted[0]["duration"] == 65


class TestTimeEntryServiceRetry:
    """Tests for resubmitting unsent entries."""

    def test_retry_pending_success(self, recorder, entries, notifications, store, clock):
        create = entries.create_time_entry
        entries.create_time_entry = AsyncMock(side_effect=RemoteError("offline"))
        record(recorder, clock)
        entries.create_time_entry = create

        saved = asyncio.run(recorder.retry_pending())

        assert [e.duration for e in saved] == [65]
        assert recorder.pending == []
        assert json.loads(store.data[PENDING_ENTRIES_KEY]) == []
        assert notifications.history[-1].level == NotificationLevel.SUCCESS

    def test_retry_pending_still_failing(self, recorder, entries, notifications, clock):
        entries.create_time_entry = AsyncMock(side_effect=RemoteError("offline"))
        record(recorder, clock)

        saved = asyncio.run(recorder.retry_pending())

        assert saved == []
        assert len(recorder.pending) == 1
        assert notifications.history[-1].message == "1 time entries are still unsent"

    def test_retry_with_nothing_pending(self, recorder, notifications):
        assert asyncio.run(recorder.retry_pending()) == []
        assert notifications.history == []


class TestTimeEntryServiceRestore:
    """Tests for reloading unsent entries."""

    def test_restore_from_store(self, entries, notifications, clock):
        draft = TimeEntryDraft(
            task_id=3,
            project_id=1,
            start_time=clock.now,
            end_time=clock.now + timedelta(seconds=90),
            duration=90,
        )
        store = MemoryStore({PENDING_ENTRIES_KEY: json.dumps([draft.model_dump(mode="json")])})
        recorder = TimeEntryService(entries, notifications, store)

        assert recorder.restore() == 1
        assert recorder.pending == [draft]

    def test_restore_skips_corrupt(self, entries, notifications):
        store = MemoryStore({PENDING_ENTRIES_KEY: json.dumps([{"task_id": "x"}])})
        recorder = TimeEntryService(entries, notifications, store)

        assert recorder.restore() == 0

    def test_restore_without_store(self, entries, notifications):
        assert TimeEntryService(entries, notifications).restore() == 0
