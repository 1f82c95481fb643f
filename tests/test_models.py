"""Tests for data models."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from flowdesk.models import (
    BoardConfig,
    ColumnConfig,
    DragGesture,
    DropPhase,
    DropTransaction,
    InvalidTransitionError,
    TimeEntry,
    TimeEntryDraft,
)


class TestBoardConfig:
    """Tests for column configuration."""

    def test_default_columns(self):
        config = BoardConfig.default()

        assert config.column_ids == ["pending", "in_progress", "review", "completed"]
        assert config.first_column == "pending"
        assert config.final_column == "completed"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("in_progress", "in_progress"),
            ("In Progress", "in_progress"),
            ("in-progress", "in_progress"),
            ("inprogress", "in_progress"),
            ("Completed", "completed"),
            ("done", "completed"),
            ("icebox", "icebox"),
        ],
    )
    def test_resolve_status(self, value, expected):
        assert BoardConfig.default().resolve_status(value) == expected

    def test_is_valid_status(self):
        config = BoardConfig.default()

        assert config.is_valid_status("Review")
        assert not config.is_valid_status("icebox")

    def test_resolve_priority(self):
        config = BoardConfig.default()

        assert config.resolve_priority("High") == "high"
        assert config.resolve_priority("urgent") == "high"

    def test_get_title(self):
        config = BoardConfig.default()

        assert config.get_title("in_progress") == "In Progress"
        assert config.get_title("on_hold") == "On Hold"

    def test_rejects_duplicate_ids(self):
        with pytest.raises(ValidationError, match="unique"):
            BoardConfig(
                columns=[ColumnConfig(id="a", title="A"), ColumnConfig(id="a", title="B")]
            )

    def test_rejects_alias_shadowing_id(self):
        with pytest.raises(ValidationError, match="conflicts"):
            BoardConfig(
                columns=[
                    ColumnConfig(id="a", title="A"),
                    ColumnConfig(id="b", title="B", status_alias=["a"]),
                ]
            )

    def test_rejects_single_column(self):
        with pytest.raises(ValidationError):
            BoardConfig(columns=[ColumnConfig(id="a", title="A")])

    @pytest.mark.parametrize("bad_id", ["InProgress", "1st", "in-progress", ""])
    def test_rejects_bad_column_ids(self, bad_id):
        with pytest.raises(ValidationError):
            ColumnConfig(id=bad_id, title="X")


class TestTimeEntry:
    def test_end_before_start_rejected(self, clock):
        with pytest.raises(ValidationError):
            TimeEntryDraft(
                task_id=1,
                start_time=clock.now,
                end_time=clock.now - timedelta(seconds=1),
                duration=0,
            )

    def test_negative_duration_rejected(self, clock):
        with pytest.raises(ValidationError):
            TimeEntryDraft(task_id=1, start_time=clock.now, end_time=clock.now, duration=-1)

    def test_from_draft(self, clock):
        draft = TimeEntryDraft(
            task_id=1,
            project_id=2,
            start_time=clock.now,
            end_time=clock.now + timedelta(seconds=5),
            duration=5,
        )

        entry = TimeEntry.from_draft(9, draft)

        assert entry.id == 9
        assert entry.duration == 5

    def test_entries_are_immutable(self, clock):
        entry = TimeEntry(
            id=1, task_id=1, start_time=clock.now, end_time=clock.now, duration=0
        )

        with pytest.raises(ValidationError):
            entry.duration = 10


class TestDragGesture:
    def test_same_column_is_noop(self):
        assert DragGesture(task_id=1, source_column="a", dest_column="a").is_noop

    def test_no_destination_is_noop(self):
        assert DragGesture(task_id=1, source_column="a").is_noop

    def test_move_is_not_noop(self):
        assert not DragGesture(task_id=1, source_column="a", dest_column="b").is_noop


class TestDropTransaction:
    """The optimistic change moves through exactly one terminal phase."""

    @pytest.fixture
    def transaction(self) -> DropTransaction:
        return DropTransaction(DragGesture(task_id=7, source_column="pending", dest_column="review"))

    def test_confirm_path(self, transaction):
        transaction.begin("pending")
        transaction.confirm()

        assert transaction.phase == DropPhase.CONFIRMED
        assert transaction.is_terminal

    def test_rollback_returns_pre_drag_status(self, transaction):
        transaction.begin("pending")
        error = RuntimeError("boom")

        assert transaction.roll_back(error) == "pending"
        assert transaction.phase == DropPhase.ROLLED_BACK
        assert transaction.error is error

    def test_cannot_confirm_before_begin(self, transaction):
        with pytest.raises(InvalidTransitionError):
            transaction.confirm()

    def test_cannot_roll_back_after_confirm(self, transaction):
        transaction.begin("pending")
        transaction.confirm()

        with pytest.raises(InvalidTransitionError):
            transaction.roll_back(RuntimeError("late"))

    def test_cannot_begin_twice(self, transaction):
        transaction.begin("pending")

        with pytest.raises(InvalidTransitionError):
            transaction.begin("review")
