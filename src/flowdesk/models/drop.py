"""Drag-and-drop gesture and transaction models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class DropPhase(str, Enum):
    """Lifecycle of one drop gesture."""

    IDLE = "idle"
    OPTIMISTIC = "optimistic"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


class DropOutcome(str, Enum):
    """How a gesture finished, as reported to the caller."""

    IGNORED = "ignored"  # Same column, no destination, or unknown target
    REJECTED = "rejected"  # Another drop for the task is still reconciling
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


class DragGesture(BaseModel):
    """A drop event from the board: task dragged from one column to another."""

    model_config = {"frozen": True}

    task_id: int
    source_column: str | None = None
    dest_column: str | None = None

    @property
    def is_noop(self) -> bool:
        """True when the drop needs no status change."""
        return self.dest_column is None or self.dest_column == self.source_column


class InvalidTransitionError(Exception):
    """A drop transaction was driven out of order."""

    pass


class DropTransaction:
    """
    Optimistic status change for a single task.

    Moves IDLE -> OPTIMISTIC -> CONFIRMED | ROLLED_BACK. The status captured
    when the optimistic change is applied is the one restored on rollback.
    """

    def __init__(self, gesture: DragGesture) -> None:
        self.gesture = gesture
        self.phase = DropPhase.IDLE
        self.previous_status = ""
        self.error: Exception | None = None

    @property
    def is_terminal(self) -> bool:
        return self.phase in (DropPhase.CONFIRMED, DropPhase.ROLLED_BACK)

    def begin(self, previous_status: str) -> None:
        """Record the pre-drag status and enter OPTIMISTIC."""
        self._require(DropPhase.IDLE)
        self.previous_status = previous_status
        self.phase = DropPhase.OPTIMISTIC

    def confirm(self) -> None:
        """The backend accepted the new status."""
        self._require(DropPhase.OPTIMISTIC)
        self.phase = DropPhase.CONFIRMED

    def roll_back(self, error: Exception) -> str:
        """The backend refused; returns the status to restore."""
        self._require(DropPhase.OPTIMISTIC)
        self.error = error
        self.phase = DropPhase.ROLLED_BACK
        return self.previous_status

    def _require(self, phase: DropPhase) -> None:
        if self.phase != phase:
            raise InvalidTransitionError(
                f"Drop for task {self.gesture.task_id} is {self.phase.value}, "
                f"expected {phase.value}"
            )


class DropResult(BaseModel):
    """Outcome of a handled gesture."""

    model_config = {"frozen": True}

    gesture: DragGesture
    outcome: DropOutcome
    status: str | None = None  # Status the board shows after the gesture
    error: str | None = None
