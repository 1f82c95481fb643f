"""Data models."""

from .board_config import BoardConfig, ColumnConfig, FlowdeskConfig, PriorityConfig
from .drop import (
    DragGesture,
    DropOutcome,
    DropPhase,
    DropResult,
    DropTransaction,
    InvalidTransitionError,
)
from .notification import Notification, NotificationLevel
from .task import (
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_PENDING,
    STATUS_REVIEW,
    Task,
    TaskDraft,
)
from .time_entry import TimeEntry, TimeEntryDraft
from .timer import StoppedTimer, TimerState

__all__ = [
    "STATUS_COMPLETED",
    "STATUS_IN_PROGRESS",
    "STATUS_PENDING",
    "STATUS_REVIEW",
    "BoardConfig",
    "ColumnConfig",
    "DragGesture",
    "DropOutcome",
    "DropPhase",
    "DropResult",
    "DropTransaction",
    "FlowdeskConfig",
    "InvalidTransitionError",
    "Notification",
    "NotificationLevel",
    "PriorityConfig",
    "StoppedTimer",
    "Task",
    "TaskDraft",
    "TimeEntry",
    "TimeEntryDraft",
    "TimerState",
]
