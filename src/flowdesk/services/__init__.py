"""Service layer for business logic."""

from .board_service import BoardService
from .config_service import ConfigService
from .drag_drop_service import DragDropService
from .notification_service import NotificationService
from .report_service import ReportService
from .task_service import TaskService
from .time_entry_service import TimeEntryService
from .timer_service import TimerService
from .tracking_service import TimeTrackingService

__all__ = [
    "BoardService",
    "ConfigService",
    "DragDropService",
    "NotificationService",
    "ReportService",
    "TaskService",
    "TimeEntryService",
    "TimeTrackingService",
    "TimerService",
]
