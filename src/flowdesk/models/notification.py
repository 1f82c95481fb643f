"""User-facing notification model."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from ..utils.datetime import now_utc


class NotificationLevel(str, Enum):
    """Severity of a notification, mapped to toast styles by the UI shell."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    """A message for the surrounding UI to show as a toast."""

    model_config = {"frozen": True}

    level: NotificationLevel
    message: str
    task_id: int | None = None
    created: datetime = Field(default_factory=now_utc)
