"""Timer state models."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

from ..utils.datetime import floor_seconds


class TimerState(BaseModel):
    """Running timer for a single task."""

    task_id: int
    is_active: bool = True
    start_time: datetime
    elapsed_time: int = Field(default=0, ge=0, description="Whole seconds since start_time")

    @field_validator("start_time")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Read a start time without an offset as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    def recompute(self, now: datetime) -> int:
        """Refresh elapsed_time against the clock and return it."""
        self.elapsed_time = floor_seconds(self.start_time, now)
        return self.elapsed_time


class StoppedTimer(BaseModel):
    """Result of stopping a timer, ready to become a time entry."""

    model_config = {"frozen": True}

    task_id: int
    start_time: datetime
    end_time: datetime
    duration: int = Field(..., ge=0)
