"""Time entry models."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class TimeEntryDraft(BaseModel):
    """A completed timing session that has not been stored yet."""

    model_config = {"frozen": True}

    task_id: int
    project_id: int | None = None
    start_time: datetime
    end_time: datetime
    duration: int = Field(..., ge=0, description="Whole seconds")

    @model_validator(mode="after")
    def validate_span(self) -> "TimeEntryDraft":
        """End must not precede start."""
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be earlier than start_time")
        return self


class TimeEntry(TimeEntryDraft):
    """An immutable record of one completed timing session."""

    id: int

    @classmethod
    def from_draft(cls, entry_id: int, draft: TimeEntryDraft) -> "TimeEntry":
        """Attach a storage ID to a draft."""
        return cls(id=entry_id, **draft.model_dump())
