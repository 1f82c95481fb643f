"""Task domain model."""

from datetime import date

from pydantic import BaseModel, Field

# Default workflow statuses (column IDs); the active set comes from flowdesk.yml
STATUS_PENDING = "pending"
STATUS_IN_PROGRESS = "in_progress"
STATUS_REVIEW = "review"
STATUS_COMPLETED = "completed"


class Task(BaseModel):
    """A unit of project work shown as a card on the board."""

    id: int
    title: str = Field(..., min_length=1)
    description: str | None = None
    status: str = STATUS_PENDING  # Column ID from the board config
    priority: str = "medium"
    due_date: date | None = None
    project_id: int | None = None
    tags: list[str] = Field(default_factory=list)


class TaskDraft(BaseModel):
    """Fields submitted by a task form before the backend assigns an ID."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    status: str | None = None  # None = first board column
    priority: str = "medium"
    due_date: date | None = None
    project_id: int | None = None
    tags: list[str] = Field(default_factory=list)
