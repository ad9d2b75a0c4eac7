"""ToDo data model for TooDoo."""

from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional
from pydantic import BaseModel, Field, field_validator


class ToDoStatus(str, Enum):
    """Derived to-do status.

    Computed from the `completed` and `trashed` flags; a trashed to-do is
    TRASHED whether or not it was completed.
    """
    ACTIVE = "active"
    COMPLETED = "completed"
    TRASHED = "trashed"

    @classmethod
    def from_flags(cls, completed: bool, trashed: bool) -> "ToDoStatus":
        if trashed:
            return cls.TRASHED
        if completed:
            return cls.COMPLETED
        return cls.ACTIVE


class ToDo(BaseModel):
    """A unit of work owned by exactly one category."""

    ENTITY_KIND: ClassVar[str] = "ToDo"

    id: str = Field(..., frozen=True, description="Unique to-do identifier (UUID v4), assigned once")
    goal: str = Field(..., description="What needs doing")
    category_id: str = Field(..., min_length=1, description="Owning category ID (required)")
    created_at: datetime = Field(..., description="To-do creation timestamp")
    updated_at: datetime = Field(..., description="To-do last update timestamp")
    remind_at: Optional[datetime] = Field(None, description="When to fire the due reminder")
    completed: bool = Field(False, description="Whether the to-do is done")
    completed_at: Optional[datetime] = Field(None, description="Completion timestamp")
    trashed: bool = Field(False, description="Soft-delete flag")
    trashed_at: Optional[datetime] = Field(None, description="Moved-to-trash timestamp")

    class Config:
        """Pydantic configuration."""
        validate_assignment = True

    @field_validator("remind_at")
    @classmethod
    def _local_remind_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Store remind times as naive local wall-clock time."""
        if value is not None and value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    @property
    def status(self) -> ToDoStatus:
        return ToDoStatus.from_flags(self.completed, self.trashed)

    @property
    def is_valid(self) -> bool:
        """Active: neither completed nor moved to trash."""
        return self.status == ToDoStatus.ACTIVE

    @property
    def is_reminder_eligible(self) -> bool:
        return self.remind_at is not None and self.is_valid
