"""Domain models for tasks."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


@dataclass(frozen=True)
class TaskRecord:
    """Task row owned by a user."""

    id: UUID
    user_id: UUID
    title: str
    description: str | None
    due_date: datetime | None
    is_completed: bool
    created_at: datetime | None


class TaskCreate(BaseModel):
    """Validated payload for a new task."""

    title: str = Field(min_length=1)
    description: str | None = None
    due_date: datetime | None = None
    is_completed: bool = False


class TaskUpdate(BaseModel):
    """Partial task changes."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    due_date: datetime | None = None
    is_completed: bool | None = None

    @field_validator("title", "is_completed")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("field cannot be null")
        return value
