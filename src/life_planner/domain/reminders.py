"""Domain models for reminders."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


@dataclass(frozen=True)
class ReminderRecord:
    """Reminder row owned by a user."""

    id: UUID
    user_id: UUID
    title: str
    due_date: datetime | None
    is_completed: bool
    created_at: datetime | None


class ReminderCreate(BaseModel):
    """Validated payload for a new reminder."""

    title: str = Field(min_length=1)
    due_date: datetime | None = None
    is_completed: bool = False


class ReminderUpdate(BaseModel):
    """Partial reminder changes."""

    title: str | None = Field(default=None, min_length=1)
    due_date: datetime | None = None
    is_completed: bool | None = None

    @field_validator("title", "is_completed")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("field cannot be null")
        return value
