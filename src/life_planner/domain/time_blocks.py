"""Domain models for scheduled time blocks."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


@dataclass(frozen=True)
class TimeBlockRecord:
    """Time block row owned by a user."""

    id: UUID
    user_id: UUID
    title: str
    start_time: datetime
    end_time: datetime
    category: str | None
    linked_task_id: UUID | None
    created_at: datetime | None


class TimeBlockCreate(BaseModel):
    """Validated payload for a new time block."""

    title: str = Field(min_length=1)
    start_time: datetime
    end_time: datetime
    category: str | None = None
    linked_task_id: UUID | None = None

    @model_validator(mode="after")
    def _check_order(self) -> "TimeBlockCreate":
        ensure_start_before_end(self.start_time, self.end_time)
        return self


class TimeBlockUpdate(BaseModel):
    """Partial time block changes."""

    title: str | None = Field(default=None, min_length=1)
    start_time: datetime | None = None
    end_time: datetime | None = None
    category: str | None = None
    linked_task_id: UUID | None = None

    @field_validator("title", "start_time", "end_time")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("field cannot be null")
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "TimeBlockUpdate":
        if self.start_time is not None and self.end_time is not None:
            ensure_start_before_end(self.start_time, self.end_time)
        return self


def ensure_start_before_end(start: datetime, end: datetime) -> None:
    if _as_aware(start) >= _as_aware(end):
        raise ValueError("start_time must be before end_time")


def _as_aware(value: datetime) -> datetime:
    # Naive timestamps are treated as UTC.
    return value if value.tzinfo else value.replace(tzinfo=UTC)
