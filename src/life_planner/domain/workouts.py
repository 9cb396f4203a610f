"""Domain models for workouts."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

Intensity = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class WorkoutRecord:
    """Workout row owned by a user."""

    id: UUID
    user_id: UUID
    name: str
    duration: int | None
    intensity: str | None
    scheduled_date: date | None
    is_completed: bool
    created_at: datetime | None


class WorkoutCreate(BaseModel):
    """Validated payload for a new workout."""

    name: str = Field(min_length=1)
    scheduled_date: date
    duration: int | None = Field(default=None, gt=0)
    intensity: Intensity | None = None
    is_completed: bool = False


class WorkoutUpdate(BaseModel):
    """Partial workout changes."""

    name: str | None = Field(default=None, min_length=1)
    scheduled_date: date | None = None
    duration: int | None = Field(default=None, gt=0)
    intensity: Intensity | None = None
    is_completed: bool | None = None

    @field_validator("name", "scheduled_date", "is_completed")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("field cannot be null")
        return value
