"""Domain models for planned meals."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

MealType = Literal[
    "breakfast",
    "morning_snack",
    "lunch",
    "afternoon_snack",
    "snack",
    "dinner",
    "evening_snack",
]


@dataclass(frozen=True)
class MealRecord:
    """Meal row owned by a user."""

    id: UUID
    user_id: UUID
    name: str
    meal_type: str | None
    planned_date: date | None
    calories: int | None
    ingredients: list[str] | None
    instructions: str | None
    created_at: datetime | None


class MealCreate(BaseModel):
    """Validated payload for a new meal."""

    name: str = Field(min_length=1)
    meal_type: MealType
    planned_date: date
    calories: int | None = Field(default=None, ge=0)
    ingredients: list[str] | None = None
    instructions: str | None = None

    @field_validator("calories", mode="before")
    @classmethod
    def _round_calories(cls, value: object) -> object:
        return round_calories(value)


class MealUpdate(BaseModel):
    """Partial meal changes."""

    name: str | None = Field(default=None, min_length=1)
    meal_type: MealType | None = None
    planned_date: date | None = None
    calories: int | None = Field(default=None, ge=0)
    ingredients: list[str] | None = None
    instructions: str | None = None

    @field_validator("calories", mode="before")
    @classmethod
    def _round_calories(cls, value: object) -> object:
        return round_calories(value)

    @field_validator("name", "meal_type", "planned_date")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("field cannot be null")
        return value


def round_calories(value: object) -> object:
    """Round fractional calorie estimates to whole calories."""
    if isinstance(value, float):
        return round(value)
    return value
