"""Meal planning service."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from life_planner.domain.errors import RecordNotFoundError
from life_planner.domain.meals import MealCreate, MealRecord, MealUpdate
from life_planner.services.owners import require_owner


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def create_meal(self, user_id: UUID, meal: MealCreate) -> MealRecord:
        """Insert a meal row and return it."""

    def list_meals(self, user_id: UUID) -> list[MealRecord]:
        """Return all meals, newest first."""

    def get_meal(self, user_id: UUID, meal_id: UUID) -> MealRecord | None:
        """Return a meal by id."""

    def list_meals_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[MealRecord]:
        """Return meals planned within an inclusive date range."""

    def list_meals_by_type(self, user_id: UUID, meal_type: str) -> list[MealRecord]:
        """Return meals of one type ordered by planned date."""

    def update_meal(
        self, user_id: UUID, meal_id: UUID, changes: MealUpdate
    ) -> MealRecord | None:
        """Apply changes and return the updated row, if it exists."""

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> None:
        """Delete a meal row."""


@dataclass
class MealService:
    """Owner-scoped meal operations."""

    repository: MealRepository
    owner_id: UUID | None
    timezone: str = "UTC"

    def create(self, payload: MealCreate | dict[str, object]) -> MealRecord:
        """Validate and store a new meal for the owner."""
        owner_id = require_owner(self.owner_id)
        meal = MealCreate.model_validate(payload)
        return self.repository.create_meal(owner_id, meal)

    def today(self) -> date:
        """Return the current calendar date in the planner timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone)).date()

    def get_all(self) -> list[MealRecord]:
        """Return every meal owned by the caller."""
        return self.repository.list_meals(require_owner(self.owner_id))

    def get_by_id(self, meal_id: UUID) -> MealRecord | None:
        """Return one meal or None."""
        return self.repository.get_meal(require_owner(self.owner_id), meal_id)

    def get_by_date(self, day: date) -> list[MealRecord]:
        """Return meals planned for a single day."""
        return self.get_by_date_range(day, day)

    def get_by_date_range(self, start: date, end: date) -> list[MealRecord]:
        """Return meals planned between two dates, inclusive."""
        return self.repository.list_meals_between(
            require_owner(self.owner_id), start, end
        )

    def get_by_meal_type(self, meal_type: str) -> list[MealRecord]:
        """Return meals of one type."""
        return self.repository.list_meals_by_type(
            require_owner(self.owner_id), meal_type
        )

    def find(
        self,
        *,
        day: date | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        meal_type: str | None = None,
    ) -> list[MealRecord]:
        """Return meals using the most specific filter supplied."""
        if day is not None:
            return self.get_by_date(day)
        if start_date is not None or end_date is not None:
            return self.get_by_date_range(
                start_date or end_date or self.today(),
                end_date or start_date or self.today(),
            )
        if meal_type:
            return self.get_by_meal_type(meal_type)
        return self.get_all()

    def update(
        self, meal_id: UUID, payload: MealUpdate | dict[str, object]
    ) -> MealRecord:
        """Apply partial changes to a meal."""
        owner_id = require_owner(self.owner_id)
        changes = MealUpdate.model_validate(payload)
        if not changes.model_fields_set:
            raise ValueError("No meal fields to update")
        updated = self.repository.update_meal(owner_id, meal_id, changes)
        if updated is None:
            raise RecordNotFoundError("Meal", meal_id)
        return updated

    def delete(self, meal_id: UUID) -> None:
        """Delete a meal."""
        self.repository.delete_meal(require_owner(self.owner_id), meal_id)
