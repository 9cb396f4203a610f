"""Supabase repository for planned meals."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from life_planner.adapters.supabase_rows import (
    delete_row,
    encode_ingredients,
    insert_row,
    parse_date,
    parse_datetime,
    parse_ingredients,
    select_row,
    update_row,
)
from life_planner.domain.meals import MealCreate, MealRecord, MealUpdate
from life_planner.services.meals import MealRepository

_TABLE = "meals"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def create_meal(self, user_id: UUID, meal: MealCreate) -> MealRecord:
        """Insert a meal row and return it."""
        payload = encode_ingredients(meal.model_dump(mode="json"))
        return _parse_meal(insert_row(self.client, _TABLE, user_id, payload))

    def list_meals(self, user_id: UUID) -> list[MealRecord]:
        """Return all meals, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def get_meal(self, user_id: UUID, meal_id: UUID) -> MealRecord | None:
        """Return a meal by id."""
        row = select_row(self.client, _TABLE, user_id, meal_id)
        return _parse_meal(row) if row else None

    def list_meals_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[MealRecord]:
        """Return meals planned within an inclusive date range."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .gte("planned_date", start.isoformat())
            .lte("planned_date", end.isoformat())
            .order("planned_date", desc=False)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def list_meals_by_type(self, user_id: UUID, meal_type: str) -> list[MealRecord]:
        """Return meals of one type ordered by planned date."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("meal_type", meal_type)
            .order("planned_date", desc=False)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def update_meal(
        self, user_id: UUID, meal_id: UUID, changes: MealUpdate
    ) -> MealRecord | None:
        """Apply changes and return the updated row."""
        changed = changes.model_dump(mode="json", exclude_unset=True)
        payload = encode_ingredients(changed)
        row = update_row(self.client, _TABLE, user_id, meal_id, payload)
        return _parse_meal(row) if row else None

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> None:
        """Delete a meal row."""
        delete_row(self.client, _TABLE, user_id, meal_id)


def _parse_meal(row: dict[str, object]) -> MealRecord:
    calories = row.get("calories")
    return MealRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        meal_type=row.get("meal_type"),
        planned_date=parse_date(row.get("planned_date")),
        calories=int(calories) if calories is not None else None,
        ingredients=parse_ingredients(row.get("ingredients")),
        instructions=row.get("instructions"),
        created_at=parse_datetime(row.get("created_at")),
    )
