"""Supabase repository for workouts."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from life_planner.adapters.supabase_rows import (
    delete_row,
    insert_row,
    parse_date,
    parse_datetime,
    select_row,
    update_row,
)
from life_planner.domain.workouts import WorkoutCreate, WorkoutRecord, WorkoutUpdate
from life_planner.services.workouts import WorkoutRepository

_TABLE = "workouts"


@dataclass
class SupabaseWorkoutRepository(WorkoutRepository):
    """Supabase implementation for workouts."""

    client: Client

    def create_workout(self, user_id: UUID, workout: WorkoutCreate) -> WorkoutRecord:
        """Insert a workout row and return it."""
        payload = workout.model_dump(mode="json")
        return _parse_workout(insert_row(self.client, _TABLE, user_id, payload))

    def list_workouts(self, user_id: UUID) -> list[WorkoutRecord]:
        """Return all workouts, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_workout(row) for row in response.data or []]

    def get_workout(self, user_id: UUID, workout_id: UUID) -> WorkoutRecord | None:
        """Return a workout by id."""
        row = select_row(self.client, _TABLE, user_id, workout_id)
        return _parse_workout(row) if row else None

    def list_workouts_by_completion(
        self, user_id: UUID, is_completed: bool
    ) -> list[WorkoutRecord]:
        """Return completed workouts newest first, or pending ones by date."""
        query = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("is_completed", is_completed)
        )
        if is_completed:
            query = query.order("created_at", desc=True)
        else:
            query = query.order("scheduled_date", desc=False)
        response = query.execute()
        return [_parse_workout(row) for row in response.data or []]

    def list_workouts_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[WorkoutRecord]:
        """Return workouts scheduled within an inclusive date range."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .gte("scheduled_date", start.isoformat())
            .lte("scheduled_date", end.isoformat())
            .order("scheduled_date", desc=False)
            .execute()
        )
        return [_parse_workout(row) for row in response.data or []]

    def update_workout(
        self, user_id: UUID, workout_id: UUID, changes: WorkoutUpdate
    ) -> WorkoutRecord | None:
        """Apply changes and return the updated row."""
        payload = changes.model_dump(mode="json", exclude_unset=True)
        row = update_row(self.client, _TABLE, user_id, workout_id, payload)
        return _parse_workout(row) if row else None

    def delete_workout(self, user_id: UUID, workout_id: UUID) -> None:
        """Delete a workout row."""
        delete_row(self.client, _TABLE, user_id, workout_id)


def _parse_workout(row: dict[str, object]) -> WorkoutRecord:
    duration = row.get("duration")
    return WorkoutRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        duration=int(duration) if duration is not None else None,
        intensity=row.get("intensity"),
        scheduled_date=parse_date(row.get("scheduled_date")),
        is_completed=bool(row.get("is_completed", False)),
        created_at=parse_datetime(row.get("created_at")),
    )
