"""Workout planning service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from life_planner.domain.errors import RecordNotFoundError
from life_planner.domain.workouts import WorkoutCreate, WorkoutRecord, WorkoutUpdate
from life_planner.services.owners import require_owner

WORKOUT_STATUSES = ("all", "pending", "completed")


class WorkoutRepository(Protocol):
    """Persistence interface for workouts."""

    def create_workout(self, user_id: UUID, workout: WorkoutCreate) -> WorkoutRecord:
        """Insert a workout row and return it."""

    def list_workouts(self, user_id: UUID) -> list[WorkoutRecord]:
        """Return all workouts, newest first."""

    def get_workout(self, user_id: UUID, workout_id: UUID) -> WorkoutRecord | None:
        """Return a workout by id."""

    def list_workouts_by_completion(
        self, user_id: UUID, is_completed: bool
    ) -> list[WorkoutRecord]:
        """Return workouts filtered by completion flag."""

    def list_workouts_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[WorkoutRecord]:
        """Return workouts scheduled within an inclusive date range."""

    def update_workout(
        self, user_id: UUID, workout_id: UUID, changes: WorkoutUpdate
    ) -> WorkoutRecord | None:
        """Apply changes and return the updated row, if it exists."""

    def delete_workout(self, user_id: UUID, workout_id: UUID) -> None:
        """Delete a workout row."""


@dataclass
class WorkoutService:
    """Owner-scoped workout operations."""

    repository: WorkoutRepository
    owner_id: UUID | None

    def create(self, payload: WorkoutCreate | dict[str, object]) -> WorkoutRecord:
        """Validate and store a new workout for the owner."""
        owner_id = require_owner(self.owner_id)
        workout = WorkoutCreate.model_validate(payload)
        return self.repository.create_workout(owner_id, workout)

    def get_all(self) -> list[WorkoutRecord]:
        """Return every workout owned by the caller."""
        return self.repository.list_workouts(require_owner(self.owner_id))

    def get_by_id(self, workout_id: UUID) -> WorkoutRecord | None:
        """Return one workout or None."""
        return self.repository.get_workout(require_owner(self.owner_id), workout_id)

    def get_pending(self) -> list[WorkoutRecord]:
        """Return workouts not yet completed."""
        return self.repository.list_workouts_by_completion(
            require_owner(self.owner_id), is_completed=False
        )

    def get_completed(self) -> list[WorkoutRecord]:
        """Return completed workouts."""
        return self.repository.list_workouts_by_completion(
            require_owner(self.owner_id), is_completed=True
        )

    def get_by_date_range(self, start: date, end: date) -> list[WorkoutRecord]:
        """Return workouts scheduled between two dates, inclusive."""
        return self.repository.list_workouts_between(
            require_owner(self.owner_id), start, end
        )

    def find(
        self,
        status: str = "all",
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[WorkoutRecord]:
        """Return workouts for a date range or status filter."""
        if start_date is not None or end_date is not None:
            return self.get_by_date_range(
                start_date or end_date or date.today(),
                end_date or start_date or date.today(),
            )
        if status == "pending":
            return self.get_pending()
        if status == "completed":
            return self.get_completed()
        if status != "all":
            raise ValueError(f"Unknown workout status: {status}")
        return self.get_all()

    def update(
        self, workout_id: UUID, payload: WorkoutUpdate | dict[str, object]
    ) -> WorkoutRecord:
        """Apply partial changes to a workout."""
        owner_id = require_owner(self.owner_id)
        changes = WorkoutUpdate.model_validate(payload)
        if not changes.model_fields_set:
            raise ValueError("No workout fields to update")
        updated = self.repository.update_workout(owner_id, workout_id, changes)
        if updated is None:
            raise RecordNotFoundError("Workout", workout_id)
        return updated

    def mark_complete(self, workout_id: UUID) -> WorkoutRecord:
        """Set the completion flag."""
        return self.update(workout_id, WorkoutUpdate(is_completed=True))

    def mark_incomplete(self, workout_id: UUID) -> WorkoutRecord:
        """Clear the completion flag."""
        return self.update(workout_id, WorkoutUpdate(is_completed=False))

    def delete(self, workout_id: UUID) -> None:
        """Delete a workout."""
        self.repository.delete_workout(require_owner(self.owner_id), workout_id)
