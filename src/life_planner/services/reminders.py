"""Reminder service."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from life_planner.domain.errors import RecordNotFoundError
from life_planner.domain.reminders import (
    ReminderCreate,
    ReminderRecord,
    ReminderUpdate,
)
from life_planner.services.owners import require_owner

REMINDER_STATUSES = ("all", "pending", "completed", "overdue")


class ReminderRepository(Protocol):
    """Persistence interface for reminders."""

    def create_reminder(
        self, user_id: UUID, reminder: ReminderCreate
    ) -> ReminderRecord:
        """Insert a reminder row and return it."""

    def list_reminders(self, user_id: UUID) -> list[ReminderRecord]:
        """Return all reminders, newest first."""

    def get_reminder(self, user_id: UUID, reminder_id: UUID) -> ReminderRecord | None:
        """Return a reminder by id."""

    def list_reminders_by_completion(
        self, user_id: UUID, is_completed: bool
    ) -> list[ReminderRecord]:
        """Return reminders filtered by completion flag."""

    def list_reminders_due_before(
        self, user_id: UUID, now: datetime
    ) -> list[ReminderRecord]:
        """Return incomplete reminders whose due date is before now."""

    def list_reminders_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[ReminderRecord]:
        """Return reminders due within an inclusive range."""

    def update_reminder(
        self, user_id: UUID, reminder_id: UUID, changes: ReminderUpdate
    ) -> ReminderRecord | None:
        """Apply changes and return the updated row, if it exists."""

    def delete_reminder(self, user_id: UUID, reminder_id: UUID) -> None:
        """Delete a reminder row."""


@dataclass
class ReminderService:
    """Owner-scoped reminder operations."""

    repository: ReminderRepository
    owner_id: UUID | None

    def create(self, payload: ReminderCreate | dict[str, object]) -> ReminderRecord:
        """Validate and store a new reminder for the owner."""
        owner_id = require_owner(self.owner_id)
        reminder = ReminderCreate.model_validate(payload)
        return self.repository.create_reminder(owner_id, reminder)

    def get_all(self) -> list[ReminderRecord]:
        """Return every reminder owned by the caller."""
        return self.repository.list_reminders(require_owner(self.owner_id))

    def get_by_id(self, reminder_id: UUID) -> ReminderRecord | None:
        """Return one reminder or None."""
        return self.repository.get_reminder(require_owner(self.owner_id), reminder_id)

    def get_pending(self) -> list[ReminderRecord]:
        """Return reminders not yet completed."""
        return self.repository.list_reminders_by_completion(
            require_owner(self.owner_id), is_completed=False
        )

    def get_completed(self) -> list[ReminderRecord]:
        """Return completed reminders."""
        return self.repository.list_reminders_by_completion(
            require_owner(self.owner_id), is_completed=True
        )

    def get_overdue(self, now: datetime | None = None) -> list[ReminderRecord]:
        """Return incomplete reminders that are past due."""
        return self.repository.list_reminders_due_before(
            require_owner(self.owner_id), now or datetime.now(tz=UTC)
        )

    def get_by_date_range(
        self, start: datetime, end: datetime
    ) -> list[ReminderRecord]:
        """Return reminders due between two timestamps."""
        return self.repository.list_reminders_between(
            require_owner(self.owner_id), start, end
        )

    def find(self, status: str = "all") -> list[ReminderRecord]:
        """Return reminders for a status filter."""
        if status == "pending":
            return self.get_pending()
        if status == "completed":
            return self.get_completed()
        if status == "overdue":
            return self.get_overdue()
        if status != "all":
            raise ValueError(f"Unknown reminder status: {status}")
        return self.get_all()

    def update(
        self, reminder_id: UUID, payload: ReminderUpdate | dict[str, object]
    ) -> ReminderRecord:
        """Apply partial changes to a reminder."""
        owner_id = require_owner(self.owner_id)
        changes = ReminderUpdate.model_validate(payload)
        if not changes.model_fields_set:
            raise ValueError("No reminder fields to update")
        updated = self.repository.update_reminder(owner_id, reminder_id, changes)
        if updated is None:
            raise RecordNotFoundError("Reminder", reminder_id)
        return updated

    def mark_complete(self, reminder_id: UUID) -> ReminderRecord:
        """Set the completion flag."""
        return self.update(reminder_id, ReminderUpdate(is_completed=True))

    def mark_incomplete(self, reminder_id: UUID) -> ReminderRecord:
        """Clear the completion flag."""
        return self.update(reminder_id, ReminderUpdate(is_completed=False))

    def delete(self, reminder_id: UUID) -> None:
        """Delete a reminder."""
        self.repository.delete_reminder(require_owner(self.owner_id), reminder_id)
