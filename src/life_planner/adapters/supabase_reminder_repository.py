"""Supabase repository for reminders."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from life_planner.adapters.supabase_rows import (
    delete_row,
    insert_row,
    parse_datetime,
    select_row,
    update_row,
)
from life_planner.domain.reminders import (
    ReminderCreate,
    ReminderRecord,
    ReminderUpdate,
)
from life_planner.services.reminders import ReminderRepository

_TABLE = "reminders"


@dataclass
class SupabaseReminderRepository(ReminderRepository):
    """Supabase implementation for reminders."""

    client: Client

    def create_reminder(
        self, user_id: UUID, reminder: ReminderCreate
    ) -> ReminderRecord:
        """Insert a reminder row and return it."""
        payload = reminder.model_dump(mode="json")
        return _parse_reminder(insert_row(self.client, _TABLE, user_id, payload))

    def list_reminders(self, user_id: UUID) -> list[ReminderRecord]:
        """Return all reminders, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_reminder(row) for row in response.data or []]

    def get_reminder(self, user_id: UUID, reminder_id: UUID) -> ReminderRecord | None:
        """Return a reminder by id."""
        row = select_row(self.client, _TABLE, user_id, reminder_id)
        return _parse_reminder(row) if row else None

    def list_reminders_by_completion(
        self, user_id: UUID, is_completed: bool
    ) -> list[ReminderRecord]:
        """Return completed reminders newest first, or pending ones by due date."""
        query = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("is_completed", is_completed)
        )
        if is_completed:
            query = query.order("created_at", desc=True)
        else:
            query = query.order("due_date", desc=False)
        response = query.execute()
        return [_parse_reminder(row) for row in response.data or []]

    def list_reminders_due_before(
        self, user_id: UUID, now: datetime
    ) -> list[ReminderRecord]:
        """Return incomplete reminders whose due date has passed."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("is_completed", False)
            .lt("due_date", now.isoformat())
            .order("due_date", desc=False)
            .execute()
        )
        return [_parse_reminder(row) for row in response.data or []]

    def list_reminders_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[ReminderRecord]:
        """Return reminders due within an inclusive range."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .gte("due_date", start.isoformat())
            .lte("due_date", end.isoformat())
            .order("due_date", desc=False)
            .execute()
        )
        return [_parse_reminder(row) for row in response.data or []]

    def update_reminder(
        self, user_id: UUID, reminder_id: UUID, changes: ReminderUpdate
    ) -> ReminderRecord | None:
        """Apply changes and return the updated row."""
        payload = changes.model_dump(mode="json", exclude_unset=True)
        row = update_row(self.client, _TABLE, user_id, reminder_id, payload)
        return _parse_reminder(row) if row else None

    def delete_reminder(self, user_id: UUID, reminder_id: UUID) -> None:
        """Delete a reminder row."""
        delete_row(self.client, _TABLE, user_id, reminder_id)


def _parse_reminder(row: dict[str, object]) -> ReminderRecord:
    return ReminderRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row.get("title") or ""),
        due_date=parse_datetime(row.get("due_date")),
        is_completed=bool(row.get("is_completed", False)),
        created_at=parse_datetime(row.get("created_at")),
    )
