"""Supabase repository for tasks."""

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
from life_planner.domain.tasks import TaskCreate, TaskRecord, TaskUpdate
from life_planner.services.tasks import TaskRepository

_TABLE = "tasks"


@dataclass
class SupabaseTaskRepository(TaskRepository):
    """Supabase implementation for tasks."""

    client: Client

    def create_task(self, user_id: UUID, task: TaskCreate) -> TaskRecord:
        """Insert a task row and return it."""
        row = insert_row(self.client, _TABLE, user_id, task.model_dump(mode="json"))
        return _parse_task(row)

    def list_tasks(self, user_id: UUID) -> list[TaskRecord]:
        """Return all tasks, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_task(row) for row in response.data or []]

    def get_task(self, user_id: UUID, task_id: UUID) -> TaskRecord | None:
        """Return a task by id."""
        row = select_row(self.client, _TABLE, user_id, task_id)
        return _parse_task(row) if row else None

    def list_tasks_by_completion(
        self, user_id: UUID, is_completed: bool
    ) -> list[TaskRecord]:
        """Return completed tasks newest first, or pending tasks by due date."""
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
        return [_parse_task(row) for row in response.data or []]

    def list_tasks_due_before(self, user_id: UUID, now: datetime) -> list[TaskRecord]:
        """Return incomplete tasks whose due date has passed."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("is_completed", False)
            .lt("due_date", now.isoformat())
            .order("due_date", desc=False)
            .execute()
        )
        return [_parse_task(row) for row in response.data or []]

    def update_task(
        self, user_id: UUID, task_id: UUID, changes: TaskUpdate
    ) -> TaskRecord | None:
        """Apply changes and return the updated row."""
        payload = changes.model_dump(mode="json", exclude_unset=True)
        row = update_row(self.client, _TABLE, user_id, task_id, payload)
        return _parse_task(row) if row else None

    def delete_task(self, user_id: UUID, task_id: UUID) -> None:
        """Delete a task row."""
        delete_row(self.client, _TABLE, user_id, task_id)


def _parse_task(row: dict[str, object]) -> TaskRecord:
    return TaskRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row.get("title") or ""),
        description=row.get("description"),
        due_date=parse_datetime(row.get("due_date")),
        is_completed=bool(row.get("is_completed", False)),
        created_at=parse_datetime(row.get("created_at")),
    )
