"""Supabase repository for time blocks."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from life_planner.adapters.supabase_rows import (
    delete_row,
    insert_row,
    parse_datetime,
    parse_uuid,
    select_row,
    update_row,
)
from life_planner.domain.time_blocks import (
    TimeBlockCreate,
    TimeBlockRecord,
    TimeBlockUpdate,
)
from life_planner.services.time_blocks import TimeBlockRepository

_TABLE = "time_blocks"


@dataclass
class SupabaseTimeBlockRepository(TimeBlockRepository):
    """Supabase implementation for time blocks."""

    client: Client

    def create_time_block(
        self, user_id: UUID, block: TimeBlockCreate
    ) -> TimeBlockRecord:
        """Insert a time block row and return it."""
        payload = block.model_dump(mode="json")
        return _parse_block(insert_row(self.client, _TABLE, user_id, payload))

    def list_time_blocks(self, user_id: UUID) -> list[TimeBlockRecord]:
        """Return all time blocks, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_block(row) for row in response.data or []]

    def get_time_block(self, user_id: UUID, block_id: UUID) -> TimeBlockRecord | None:
        """Return a time block by id."""
        row = select_row(self.client, _TABLE, user_id, block_id)
        return _parse_block(row) if row else None

    def list_time_blocks_starting_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[TimeBlockRecord]:
        """Return blocks whose start falls in [start, end)."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .gte("start_time", start.isoformat())
            .lt("start_time", end.isoformat())
            .order("start_time", desc=False)
            .execute()
        )
        return [_parse_block(row) for row in response.data or []]

    def list_time_blocks_within(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[TimeBlockRecord]:
        """Return blocks contained in a time range."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .gte("start_time", start.isoformat())
            .lte("end_time", end.isoformat())
            .order("start_time", desc=False)
            .execute()
        )
        return [_parse_block(row) for row in response.data or []]

    def list_time_blocks_by_category(
        self, user_id: UUID, category: str
    ) -> list[TimeBlockRecord]:
        """Return blocks in a category ordered by start."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("category", category)
            .order("start_time", desc=False)
            .execute()
        )
        return [_parse_block(row) for row in response.data or []]

    def list_time_blocks_for_task(
        self, user_id: UUID, task_id: UUID
    ) -> list[TimeBlockRecord]:
        """Return blocks linked to a task ordered by start."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("linked_task_id", str(task_id))
            .order("start_time", desc=False)
            .execute()
        )
        return [_parse_block(row) for row in response.data or []]

    def update_time_block(
        self, user_id: UUID, block_id: UUID, changes: TimeBlockUpdate
    ) -> TimeBlockRecord | None:
        """Apply changes and return the updated row."""
        payload = changes.model_dump(mode="json", exclude_unset=True)
        row = update_row(self.client, _TABLE, user_id, block_id, payload)
        return _parse_block(row) if row else None

    def delete_time_block(self, user_id: UUID, block_id: UUID) -> None:
        """Delete a time block row."""
        delete_row(self.client, _TABLE, user_id, block_id)


def _parse_block(row: dict[str, object]) -> TimeBlockRecord:
    return TimeBlockRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row.get("title") or ""),
        start_time=datetime.fromisoformat(str(row["start_time"])),
        end_time=datetime.fromisoformat(str(row["end_time"])),
        category=row.get("category"),
        linked_task_id=parse_uuid(row.get("linked_task_id")),
        created_at=parse_datetime(row.get("created_at")),
    )
