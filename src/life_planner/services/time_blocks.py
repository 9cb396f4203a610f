"""Time block scheduling service."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from life_planner.domain.errors import RecordNotFoundError
from life_planner.domain.meals import MealRecord
from life_planner.domain.time_blocks import (
    TimeBlockCreate,
    TimeBlockRecord,
    TimeBlockUpdate,
    ensure_start_before_end,
)
from life_planner.services.owners import require_owner

MEAL_SLOT_TIMES: dict[str, time] = {
    "breakfast": time(8, 0),
    "morning_snack": time(10, 30),
    "lunch": time(12, 30),
    "snack": time(15, 0),
    "afternoon_snack": time(15, 30),
    "dinner": time(18, 30),
    "evening_snack": time(20, 30),
}
DEFAULT_MEAL_TIME = time(12, 0)
MEAL_BLOCK_MINUTES = 30
MEAL_CATEGORY = "meal"


class TimeBlockRepository(Protocol):
    """Persistence interface for time blocks."""

    def create_time_block(
        self, user_id: UUID, block: TimeBlockCreate
    ) -> TimeBlockRecord:
        """Insert a time block row and return it."""

    def list_time_blocks(self, user_id: UUID) -> list[TimeBlockRecord]:
        """Return all time blocks, newest first."""

    def get_time_block(self, user_id: UUID, block_id: UUID) -> TimeBlockRecord | None:
        """Return a time block by id."""

    def list_time_blocks_starting_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[TimeBlockRecord]:
        """Return blocks whose start falls in [start, end)."""

    def list_time_blocks_within(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[TimeBlockRecord]:
        """Return blocks that start at or after start and end at or before end."""

    def list_time_blocks_by_category(
        self, user_id: UUID, category: str
    ) -> list[TimeBlockRecord]:
        """Return blocks in a category ordered by start."""

    def list_time_blocks_for_task(
        self, user_id: UUID, task_id: UUID
    ) -> list[TimeBlockRecord]:
        """Return blocks linked to a task ordered by start."""

    def update_time_block(
        self, user_id: UUID, block_id: UUID, changes: TimeBlockUpdate
    ) -> TimeBlockRecord | None:
        """Apply changes and return the updated row, if it exists."""

    def delete_time_block(self, user_id: UUID, block_id: UUID) -> None:
        """Delete a time block row."""


@dataclass
class TimeBlockService:
    """Owner-scoped time block operations."""

    repository: TimeBlockRepository
    owner_id: UUID | None

    def create(
        self, payload: TimeBlockCreate | dict[str, object]
    ) -> TimeBlockRecord:
        """Validate and store a new time block for the owner."""
        owner_id = require_owner(self.owner_id)
        block = TimeBlockCreate.model_validate(payload)
        return self.repository.create_time_block(owner_id, block)

    def get_all(self) -> list[TimeBlockRecord]:
        """Return every time block owned by the caller."""
        return self.repository.list_time_blocks(require_owner(self.owner_id))

    def get_by_id(self, block_id: UUID) -> TimeBlockRecord | None:
        """Return one time block or None."""
        return self.repository.get_time_block(require_owner(self.owner_id), block_id)

    def get_by_date(
        self, day: date, timezone_name: str = "UTC"
    ) -> list[TimeBlockRecord]:
        """Return blocks that start on a local calendar day."""
        tz = ZoneInfo(timezone_name)
        start = datetime.combine(day, time.min, tzinfo=tz)
        end = start + timedelta(days=1)
        return self.repository.list_time_blocks_starting_between(
            require_owner(self.owner_id), start.astimezone(UTC), end.astimezone(UTC)
        )

    def get_by_date_range(
        self, start: datetime, end: datetime
    ) -> list[TimeBlockRecord]:
        """Return blocks fully contained in a time range."""
        return self.repository.list_time_blocks_within(
            require_owner(self.owner_id), start, end
        )

    def get_by_category(self, category: str) -> list[TimeBlockRecord]:
        """Return blocks in a category."""
        return self.repository.list_time_blocks_by_category(
            require_owner(self.owner_id), category
        )

    def get_linked_to_task(self, task_id: UUID) -> list[TimeBlockRecord]:
        """Return blocks linked to a task."""
        return self.repository.list_time_blocks_for_task(
            require_owner(self.owner_id), task_id
        )

    def find(
        self,
        *,
        day: date | None = None,
        category: str | None = None,
        linked_task_id: UUID | None = None,
        timezone_name: str = "UTC",
    ) -> list[TimeBlockRecord]:
        """Return blocks using the most specific filter supplied."""
        if day is not None:
            return self.get_by_date(day, timezone_name)
        if linked_task_id is not None:
            return self.get_linked_to_task(linked_task_id)
        if category:
            return self.get_by_category(category)
        return self.get_all()

    def update(
        self, block_id: UUID, payload: TimeBlockUpdate | dict[str, object]
    ) -> TimeBlockRecord:
        """Apply partial changes to a time block."""
        owner_id = require_owner(self.owner_id)
        changes = TimeBlockUpdate.model_validate(payload)
        if not changes.model_fields_set:
            raise ValueError("No time block fields to update")
        if (changes.start_time is None) != (changes.end_time is None):
            current = self.repository.get_time_block(owner_id, block_id)
            if current is None:
                raise RecordNotFoundError("Time block", block_id)
            ensure_start_before_end(
                changes.start_time or current.start_time,
                changes.end_time or current.end_time,
            )
        updated = self.repository.update_time_block(owner_id, block_id, changes)
        if updated is None:
            raise RecordNotFoundError("Time block", block_id)
        return updated

    def delete(self, block_id: UUID) -> None:
        """Delete a time block."""
        self.repository.delete_time_block(require_owner(self.owner_id), block_id)


def meal_slot_start(meal_type: str | None, day: date, timezone_name: str) -> datetime:
    """Return the local start time used for a meal on a given day."""
    slot = MEAL_SLOT_TIMES.get(meal_type or "", DEFAULT_MEAL_TIME)
    return datetime.combine(day, slot, tzinfo=ZoneInfo(timezone_name))


def meal_time_block(meal: MealRecord, timezone_name: str) -> TimeBlockCreate:
    """Build the time block that reserves time for a planned meal."""
    if meal.planned_date is None:
        raise ValueError("Meal has no planned date")
    start = meal_slot_start(meal.meal_type, meal.planned_date, timezone_name)
    label = (meal.meal_type or "meal").replace("_", " ").capitalize()
    return TimeBlockCreate(
        title=f"{label}: {meal.name}",
        start_time=start,
        end_time=start + timedelta(minutes=MEAL_BLOCK_MINUTES),
        category=MEAL_CATEGORY,
    )
