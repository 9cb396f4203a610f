"""Task management service."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from life_planner.domain.errors import RecordNotFoundError
from life_planner.domain.tasks import TaskCreate, TaskRecord, TaskUpdate
from life_planner.services.owners import require_owner

TASK_STATUSES = ("all", "pending", "completed", "overdue")


class TaskRepository(Protocol):
    """Persistence interface for tasks."""

    def create_task(self, user_id: UUID, task: TaskCreate) -> TaskRecord:
        """Insert a task row and return it."""

    def list_tasks(self, user_id: UUID) -> list[TaskRecord]:
        """Return all tasks, newest first."""

    def get_task(self, user_id: UUID, task_id: UUID) -> TaskRecord | None:
        """Return a task by id."""

    def list_tasks_by_completion(
        self, user_id: UUID, is_completed: bool
    ) -> list[TaskRecord]:
        """Return tasks filtered by completion flag."""

    def list_tasks_due_before(self, user_id: UUID, now: datetime) -> list[TaskRecord]:
        """Return incomplete tasks whose due date is before now."""

    def update_task(
        self, user_id: UUID, task_id: UUID, changes: TaskUpdate
    ) -> TaskRecord | None:
        """Apply changes and return the updated row, if it exists."""

    def delete_task(self, user_id: UUID, task_id: UUID) -> None:
        """Delete a task row."""


@dataclass
class TaskService:
    """Owner-scoped task operations."""

    repository: TaskRepository
    owner_id: UUID | None

    def create(self, payload: TaskCreate | dict[str, object]) -> TaskRecord:
        """Validate and store a new task for the owner."""
        owner_id = require_owner(self.owner_id)
        task = TaskCreate.model_validate(payload)
        return self.repository.create_task(owner_id, task)

    def get_all(self) -> list[TaskRecord]:
        """Return every task owned by the caller."""
        return self.repository.list_tasks(require_owner(self.owner_id))

    def get_by_id(self, task_id: UUID) -> TaskRecord | None:
        """Return one task or None."""
        return self.repository.get_task(require_owner(self.owner_id), task_id)

    def get_pending(self) -> list[TaskRecord]:
        """Return incomplete tasks ordered by due date."""
        return self.repository.list_tasks_by_completion(
            require_owner(self.owner_id), is_completed=False
        )

    def get_completed(self) -> list[TaskRecord]:
        """Return completed tasks."""
        return self.repository.list_tasks_by_completion(
            require_owner(self.owner_id), is_completed=True
        )

    def get_overdue(self, now: datetime | None = None) -> list[TaskRecord]:
        """Return incomplete tasks that are past due."""
        return self.repository.list_tasks_due_before(
            require_owner(self.owner_id), now or datetime.now(tz=UTC)
        )

    def find(self, status: str = "all") -> list[TaskRecord]:
        """Return tasks for a status filter."""
        if status == "pending":
            return self.get_pending()
        if status == "completed":
            return self.get_completed()
        if status == "overdue":
            return self.get_overdue()
        if status != "all":
            raise ValueError(f"Unknown task status: {status}")
        return self.get_all()

    def update(
        self, task_id: UUID, payload: TaskUpdate | dict[str, object]
    ) -> TaskRecord:
        """Apply partial changes to a task."""
        owner_id = require_owner(self.owner_id)
        changes = TaskUpdate.model_validate(payload)
        if not changes.model_fields_set:
            raise ValueError("No task fields to update")
        updated = self.repository.update_task(owner_id, task_id, changes)
        if updated is None:
            raise RecordNotFoundError("Task", task_id)
        return updated

    def mark_complete(self, task_id: UUID) -> TaskRecord:
        """Set the completion flag."""
        return self.update(task_id, TaskUpdate(is_completed=True))

    def mark_incomplete(self, task_id: UUID) -> TaskRecord:
        """Clear the completion flag."""
        return self.update(task_id, TaskUpdate(is_completed=False))

    def delete(self, task_id: UUID) -> None:
        """Delete a task."""
        self.repository.delete_task(require_owner(self.owner_id), task_id)
