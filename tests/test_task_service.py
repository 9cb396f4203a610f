"""Tests for task management service."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from life_planner.domain.errors import RecordNotFoundError, UnauthenticatedError
from life_planner.services.planner import PlannerServices
from life_planner.services.tasks import TaskService
from tests.conftest import InMemoryTaskRepository


def test_create_task_defaults_to_incomplete(
    services: PlannerServices, owner_id
) -> None:
    task = services.tasks.create({"title": "File taxes"})

    assert task.user_id == owner_id
    assert task.is_completed is False
    assert task.due_date is None


def test_task_requires_owner(task_repository: InMemoryTaskRepository) -> None:
    service = TaskService(task_repository, owner_id=None)

    with pytest.raises(UnauthenticatedError):
        service.create({"title": "File taxes"})
    with pytest.raises(UnauthenticatedError):
        service.get_all()


def test_task_status_filters(services: PlannerServices) -> None:
    now = datetime.now(tz=UTC)
    overdue = services.tasks.create(
        {"title": "Renew passport", "due_date": now - timedelta(days=2)}
    )
    upcoming = services.tasks.create(
        {"title": "Book dentist", "due_date": now + timedelta(days=2)}
    )
    done = services.tasks.create({"title": "Buy milk"})
    services.tasks.mark_complete(done.id)

    assert {t.id for t in services.tasks.find("pending")} == {overdue.id, upcoming.id}
    assert [t.id for t in services.tasks.find("completed")] == [done.id]
    assert [t.id for t in services.tasks.find("overdue")] == [overdue.id]
    assert len(services.tasks.find("all")) == 3


def test_task_unknown_status(services: PlannerServices) -> None:
    with pytest.raises(ValueError, match="Unknown task status"):
        services.tasks.find("someday")


def test_mark_complete_and_incomplete(services: PlannerServices) -> None:
    task = services.tasks.create({"title": "Call mom"})

    assert services.tasks.mark_complete(task.id).is_completed is True
    assert services.tasks.mark_incomplete(task.id).is_completed is False


def test_update_missing_task(services: PlannerServices) -> None:
    with pytest.raises(RecordNotFoundError, match="not found"):
        services.tasks.update(uuid4(), {"title": "Nope"})


def test_delete_task(services: PlannerServices) -> None:
    task = services.tasks.create({"title": "Call mom"})

    services.tasks.delete(task.id)

    assert services.tasks.get_by_id(task.id) is None


def test_update_task_rejects_null_required_fields(services: PlannerServices) -> None:
    task = services.tasks.create(
        {"title": "Call mom", "due_date": "2025-03-14T09:00:00Z"}
    )

    for field in ("title", "is_completed"):
        with pytest.raises(ValidationError, match="cannot be null"):
            services.tasks.update(task.id, {field: None})
    undated = services.tasks.update(task.id, {"due_date": None})

    assert undated.title == "Call mom"
    assert undated.due_date is None
