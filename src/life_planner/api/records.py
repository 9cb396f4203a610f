"""Owner CRUD endpoints authenticated with Supabase access tokens."""

from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import (
    APIRouter,
    Depends,
    Header,
    HTTPException,
    Query,
    Request,
    status,
)

from life_planner.domain.errors import RecordNotFoundError
from life_planner.domain.meals import MealCreate, MealUpdate
from life_planner.domain.reminders import ReminderCreate, ReminderUpdate
from life_planner.domain.tasks import TaskCreate, TaskUpdate
from life_planner.domain.time_blocks import TimeBlockCreate, TimeBlockUpdate
from life_planner.domain.workouts import WorkoutCreate, WorkoutUpdate
from life_planner.services.planner import PlannerServices

if TYPE_CHECKING:
    from life_planner.containers import AppContainer

router = APIRouter(prefix="/api", tags=["records"])


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_services(
    request: Request, authorization: str | None = Header(default=None)
) -> PlannerServices:
    """Resolve the caller from the bearer token and bind services to them."""
    container: AppContainer = request.app.state.container
    token = _bearer_token(authorization)
    owner_id = container.owner_resolver.resolve(token) if token else None
    if owner_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="User not authenticated"
        )
    return container.planner_repositories.for_owner(owner_id)


def _found(record: object | None, entity: str, record_id: UUID) -> object:
    if record is None:
        raise RecordNotFoundError(entity, record_id)
    return record


@router.get("/meals")
async def list_meals(
    day: date | None = Query(default=None, alias="date"),
    start_date: date | None = None,
    end_date: date | None = None,
    meal_type: str | None = None,
    services: PlannerServices = Depends(require_services),
) -> dict[str, object]:
    """Return meals for the caller, optionally filtered."""
    meals = services.meals.find(
        day=day, start_date=start_date, end_date=end_date, meal_type=meal_type
    )
    return {"meals": meals}


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def create_meal(
    payload: MealCreate, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Create a meal without scheduling a time block."""
    return {"meal": services.meals.create(payload)}


@router.get("/meals/{meal_id}")
async def get_meal(
    meal_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Return one meal."""
    return {"meal": _found(services.meals.get_by_id(meal_id), "Meal", meal_id)}


@router.patch("/meals/{meal_id}")
async def update_meal(
    meal_id: UUID,
    payload: MealUpdate,
    services: PlannerServices = Depends(require_services),
) -> dict[str, object]:
    """Apply partial changes to a meal."""
    return {"meal": services.meals.update(meal_id, payload)}


@router.delete("/meals/{meal_id}")
async def delete_meal(
    meal_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Delete a meal."""
    services.meals.delete(meal_id)
    return {"deleted": meal_id}


@router.get("/tasks")
async def list_tasks(
    status_filter: str = Query(default="all", alias="status"),
    services: PlannerServices = Depends(require_services),
) -> dict[str, object]:
    """Return tasks for the caller filtered by status."""
    return {"tasks": services.tasks.find(status_filter)}


@router.post("/tasks", status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Create a task."""
    return {"task": services.tasks.create(payload)}


@router.get("/tasks/{task_id}")
async def get_task(
    task_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Return one task."""
    return {"task": _found(services.tasks.get_by_id(task_id), "Task", task_id)}


@router.patch("/tasks/{task_id}")
async def update_task(
    task_id: UUID,
    payload: TaskUpdate,
    services: PlannerServices = Depends(require_services),
) -> dict[str, object]:
    """Apply partial changes to a task."""
    return {"task": services.tasks.update(task_id, payload)}


@router.post("/tasks/{task_id}/complete")
async def complete_task(
    task_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Mark a task complete."""
    return {"task": services.tasks.mark_complete(task_id)}


@router.post("/tasks/{task_id}/incomplete")
async def reopen_task(
    task_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Mark a task incomplete."""
    return {"task": services.tasks.mark_incomplete(task_id)}


@router.delete("/tasks/{task_id}")
async def delete_task(
    task_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Delete a task."""
    services.tasks.delete(task_id)
    return {"deleted": task_id}


@router.get("/workouts")
async def list_workouts(
    status_filter: str = Query(default="all", alias="status"),
    start_date: date | None = None,
    end_date: date | None = None,
    services: PlannerServices = Depends(require_services),
) -> dict[str, object]:
    """Return workouts for the caller, optionally filtered."""
    workouts = services.workouts.find(
        status=status_filter, start_date=start_date, end_date=end_date
    )
    return {"workouts": workouts}


@router.post("/workouts", status_code=status.HTTP_201_CREATED)
async def create_workout(
    payload: WorkoutCreate, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Create a workout."""
    return {"workout": services.workouts.create(payload)}


@router.get("/workouts/{workout_id}")
async def get_workout(
    workout_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Return one workout."""
    workout = services.workouts.get_by_id(workout_id)
    return {"workout": _found(workout, "Workout", workout_id)}


@router.patch("/workouts/{workout_id}")
async def update_workout(
    workout_id: UUID,
    payload: WorkoutUpdate,
    services: PlannerServices = Depends(require_services),
) -> dict[str, object]:
    """Apply partial changes to a workout."""
    return {"workout": services.workouts.update(workout_id, payload)}


@router.post("/workouts/{workout_id}/complete")
async def complete_workout(
    workout_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Mark a workout complete."""
    return {"workout": services.workouts.mark_complete(workout_id)}


@router.post("/workouts/{workout_id}/incomplete")
async def reopen_workout(
    workout_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Mark a workout incomplete."""
    return {"workout": services.workouts.mark_incomplete(workout_id)}


@router.delete("/workouts/{workout_id}")
async def delete_workout(
    workout_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Delete a workout."""
    services.workouts.delete(workout_id)
    return {"deleted": workout_id}


@router.get("/reminders")
async def list_reminders(
    status_filter: str = Query(default="all", alias="status"),
    services: PlannerServices = Depends(require_services),
) -> dict[str, object]:
    """Return reminders for the caller filtered by status."""
    return {"reminders": services.reminders.find(status_filter)}


@router.post("/reminders", status_code=status.HTTP_201_CREATED)
async def create_reminder(
    payload: ReminderCreate, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Create a reminder."""
    return {"reminder": services.reminders.create(payload)}


@router.get("/reminders/{reminder_id}")
async def get_reminder(
    reminder_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Return one reminder."""
    reminder = services.reminders.get_by_id(reminder_id)
    return {"reminder": _found(reminder, "Reminder", reminder_id)}


@router.patch("/reminders/{reminder_id}")
async def update_reminder(
    reminder_id: UUID,
    payload: ReminderUpdate,
    services: PlannerServices = Depends(require_services),
) -> dict[str, object]:
    """Apply partial changes to a reminder."""
    return {"reminder": services.reminders.update(reminder_id, payload)}


@router.post("/reminders/{reminder_id}/complete")
async def complete_reminder(
    reminder_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Mark a reminder complete."""
    return {"reminder": services.reminders.mark_complete(reminder_id)}


@router.post("/reminders/{reminder_id}/incomplete")
async def reopen_reminder(
    reminder_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Mark a reminder incomplete."""
    return {"reminder": services.reminders.mark_incomplete(reminder_id)}


@router.delete("/reminders/{reminder_id}")
async def delete_reminder(
    reminder_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Delete a reminder."""
    services.reminders.delete(reminder_id)
    return {"deleted": reminder_id}


@router.get("/time-blocks")
async def list_time_blocks(
    day: date | None = Query(default=None, alias="date"),
    category: str | None = None,
    linked_task_id: UUID | None = None,
    services: PlannerServices = Depends(require_services),
) -> dict[str, object]:
    """Return time blocks for the caller, optionally filtered."""
    blocks = services.time_blocks.find(
        day=day,
        category=category,
        linked_task_id=linked_task_id,
        timezone_name=services.timezone,
    )
    return {"time_blocks": blocks}


@router.post("/time-blocks", status_code=status.HTTP_201_CREATED)
async def create_time_block(
    payload: TimeBlockCreate, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Create a time block."""
    return {"time_block": services.time_blocks.create(payload)}


@router.get("/time-blocks/{block_id}")
async def get_time_block(
    block_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Return one time block."""
    block = services.time_blocks.get_by_id(block_id)
    return {"time_block": _found(block, "Time block", block_id)}


@router.patch("/time-blocks/{block_id}")
async def update_time_block(
    block_id: UUID,
    payload: TimeBlockUpdate,
    services: PlannerServices = Depends(require_services),
) -> dict[str, object]:
    """Apply partial changes to a time block."""
    return {"time_block": services.time_blocks.update(block_id, payload)}


@router.delete("/time-blocks/{block_id}")
async def delete_time_block(
    block_id: UUID, services: PlannerServices = Depends(require_services)
) -> dict[str, object]:
    """Delete a time block."""
    services.time_blocks.delete(block_id)
    return {"deleted": block_id}
