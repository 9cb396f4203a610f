"""Handlers that execute catalog functions against the domain services."""

import logging
from collections.abc import Callable, Mapping
from datetime import date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo

from pydantic_core import to_jsonable_python

from life_planner.services.catalog import FUNCTION_CATALOG, FunctionSpec
from life_planner.services.planner import PlannerServices
from life_planner.services.time_blocks import meal_time_block

logger = logging.getLogger(__name__)

ActionHandler = Callable[[PlannerServices, dict[str, object]], object]

_DEFAULT_PLANNED_MEAL_TYPE = "snack"


def add_meal(services: PlannerServices, args: dict[str, object]) -> object:
    """Create a meal and the time block that reserves time for it."""
    meal = services.meals.create(args)
    result: dict[str, object] = {"meal": meal, "time_block": None}
    try:
        result["time_block"] = services.time_blocks.create(
            meal_time_block(meal, services.timezone)
        )
    except Exception as exc:
        logger.exception("Failed to schedule meal", extra={"meal_id": str(meal.id)})
        result["time_block_error"] = str(exc)
    return result


def plan_daily_meals(services: PlannerServices, args: dict[str, object]) -> object:
    """Create one meal and one time block per meal descriptor."""
    descriptors = args.get("meals")
    if not isinstance(descriptors, list) or not descriptors:
        raise ValueError("meals must be a non-empty list")
    target_date = _optional_date(args.get("target_date")) or _today(services)
    meals: list[object] = []
    time_blocks: list[object] = []
    errors: list[dict[str, object]] = []
    for index, descriptor in enumerate(descriptors):
        name = descriptor.get("name") if isinstance(descriptor, dict) else None
        try:
            if not isinstance(descriptor, dict):
                raise ValueError("meal descriptor must be an object")
            meal = services.meals.create(
                {
                    "name": descriptor.get("name"),
                    "meal_type": descriptor.get("type")
                    or _DEFAULT_PLANNED_MEAL_TYPE,
                    "planned_date": target_date,
                    "calories": descriptor.get("calories"),
                    "ingredients": descriptor.get("ingredients"),
                    "instructions": descriptor.get("instructions"),
                }
            )
        except Exception as exc:
            logger.exception(
                "Failed to create planned meal", extra={"index": index, "meal": name}
            )
            errors.append({"index": index, "name": name, "error": str(exc)})
            continue
        meals.append(meal)
        try:
            time_blocks.append(
                services.time_blocks.create(meal_time_block(meal, services.timezone))
            )
        except Exception as exc:
            logger.exception(
                "Failed to schedule planned meal", extra={"meal_id": str(meal.id)}
            )
            errors.append({"index": index, "name": name, "error": str(exc)})
    return {
        "target_date": target_date,
        "meals": meals,
        "time_blocks": time_blocks,
        "errors": errors,
    }


def list_meals(services: PlannerServices, args: dict[str, object]) -> object:
    return services.meals.find(
        day=_optional_date(args.get("date")),
        start_date=_optional_date(args.get("start_date")),
        end_date=_optional_date(args.get("end_date")),
        meal_type=_optional_str(args.get("meal_type")),
    )


def update_meal(services: PlannerServices, args: dict[str, object]) -> object:
    return services.meals.update(
        _record_id(args, "meal_id"), _changes(args, "meal_id")
    )


def delete_meal(services: PlannerServices, args: dict[str, object]) -> object:
    meal_id = _record_id(args, "meal_id")
    services.meals.delete(meal_id)
    return {"deleted": meal_id}


def add_task(services: PlannerServices, args: dict[str, object]) -> object:
    return services.tasks.create(args)


def list_tasks(services: PlannerServices, args: dict[str, object]) -> object:
    return services.tasks.find(_optional_str(args.get("status")) or "all")


def update_task(services: PlannerServices, args: dict[str, object]) -> object:
    return services.tasks.update(
        _record_id(args, "task_id"), _changes(args, "task_id")
    )


def complete_task(services: PlannerServices, args: dict[str, object]) -> object:
    return services.tasks.mark_complete(_record_id(args, "task_id"))


def reopen_task(services: PlannerServices, args: dict[str, object]) -> object:
    return services.tasks.mark_incomplete(_record_id(args, "task_id"))


def delete_task(services: PlannerServices, args: dict[str, object]) -> object:
    task_id = _record_id(args, "task_id")
    services.tasks.delete(task_id)
    return {"deleted": task_id}


def add_workout(services: PlannerServices, args: dict[str, object]) -> object:
    return services.workouts.create(args)


def list_workouts(services: PlannerServices, args: dict[str, object]) -> object:
    return services.workouts.find(
        status=_optional_str(args.get("status")) or "all",
        start_date=_optional_date(args.get("start_date")),
        end_date=_optional_date(args.get("end_date")),
    )


def update_workout(services: PlannerServices, args: dict[str, object]) -> object:
    return services.workouts.update(
        _record_id(args, "workout_id"), _changes(args, "workout_id")
    )


def complete_workout(services: PlannerServices, args: dict[str, object]) -> object:
    return services.workouts.mark_complete(_record_id(args, "workout_id"))


def reopen_workout(services: PlannerServices, args: dict[str, object]) -> object:
    return services.workouts.mark_incomplete(_record_id(args, "workout_id"))


def delete_workout(services: PlannerServices, args: dict[str, object]) -> object:
    workout_id = _record_id(args, "workout_id")
    services.workouts.delete(workout_id)
    return {"deleted": workout_id}


def add_reminder(services: PlannerServices, args: dict[str, object]) -> object:
    return services.reminders.create(args)


def list_reminders(services: PlannerServices, args: dict[str, object]) -> object:
    return services.reminders.find(_optional_str(args.get("status")) or "all")


def update_reminder(services: PlannerServices, args: dict[str, object]) -> object:
    return services.reminders.update(
        _record_id(args, "reminder_id"), _changes(args, "reminder_id")
    )


def complete_reminder(services: PlannerServices, args: dict[str, object]) -> object:
    return services.reminders.mark_complete(_record_id(args, "reminder_id"))


def reopen_reminder(services: PlannerServices, args: dict[str, object]) -> object:
    return services.reminders.mark_incomplete(_record_id(args, "reminder_id"))


def delete_reminder(services: PlannerServices, args: dict[str, object]) -> object:
    reminder_id = _record_id(args, "reminder_id")
    services.reminders.delete(reminder_id)
    return {"deleted": reminder_id}


def add_time_block(services: PlannerServices, args: dict[str, object]) -> object:
    return services.time_blocks.create(args)


def list_time_blocks(services: PlannerServices, args: dict[str, object]) -> object:
    linked = _optional_str(args.get("linked_task_id"))
    return services.time_blocks.find(
        day=_optional_date(args.get("date")),
        category=_optional_str(args.get("category")),
        linked_task_id=UUID(linked) if linked else None,
        timezone_name=services.timezone,
    )


def update_time_block(services: PlannerServices, args: dict[str, object]) -> object:
    return services.time_blocks.update(
        _record_id(args, "time_block_id"), _changes(args, "time_block_id")
    )


def delete_time_block(services: PlannerServices, args: dict[str, object]) -> object:
    block_id = _record_id(args, "time_block_id")
    services.time_blocks.delete(block_id)
    return {"deleted": block_id}


ACTION_HANDLERS: Mapping[str, ActionHandler] = {
    "addMeal": add_meal,
    "planDailyMeals": plan_daily_meals,
    "listMeals": list_meals,
    "updateMeal": update_meal,
    "deleteMeal": delete_meal,
    "addTask": add_task,
    "listTasks": list_tasks,
    "updateTask": update_task,
    "completeTask": complete_task,
    "reopenTask": reopen_task,
    "deleteTask": delete_task,
    "addWorkout": add_workout,
    "listWorkouts": list_workouts,
    "updateWorkout": update_workout,
    "completeWorkout": complete_workout,
    "reopenWorkout": reopen_workout,
    "deleteWorkout": delete_workout,
    "addReminder": add_reminder,
    "listReminders": list_reminders,
    "updateReminder": update_reminder,
    "completeReminder": complete_reminder,
    "reopenReminder": reopen_reminder,
    "deleteReminder": delete_reminder,
    "addTimeBlock": add_time_block,
    "listTimeBlocks": list_time_blocks,
    "updateTimeBlock": update_time_block,
    "deleteTimeBlock": delete_time_block,
}


def verify_catalog(
    catalog: tuple[FunctionSpec, ...] = FUNCTION_CATALOG,
    handlers: Mapping[str, ActionHandler] = ACTION_HANDLERS,
) -> None:
    """Ensure every catalog entry has a handler and every handler is listed."""
    names = [spec.name for spec in catalog]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    missing = sorted(set(names) - set(handlers))
    orphaned = sorted(set(handlers) - set(names))
    if duplicates or missing or orphaned:
        raise RuntimeError(
            "Function catalog mismatch: "
            f"duplicates={duplicates} missing={missing} orphaned={orphaned}"
        )


def execute_action(
    handlers: Mapping[str, ActionHandler],
    services: PlannerServices,
    name: str,
    args: dict[str, object],
) -> dict[str, object]:
    """Run a handler and return a JSON-safe success or failure payload."""
    handler = handlers.get(name)
    if handler is None:
        return {"success": False, "error": f"Unknown function: {name}"}
    try:
        data = handler(services, args)
    except Exception as exc:
        logger.exception("Function call failed", extra={"function": name})
        return {"success": False, "error": str(exc) or type(exc).__name__}
    return {"success": True, "data": to_jsonable_python(data)}


def _record_id(args: dict[str, object], key: str) -> UUID:
    raw = args.get(key)
    if raw is None:
        raise ValueError(f"Missing required argument: {key}")
    try:
        return UUID(str(raw))
    except ValueError as exc:
        raise ValueError(f"Invalid {key}: {raw}") from exc


def _changes(args: dict[str, object], key: str) -> dict[str, object]:
    return {name: value for name, value in args.items() if name != key}


def _optional_date(value: object) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _today(services: PlannerServices) -> date:
    return datetime.now(tz=ZoneInfo(services.timezone)).date()
