"""Functions the assistant model is allowed to call."""

from dataclasses import dataclass

MEAL_TYPES = [
    "breakfast",
    "morning_snack",
    "lunch",
    "afternoon_snack",
    "snack",
    "dinner",
    "evening_snack",
]

_DATE = {"type": "string", "format": "date"}
_DATE_TIME = {"type": "string", "format": "date-time"}
_INGREDIENTS = {
    "type": "array",
    "items": {"type": "string"},
    "description": "List of ingredients",
}


@dataclass(frozen=True)
class FunctionSpec:
    """Name, description and JSON schema of one callable function."""

    name: str
    description: str
    parameters: dict[str, object]

    def to_tool(self) -> dict[str, object]:
        """Return the chat-completions tool definition."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


def _object(
    properties: dict[str, object], required: list[str] | None = None
) -> dict[str, object]:
    return {
        "type": "object",
        "properties": properties,
        "required": required or [],
    }


def _record_id(entity: str) -> dict[str, object]:
    return {"type": "string", "description": f"Id of the {entity}"}


_MEAL_FIELDS: dict[str, object] = {
    "name": {"type": "string", "description": "Name of the meal"},
    "meal_type": {"type": "string", "enum": MEAL_TYPES},
    "planned_date": {**_DATE, "description": "Date for the meal (YYYY-MM-DD)"},
    "calories": {"type": "number", "description": "Estimated calories"},
    "ingredients": _INGREDIENTS,
    "instructions": {"type": "string", "description": "Cooking instructions"},
}

_TASK_FIELDS: dict[str, object] = {
    "title": {"type": "string", "description": "Task title"},
    "description": {"type": "string", "description": "Task description"},
    "due_date": {**_DATE_TIME, "description": "Due date (ISO string)"},
}

_WORKOUT_FIELDS: dict[str, object] = {
    "name": {"type": "string", "description": "Workout name"},
    "scheduled_date": {**_DATE, "description": "Scheduled date (YYYY-MM-DD)"},
    "duration": {"type": "integer", "description": "Duration in minutes"},
    "intensity": {"type": "string", "enum": ["low", "medium", "high"]},
}

_REMINDER_FIELDS: dict[str, object] = {
    "title": {"type": "string", "description": "Reminder title"},
    "due_date": {**_DATE_TIME, "description": "Due date (ISO string)"},
}

_TIME_BLOCK_FIELDS: dict[str, object] = {
    "title": {"type": "string", "description": "Time block title"},
    "start_time": {**_DATE_TIME, "description": "Start time (ISO string)"},
    "end_time": {**_DATE_TIME, "description": "End time (ISO string)"},
    "category": {"type": "string", "description": "Category or type of activity"},
    "linked_task_id": {"type": "string", "description": "Optional linked task ID"},
}

_PLANNED_MEAL = _object(
    {
        "name": {"type": "string", "description": "Meal name"},
        "type": {"type": "string", "enum": MEAL_TYPES},
        "calories": {"type": "number", "description": "Estimated calories"},
        "ingredients": _INGREDIENTS,
        "instructions": {
            "type": "string",
            "description": "Preparation instructions",
        },
    },
    ["name"],
)

FUNCTION_CATALOG: tuple[FunctionSpec, ...] = (
    FunctionSpec(
        name="addMeal",
        description=(
            "Add a meal to the meal planner and reserve a time block for it"
        ),
        parameters=_object(_MEAL_FIELDS, ["name", "meal_type", "planned_date"]),
    ),
    FunctionSpec(
        name="planDailyMeals",
        description="Plan meals for a specific day and schedule them in time blocks",
        parameters=_object(
            {
                "target_date": {
                    **_DATE,
                    "description": "Target date for meal planning (YYYY-MM-DD)",
                },
                "meals": {"type": "array", "items": _PLANNED_MEAL},
            },
            ["meals"],
        ),
    ),
    FunctionSpec(
        name="listMeals",
        description=(
            "List planned meals for a date, a date range or a meal type"
        ),
        parameters=_object(
            {
                "date": _DATE,
                "start_date": _DATE,
                "end_date": _DATE,
                "meal_type": {"type": "string", "enum": MEAL_TYPES},
            }
        ),
    ),
    FunctionSpec(
        name="updateMeal",
        description="Change fields of an existing meal",
        parameters=_object(
            {"meal_id": _record_id("meal"), **_MEAL_FIELDS}, ["meal_id"]
        ),
    ),
    FunctionSpec(
        name="deleteMeal",
        description="Remove a meal from the meal planner",
        parameters=_object({"meal_id": _record_id("meal")}, ["meal_id"]),
    ),
    FunctionSpec(
        name="addTask",
        description="Add a task to the task manager",
        parameters=_object(_TASK_FIELDS, ["title"]),
    ),
    FunctionSpec(
        name="listTasks",
        description="List tasks, optionally only pending, completed or overdue ones",
        parameters=_object(
            {
                "status": {
                    "type": "string",
                    "enum": ["all", "pending", "completed", "overdue"],
                }
            }
        ),
    ),
    FunctionSpec(
        name="updateTask",
        description="Change fields of an existing task",
        parameters=_object(
            {"task_id": _record_id("task"), **_TASK_FIELDS}, ["task_id"]
        ),
    ),
    FunctionSpec(
        name="completeTask",
        description="Mark a task as completed",
        parameters=_object({"task_id": _record_id("task")}, ["task_id"]),
    ),
    FunctionSpec(
        name="reopenTask",
        description="Mark a completed task as not completed",
        parameters=_object({"task_id": _record_id("task")}, ["task_id"]),
    ),
    FunctionSpec(
        name="deleteTask",
        description="Remove a task",
        parameters=_object({"task_id": _record_id("task")}, ["task_id"]),
    ),
    FunctionSpec(
        name="addWorkout",
        description="Add a workout to the workout planner",
        parameters=_object(_WORKOUT_FIELDS, ["name", "scheduled_date"]),
    ),
    FunctionSpec(
        name="listWorkouts",
        description="List workouts by status or scheduled date range",
        parameters=_object(
            {
                "status": {"type": "string", "enum": ["all", "pending", "completed"]},
                "start_date": _DATE,
                "end_date": _DATE,
            }
        ),
    ),
    FunctionSpec(
        name="updateWorkout",
        description="Change fields of an existing workout",
        parameters=_object(
            {"workout_id": _record_id("workout"), **_WORKOUT_FIELDS}, ["workout_id"]
        ),
    ),
    FunctionSpec(
        name="completeWorkout",
        description="Mark a workout as completed",
        parameters=_object({"workout_id": _record_id("workout")}, ["workout_id"]),
    ),
    FunctionSpec(
        name="reopenWorkout",
        description="Mark a completed workout as not completed",
        parameters=_object({"workout_id": _record_id("workout")}, ["workout_id"]),
    ),
    FunctionSpec(
        name="deleteWorkout",
        description="Remove a workout",
        parameters=_object({"workout_id": _record_id("workout")}, ["workout_id"]),
    ),
    FunctionSpec(
        name="addReminder",
        description="Add a reminder",
        parameters=_object(_REMINDER_FIELDS, ["title", "due_date"]),
    ),
    FunctionSpec(
        name="listReminders",
        description=(
            "List reminders, optionally only pending, completed or overdue ones"
        ),
        parameters=_object(
            {
                "status": {
                    "type": "string",
                    "enum": ["all", "pending", "completed", "overdue"],
                }
            }
        ),
    ),
    FunctionSpec(
        name="updateReminder",
        description="Change fields of an existing reminder",
        parameters=_object(
            {"reminder_id": _record_id("reminder"), **_REMINDER_FIELDS},
            ["reminder_id"],
        ),
    ),
    FunctionSpec(
        name="completeReminder",
        description="Mark a reminder as done",
        parameters=_object({"reminder_id": _record_id("reminder")}, ["reminder_id"]),
    ),
    FunctionSpec(
        name="reopenReminder",
        description="Mark a done reminder as pending again",
        parameters=_object({"reminder_id": _record_id("reminder")}, ["reminder_id"]),
    ),
    FunctionSpec(
        name="deleteReminder",
        description="Remove a reminder",
        parameters=_object({"reminder_id": _record_id("reminder")}, ["reminder_id"]),
    ),
    FunctionSpec(
        name="addTimeBlock",
        description="Add a time block to the schedule",
        parameters=_object(_TIME_BLOCK_FIELDS, ["title", "start_time", "end_time"]),
    ),
    FunctionSpec(
        name="listTimeBlocks",
        description="List time blocks for a day, a category or a linked task",
        parameters=_object(
            {
                "date": _DATE,
                "category": {"type": "string"},
                "linked_task_id": {"type": "string"},
            }
        ),
    ),
    FunctionSpec(
        name="updateTimeBlock",
        description="Move or rename an existing time block",
        parameters=_object(
            {"time_block_id": _record_id("time block"), **_TIME_BLOCK_FIELDS},
            ["time_block_id"],
        ),
    ),
    FunctionSpec(
        name="deleteTimeBlock",
        description="Remove a time block from the schedule",
        parameters=_object(
            {"time_block_id": _record_id("time block")}, ["time_block_id"]
        ),
    ),
)


def catalog_tools(
    catalog: tuple[FunctionSpec, ...] = FUNCTION_CATALOG,
) -> list[dict[str, object]]:
    """Return the catalog as chat-completions tools."""
    return [spec.to_tool() for spec in catalog]
