"""Per-request bundle of owner-scoped domain services."""

from dataclasses import dataclass
from uuid import UUID

from life_planner.services.meals import MealRepository, MealService
from life_planner.services.reminders import ReminderRepository, ReminderService
from life_planner.services.tasks import TaskRepository, TaskService
from life_planner.services.time_blocks import TimeBlockRepository, TimeBlockService
from life_planner.services.workouts import WorkoutRepository, WorkoutService


@dataclass(frozen=True)
class PlannerServices:
    """Domain services bound to a single owner."""

    owner_id: UUID | None
    meals: MealService
    tasks: TaskService
    workouts: WorkoutService
    reminders: ReminderService
    time_blocks: TimeBlockService
    timezone: str = "UTC"


@dataclass
class PlannerRepositories:
    """Application-wide repositories used to build owner bundles."""

    meals: MealRepository
    tasks: TaskRepository
    workouts: WorkoutRepository
    reminders: ReminderRepository
    time_blocks: TimeBlockRepository
    timezone: str = "UTC"

    def for_owner(self, owner_id: UUID | None) -> PlannerServices:
        """Return services that act on behalf of one owner."""
        return PlannerServices(
            owner_id=owner_id,
            meals=MealService(self.meals, owner_id, self.timezone),
            tasks=TaskService(self.tasks, owner_id),
            workouts=WorkoutService(self.workouts, owner_id),
            reminders=ReminderService(self.reminders, owner_id),
            time_blocks=TimeBlockService(self.time_blocks, owner_id),
            timezone=self.timezone,
        )
