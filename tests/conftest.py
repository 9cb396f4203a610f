"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from life_planner.config import Settings
from life_planner.containers import AppContainer
from life_planner.domain.chat import ConversationTurn, FunctionCallRequest
from life_planner.domain.meals import MealCreate, MealRecord, MealUpdate
from life_planner.domain.reminders import (
    ReminderCreate,
    ReminderRecord,
    ReminderUpdate,
)
from life_planner.domain.tasks import TaskCreate, TaskRecord, TaskUpdate
from life_planner.domain.time_blocks import (
    TimeBlockCreate,
    TimeBlockRecord,
    TimeBlockUpdate,
)
from life_planner.domain.workouts import WorkoutCreate, WorkoutRecord, WorkoutUpdate
from life_planner.services.chat import ChatCompletionClient, ChatService
from life_planner.services.meals import MealRepository
from life_planner.services.owners import OwnerResolver
from life_planner.services.planner import PlannerRepositories, PlannerServices
from life_planner.services.reminders import ReminderRepository
from life_planner.services.tasks import TaskRepository
from life_planner.services.time_blocks import TimeBlockRepository
from life_planner.services.workouts import WorkoutRepository

OWNER_TOKEN = "owner-token"


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, MealRecord] = field(default_factory=dict)
    fail_on_names: set[str] = field(default_factory=set)

    def create_meal(self, user_id: UUID, meal: MealCreate) -> MealRecord:
        if meal.name in self.fail_on_names:
            raise RuntimeError(f"Failed to create meals row for {meal.name}")
        record = MealRecord(
            id=uuid4(),
            user_id=user_id,
            created_at=_now(),
            **meal.model_dump(),
        )
        self.meals[record.id] = record
        return record

    def list_meals(self, user_id: UUID) -> list[MealRecord]:
        return [meal for meal in self.meals.values() if meal.user_id == user_id]

    def get_meal(self, user_id: UUID, meal_id: UUID) -> MealRecord | None:
        meal = self.meals.get(meal_id)
        return meal if meal and meal.user_id == user_id else None

    def list_meals_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[MealRecord]:
        return [
            meal
            for meal in self.list_meals(user_id)
            if meal.planned_date and start <= meal.planned_date <= end
        ]

    def list_meals_by_type(self, user_id: UUID, meal_type: str) -> list[MealRecord]:
        return [
            meal for meal in self.list_meals(user_id) if meal.meal_type == meal_type
        ]

    def update_meal(
        self, user_id: UUID, meal_id: UUID, changes: MealUpdate
    ) -> MealRecord | None:
        meal = self.get_meal(user_id, meal_id)
        if meal is None:
            return None
        updated = replace(meal, **changes.model_dump(exclude_unset=True))
        self.meals[meal_id] = updated
        return updated

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> None:
        if self.get_meal(user_id, meal_id):
            del self.meals[meal_id]


@dataclass
class InMemoryTaskRepository(TaskRepository):
    """In-memory task repository for tests."""

    tasks: dict[UUID, TaskRecord] = field(default_factory=dict)

    def create_task(self, user_id: UUID, task: TaskCreate) -> TaskRecord:
        record = TaskRecord(
            id=uuid4(), user_id=user_id, created_at=_now(), **task.model_dump()
        )
        self.tasks[record.id] = record
        return record

    def list_tasks(self, user_id: UUID) -> list[TaskRecord]:
        return [task for task in self.tasks.values() if task.user_id == user_id]

    def get_task(self, user_id: UUID, task_id: UUID) -> TaskRecord | None:
        task = self.tasks.get(task_id)
        return task if task and task.user_id == user_id else None

    def list_tasks_by_completion(
        self, user_id: UUID, is_completed: bool
    ) -> list[TaskRecord]:
        return [
            task
            for task in self.list_tasks(user_id)
            if task.is_completed == is_completed
        ]

    def list_tasks_due_before(self, user_id: UUID, now: datetime) -> list[TaskRecord]:
        return [
            task
            for task in self.list_tasks_by_completion(user_id, False)
            if task.due_date and _utc(task.due_date) < now
        ]

    def update_task(
        self, user_id: UUID, task_id: UUID, changes: TaskUpdate
    ) -> TaskRecord | None:
        task = self.get_task(user_id, task_id)
        if task is None:
            return None
        updated = replace(task, **changes.model_dump(exclude_unset=True))
        self.tasks[task_id] = updated
        return updated

    def delete_task(self, user_id: UUID, task_id: UUID) -> None:
        if self.get_task(user_id, task_id):
            del self.tasks[task_id]


@dataclass
class InMemoryWorkoutRepository(WorkoutRepository):
    """In-memory workout repository for tests."""

    workouts: dict[UUID, WorkoutRecord] = field(default_factory=dict)

    def create_workout(self, user_id: UUID, workout: WorkoutCreate) -> WorkoutRecord:
        record = WorkoutRecord(
            id=uuid4(), user_id=user_id, created_at=_now(), **workout.model_dump()
        )
        self.workouts[record.id] = record
        return record

    def list_workouts(self, user_id: UUID) -> list[WorkoutRecord]:
        return [item for item in self.workouts.values() if item.user_id == user_id]

    def get_workout(self, user_id: UUID, workout_id: UUID) -> WorkoutRecord | None:
        workout = self.workouts.get(workout_id)
        return workout if workout and workout.user_id == user_id else None

    def list_workouts_by_completion(
        self, user_id: UUID, is_completed: bool
    ) -> list[WorkoutRecord]:
        return [
            item
            for item in self.list_workouts(user_id)
            if item.is_completed == is_completed
        ]

    def list_workouts_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[WorkoutRecord]:
        return [
            item
            for item in self.list_workouts(user_id)
            if item.scheduled_date and start <= item.scheduled_date <= end
        ]

    def update_workout(
        self, user_id: UUID, workout_id: UUID, changes: WorkoutUpdate
    ) -> WorkoutRecord | None:
        workout = self.get_workout(user_id, workout_id)
        if workout is None:
            return None
        updated = replace(workout, **changes.model_dump(exclude_unset=True))
        self.workouts[workout_id] = updated
        return updated

    def delete_workout(self, user_id: UUID, workout_id: UUID) -> None:
        if self.get_workout(user_id, workout_id):
            del self.workouts[workout_id]


@dataclass
class InMemoryReminderRepository(ReminderRepository):
    """In-memory reminder repository for tests."""

    reminders: dict[UUID, ReminderRecord] = field(default_factory=dict)

    def create_reminder(
        self, user_id: UUID, reminder: ReminderCreate
    ) -> ReminderRecord:
        record = ReminderRecord(
            id=uuid4(), user_id=user_id, created_at=_now(), **reminder.model_dump()
        )
        self.reminders[record.id] = record
        return record

    def list_reminders(self, user_id: UUID) -> list[ReminderRecord]:
        return [item for item in self.reminders.values() if item.user_id == user_id]

    def get_reminder(self, user_id: UUID, reminder_id: UUID) -> ReminderRecord | None:
        reminder = self.reminders.get(reminder_id)
        return reminder if reminder and reminder.user_id == user_id else None

    def list_reminders_by_completion(
        self, user_id: UUID, is_completed: bool
    ) -> list[ReminderRecord]:
        return [
            item
            for item in self.list_reminders(user_id)
            if item.is_completed == is_completed
        ]

    def list_reminders_due_before(
        self, user_id: UUID, now: datetime
    ) -> list[ReminderRecord]:
        return [
            item
            for item in self.list_reminders_by_completion(user_id, False)
            if item.due_date and _utc(item.due_date) < now
        ]

    def list_reminders_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[ReminderRecord]:
        return [
            item
            for item in self.list_reminders(user_id)
            if item.due_date and _utc(start) <= _utc(item.due_date) <= _utc(end)
        ]

    def update_reminder(
        self, user_id: UUID, reminder_id: UUID, changes: ReminderUpdate
    ) -> ReminderRecord | None:
        reminder = self.get_reminder(user_id, reminder_id)
        if reminder is None:
            return None
        updated = replace(reminder, **changes.model_dump(exclude_unset=True))
        self.reminders[reminder_id] = updated
        return updated

    def delete_reminder(self, user_id: UUID, reminder_id: UUID) -> None:
        if self.get_reminder(user_id, reminder_id):
            del self.reminders[reminder_id]


@dataclass
class InMemoryTimeBlockRepository(TimeBlockRepository):
    """In-memory time block repository for tests."""

    blocks: dict[UUID, TimeBlockRecord] = field(default_factory=dict)
    fail_on_titles: set[str] = field(default_factory=set)

    def create_time_block(
        self, user_id: UUID, block: TimeBlockCreate
    ) -> TimeBlockRecord:
        if block.title in self.fail_on_titles:
            raise RuntimeError(f"Failed to create time_blocks row for {block.title}")
        record = TimeBlockRecord(
            id=uuid4(), user_id=user_id, created_at=_now(), **block.model_dump()
        )
        self.blocks[record.id] = record
        return record

    def list_time_blocks(self, user_id: UUID) -> list[TimeBlockRecord]:
        return [item for item in self.blocks.values() if item.user_id == user_id]

    def get_time_block(self, user_id: UUID, block_id: UUID) -> TimeBlockRecord | None:
        block = self.blocks.get(block_id)
        return block if block and block.user_id == user_id else None

    def list_time_blocks_starting_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[TimeBlockRecord]:
        return [
            item
            for item in self.list_time_blocks(user_id)
            if _utc(start) <= _utc(item.start_time) < _utc(end)
        ]

    def list_time_blocks_within(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[TimeBlockRecord]:
        return [
            item
            for item in self.list_time_blocks(user_id)
            if _utc(item.start_time) >= _utc(start) and _utc(item.end_time) <= _utc(end)
        ]

    def list_time_blocks_by_category(
        self, user_id: UUID, category: str
    ) -> list[TimeBlockRecord]:
        return [
            item for item in self.list_time_blocks(user_id) if item.category == category
        ]

    def list_time_blocks_for_task(
        self, user_id: UUID, task_id: UUID
    ) -> list[TimeBlockRecord]:
        return [
            item
            for item in self.list_time_blocks(user_id)
            if item.linked_task_id == task_id
        ]

    def update_time_block(
        self, user_id: UUID, block_id: UUID, changes: TimeBlockUpdate
    ) -> TimeBlockRecord | None:
        block = self.get_time_block(user_id, block_id)
        if block is None:
            return None
        updated = replace(block, **changes.model_dump(exclude_unset=True))
        self.blocks[block_id] = updated
        return updated

    def delete_time_block(self, user_id: UUID, block_id: UUID) -> None:
        if self.get_time_block(user_id, block_id):
            del self.blocks[block_id]


class FakeModelError(Exception):
    """Model failure carrying an API error code."""

    def __init__(self, code: str | None, message: str = "model failure") -> None:
        super().__init__(message)
        self.code = code


@dataclass
class FakeChatClient(ChatCompletionClient):
    """Scripted chat model that replays prepared turns."""

    script: list[ConversationTurn | Exception] = field(default_factory=list)
    requests: list[list[dict[str, object]]] = field(default_factory=list)
    tools: list[dict[str, object]] = field(default_factory=list)
    closed: bool = False

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        tools: list[dict[str, object]],
        temperature: float,
    ) -> ConversationTurn:
        self.requests.append([dict(message) for message in messages])
        self.tools = tools
        if not self.script:
            return ConversationTurn(role="assistant", content="Done.")
        step = self.script.pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    async def close(self) -> None:
        self.closed = True


@dataclass
class FakeOwnerResolver(OwnerResolver):
    """Owner resolver that accepts a fixed set of tokens."""

    tokens: dict[str, UUID] = field(default_factory=dict)

    def resolve(self, access_token: str) -> UUID | None:
        return self.tokens.get(access_token)


def tool_turn(name: str, arguments: str, call_id: str = "call_1") -> ConversationTurn:
    """Return an assistant turn that requests one function call."""
    return ConversationTurn(
        role="assistant",
        content=None,
        tool_calls=[FunctionCallRequest(id=call_id, name=name, arguments=arguments)],
    )


def text_turn(content: str | None) -> ConversationTurn:
    """Return a plain assistant answer."""
    return ConversationTurn(role="assistant", content=content)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def owner_id() -> UUID:
    return uuid4()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def task_repository() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def workout_repository() -> InMemoryWorkoutRepository:
    return InMemoryWorkoutRepository()


@pytest.fixture
def reminder_repository() -> InMemoryReminderRepository:
    return InMemoryReminderRepository()


@pytest.fixture
def time_block_repository() -> InMemoryTimeBlockRepository:
    return InMemoryTimeBlockRepository()


@pytest.fixture
def repositories(  # noqa: PLR0913
    meal_repository: InMemoryMealRepository,
    task_repository: InMemoryTaskRepository,
    workout_repository: InMemoryWorkoutRepository,
    reminder_repository: InMemoryReminderRepository,
    time_block_repository: InMemoryTimeBlockRepository,
) -> PlannerRepositories:
    return PlannerRepositories(
        meals=meal_repository,
        tasks=task_repository,
        workouts=workout_repository,
        reminders=reminder_repository,
        time_blocks=time_block_repository,
    )


@pytest.fixture
def services(repositories: PlannerRepositories, owner_id: UUID) -> PlannerServices:
    return repositories.for_owner(owner_id)


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def chat_service(chat_client: FakeChatClient, settings: Settings) -> ChatService:
    return ChatService(client=chat_client, model=settings.openai_model)


@pytest.fixture
def owner_resolver(owner_id: UUID) -> FakeOwnerResolver:
    return FakeOwnerResolver(tokens={OWNER_TOKEN: owner_id})


@pytest.fixture
def container(
    settings: Settings,
    repositories: PlannerRepositories,
    owner_resolver: FakeOwnerResolver,
    chat_service: ChatService,
    chat_client: FakeChatClient,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        planner_repositories=repositories,
        owner_resolver=owner_resolver,
        chat_service=chat_service,
        close_resources=chat_client.close,
    )
