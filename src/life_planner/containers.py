"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from life_planner.adapters.openai_chat_client import OpenAIChatClient
from life_planner.adapters.supabase_meal_repository import SupabaseMealRepository
from life_planner.adapters.supabase_owner_resolver import SupabaseOwnerResolver
from life_planner.adapters.supabase_reminder_repository import (
    SupabaseReminderRepository,
)
from life_planner.adapters.supabase_task_repository import SupabaseTaskRepository
from life_planner.adapters.supabase_time_block_repository import (
    SupabaseTimeBlockRepository,
)
from life_planner.adapters.supabase_workout_repository import (
    SupabaseWorkoutRepository,
)
from life_planner.config import Settings
from life_planner.services.actions import ACTION_HANDLERS, verify_catalog
from life_planner.services.catalog import FUNCTION_CATALOG
from life_planner.services.chat import ChatService
from life_planner.services.owners import OwnerResolver
from life_planner.services.planner import PlannerRepositories


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    planner_repositories: PlannerRepositories
    owner_resolver: OwnerResolver
    chat_service: ChatService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    verify_catalog(FUNCTION_CATALOG, ACTION_HANDLERS)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    planner_repositories = PlannerRepositories(
        meals=SupabaseMealRepository(supabase_client),
        tasks=SupabaseTaskRepository(supabase_client),
        workouts=SupabaseWorkoutRepository(supabase_client),
        reminders=SupabaseReminderRepository(supabase_client),
        time_blocks=SupabaseTimeBlockRepository(supabase_client),
        timezone=resolved_settings.planner_timezone,
    )
    openai_client = (
        OpenAIChatClient.create(resolved_settings.openai_api_key)
        if resolved_settings.openai_api_key
        else None
    )
    chat_service = ChatService(
        client=openai_client,
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        max_iterations=resolved_settings.chat_max_iterations,
        fallback_message=resolved_settings.chat_fallback_message,
        truncated_message=resolved_settings.chat_truncated_message,
        catalog=FUNCTION_CATALOG,
        handlers=ACTION_HANDLERS,
    )

    async def close_resources() -> None:
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        planner_repositories=planner_repositories,
        owner_resolver=SupabaseOwnerResolver(supabase_client),
        chat_service=chat_service,
        close_resources=close_resources,
    )
