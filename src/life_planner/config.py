"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from life_planner.services.chat import (
    DEFAULT_MAX_ITERATIONS,
    FALLBACK_MESSAGE,
    TRUNCATED_MESSAGE,
)

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"
    openai_temperature: float = 0.7
    chat_max_iterations: int = DEFAULT_MAX_ITERATIONS
    chat_truncated_message: str = TRUNCATED_MESSAGE
    chat_fallback_message: str = FALLBACK_MESSAGE
    planner_timezone: str = "UTC"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
