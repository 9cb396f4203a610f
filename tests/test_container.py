"""Tests for container wiring."""

import asyncio

from life_planner.adapters.openai_chat_client import OpenAIChatClient
from life_planner.config import Settings
from life_planner.containers import build_container


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.chat_service.is_configured is True
    assert isinstance(container.chat_service.client, OpenAIChatClient)
    assert container.planner_repositories.timezone == "UTC"
    asyncio.run(container.close_resources())


def test_build_container_without_openai_key(settings: Settings) -> None:
    container = build_container(settings.model_copy(update={"openai_api_key": None}))

    assert container.chat_service.is_configured is False
    asyncio.run(container.close_resources())
