"""Tests for the chat and calendar HTTP endpoints."""

import json
from uuid import UUID

from fastapi.testclient import TestClient
from icalendar import Calendar

from life_planner.api.app import create_app
from life_planner.containers import AppContainer
from life_planner.services.chat import (
    GENERIC_ERROR_MESSAGE,
    INVALID_KEY_MESSAGE,
    MISSING_KEY_MESSAGE,
    QUOTA_MESSAGE,
    ChatService,
)
from tests.conftest import (
    OWNER_TOKEN,
    FakeChatClient,
    FakeModelError,
    InMemoryMealRepository,
    text_turn,
    tool_turn,
)


def test_health_reports_openai(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "openai_configured": True}


def test_chat_plans_dinner(
    container: AppContainer,
    chat_client: FakeChatClient,
    owner_id: UUID,
    meal_repository: InMemoryMealRepository,
) -> None:
    chat_client.script = [
        tool_turn(
            "addMeal",
            json.dumps(
                {
                    "name": "Grilled salmon",
                    "meal_type": "dinner",
                    "planned_date": "2025-03-14",
                }
            ),
        ),
        text_turn("Your dinner is planned."),
    ]
    client = TestClient(create_app(container))

    response = client.post(
        "/api/chat", json={"message": "Plan my dinner", "userId": str(owner_id)}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Your dinner is planned."
    assert body["activeModule"] is None
    assert [action["function"] for action in body["actions"]] == ["addMeal"]
    assert body["actions"][0]["arguments"]["meal_type"] == "dinner"
    assert body["actionResults"] == [body["actions"][0]["result"]]
    assert body["actionResults"][0]["success"] is True
    assert [message["role"] for message in body["messages"]] == [
        "system",
        "user",
        "assistant",
        "tool",
        "assistant",
    ]
    meal = next(iter(meal_repository.meals.values()))
    assert meal.user_id == owner_id


def test_chat_accepts_prior_messages(
    container: AppContainer, chat_client: FakeChatClient, owner_id: UUID
) -> None:
    chat_client.script = [text_turn("Noted.")]
    client = TestClient(create_app(container))

    response = client.post(
        "/api/chat",
        json={
            "message": "And tomorrow?",
            "userId": str(owner_id),
            "messages": [
                {"role": "system", "content": "Be brief."},
                {"role": "user", "content": "What is planned today?"},
                {"role": "assistant", "content": "Nothing yet."},
            ],
        },
    )

    assert response.status_code == 200
    assert len(chat_client.requests[0]) == 4
    assert chat_client.requests[0][-1] == {"role": "user", "content": "And tomorrow?"}


def test_chat_requires_user_id(
    container: AppContainer, chat_client: FakeChatClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/chat", json={"message": "Hello"})

    assert response.status_code == 400
    assert response.json()["message"] == "Missing required field: userId"
    assert response.json()["actions"] == []
    assert chat_client.requests == []


def test_malformed_chat_body_gets_chat_response(
    container: AppContainer, chat_client: FakeChatClient, owner_id: UUID
) -> None:
    client = TestClient(create_app(container))

    no_role = client.post(
        "/api/chat",
        json={
            "message": "hi",
            "userId": str(owner_id),
            "messages": [{"content": "x"}],
        },
    )
    numeric_user = client.post("/api/chat", json={"message": "hi", "userId": 42})

    assert no_role.status_code == 400
    body = no_role.json()
    assert set(body) == {
        "message",
        "actions",
        "actionResults",
        "activeModule",
        "messages",
    }
    assert "messages.0.role" in body["message"]
    assert body["actions"] == []
    assert numeric_user.status_code == 400
    assert "userId" in numeric_user.json()["message"]
    assert chat_client.requests == []


def test_record_validation_keeps_default_error_body(
    container: AppContainer,
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/tasks",
        json={"title": ""},
        headers={"Authorization": f"Bearer {OWNER_TOKEN}"},
    )

    assert response.status_code == 422
    assert "detail" in response.json()


def test_chat_without_openai_key(
    container: AppContainer, owner_id: UUID, chat_client: FakeChatClient
) -> None:
    container.chat_service = ChatService(client=None, model="gpt-4o")
    client = TestClient(create_app(container))

    response = client.post(
        "/api/chat", json={"message": "Hello", "userId": str(owner_id)}
    )

    assert response.status_code == 500
    assert response.json()["message"] == MISSING_KEY_MESSAGE
    assert chat_client.requests == []


def test_chat_quota_error(
    container: AppContainer,
    chat_client: FakeChatClient,
    owner_id: UUID,
    meal_repository: InMemoryMealRepository,
) -> None:
    chat_client.script = [FakeModelError("insufficient_quota")]
    client = TestClient(create_app(container))

    response = client.post(
        "/api/chat", json={"message": "Plan my dinner", "userId": str(owner_id)}
    )

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == QUOTA_MESSAGE
    assert body["actions"] == []
    assert body["actionResults"] == []
    assert meal_repository.meals == {}


def test_chat_error_messages_are_mapped(
    container: AppContainer, chat_client: FakeChatClient, owner_id: UUID
) -> None:
    chat_client.script = [
        FakeModelError("invalid_api_key"),
        FakeModelError(None, "connection reset"),
    ]
    client = TestClient(create_app(container))
    payload = {"message": "Hello", "userId": str(owner_id)}

    invalid_key = client.post("/api/chat", json=payload)
    unknown = client.post("/api/chat", json=payload)

    assert invalid_key.json()["message"] == INVALID_KEY_MESSAGE
    assert unknown.status_code == 500
    assert unknown.json()["message"] == GENERIC_ERROR_MESSAGE
    assert "connection reset" not in unknown.text


def test_calendar_download(container: AppContainer, owner_id: UUID) -> None:
    services = container.planner_repositories.for_owner(owner_id)
    services.time_blocks.create(
        {
            "title": "Gym",
            "start_time": "2025-03-14T17:00:00Z",
            "end_time": "2025-03-14T18:00:00Z",
            "category": "fitness",
        }
    )
    client = TestClient(create_app(container))

    response = client.get(f"/api/calendar/{owner_id}")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/calendar")
    assert "life-planner.ics" in response.headers["content-disposition"]
    events = Calendar.from_ical(response.content).walk("VEVENT")
    assert [str(event["SUMMARY"]) for event in events] == ["Gym"]
