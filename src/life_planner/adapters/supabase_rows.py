"""Shared helpers for owner-scoped Supabase tables."""

import json
from datetime import date, datetime
from uuid import UUID

from supabase import Client


def insert_row(
    client: Client, table: str, user_id: UUID, payload: dict[str, object]
) -> dict[str, object]:
    """Insert one row stamped with the owner and return it."""
    response = (
        client.table(table).insert({**payload, "user_id": str(user_id)}).execute()
    )
    if not response.data:
        raise RuntimeError(f"Failed to create {table} row")
    return response.data[0]


def select_row(
    client: Client, table: str, user_id: UUID, record_id: UUID
) -> dict[str, object] | None:
    """Return one owned row by id."""
    response = (
        client.table(table)
        .select("*")
        .eq("id", str(record_id))
        .eq("user_id", str(user_id))
        .limit(1)
        .execute()
    )
    if not response.data:
        return None
    return response.data[0]


def update_row(
    client: Client,
    table: str,
    user_id: UUID,
    record_id: UUID,
    payload: dict[str, object],
) -> dict[str, object] | None:
    """Update one owned row and return it, or None when nothing matched."""
    response = (
        client.table(table)
        .update(payload)
        .eq("id", str(record_id))
        .eq("user_id", str(user_id))
        .execute()
    )
    if not response.data:
        return None
    return response.data[0]


def delete_row(client: Client, table: str, user_id: UUID, record_id: UUID) -> None:
    """Delete one owned row."""
    client.table(table).delete().eq("id", str(record_id)).eq(
        "user_id", str(user_id)
    ).execute()


def parse_uuid(value: object) -> UUID | None:
    if value is None or value == "":
        return None
    return value if isinstance(value, UUID) else UUID(str(value))


def parse_date(value: object) -> date | None:
    if not value:
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_datetime(value: object) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def parse_ingredients(value: object) -> list[str] | None:
    """Decode ingredients stored either as JSON text or as an array column."""
    if value is None or value == "":
        return None
    if isinstance(value, list):
        return [str(item) for item in value]
    try:
        decoded = json.loads(str(value))
    except json.JSONDecodeError:
        return [str(value)]
    if isinstance(decoded, list):
        return [str(item) for item in decoded]
    return [str(decoded)]


def encode_ingredients(payload: dict[str, object]) -> dict[str, object]:
    """Store ingredient lists as JSON text."""
    if payload.get("ingredients") is not None:
        return {**payload, "ingredients": json.dumps(payload["ingredients"])}
    return payload
