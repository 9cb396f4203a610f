"""Owner identity helpers."""

from typing import Protocol
from uuid import UUID

from life_planner.domain.errors import UnauthenticatedError


class OwnerResolver(Protocol):
    """Interface for turning an access token into an owner id."""

    def resolve(self, access_token: str) -> UUID | None:
        """Return the authenticated owner id, or None when the token is invalid."""


def require_owner(owner_id: UUID | None) -> UUID:
    """Return the owner id or raise when the caller is unauthenticated."""
    if owner_id is None:
        raise UnauthenticatedError()
    return owner_id
