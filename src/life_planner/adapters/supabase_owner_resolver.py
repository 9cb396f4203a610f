"""Resolve bearer tokens to owners with Supabase Auth."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client

from life_planner.services.owners import OwnerResolver

logger = logging.getLogger(__name__)


@dataclass
class SupabaseOwnerResolver(OwnerResolver):
    """Owner resolver backed by Supabase Auth."""

    client: Client

    def resolve(self, access_token: str) -> UUID | None:
        """Return the user id for a valid access token."""
        if not access_token:
            return None
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError:
            logger.warning("Rejected access token")
            return None
        user = getattr(response, "user", None) if response else None
        if user is None or not getattr(user, "id", None):
            return None
        return UUID(str(user.id))
