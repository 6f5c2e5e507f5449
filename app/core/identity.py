import logging
from typing import Optional

import httpx
from supabase import AuthApiError, Client

from app.core.exceptions import ProviderError, UnauthorizedError

logger = logging.getLogger(__name__)


class SupabaseIdentityProvider:
    """Verifies access tokens and removes identities through Supabase Auth."""

    def __init__(self, client: Client):
        self.client = client

    def verify_token(self, token: Optional[str]) -> str:
        """Return the user id the token was issued to.

        The token is treated as opaque and checked server side by Supabase,
        so revoked sessions are rejected too.
        """
        if not token:
            raise UnauthorizedError("Missing bearer token.")

        try:
            response = self.client.auth.get_user(jwt=token)
        except AuthApiError as e:
            logger.info(f"token_rejected reason={e.message}")
            raise UnauthorizedError("Invalid or expired token.") from e
        except httpx.HTTPError as e:
            raise ProviderError("Could not reach identity provider.") from e

        if not response or not response.user:
            raise UnauthorizedError("Invalid or expired token.")

        return str(response.user.id)

    def delete_identity(self, user_id: str) -> None:
        try:
            self.client.auth.admin.delete_user(user_id)
        except (AuthApiError, httpx.HTTPError) as e:
            logger.error(f"identity_delete_failed user_id={user_id} error={e}")
            raise ProviderError("Failed to delete user account.") from e
