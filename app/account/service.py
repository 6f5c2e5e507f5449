import logging
from typing import Optional

from app.core.exceptions import UnauthorizedError
from app.core.identity import SupabaseIdentityProvider
from app.friendship.service import FriendService
from app.secret.service import SecretService

logger = logging.getLogger(__name__)


class AccountDeletionService:
    """Removes everything a user owns, then the identity itself."""

    def __init__(
        self,
        identity: SupabaseIdentityProvider,
        secrets: SecretService,
        friends: FriendService,
    ):
        self.identity = identity
        self.secrets = secrets
        self.friends = friends

    def delete_account(self, user_id: Optional[str], auth_token: Optional[str]) -> str:
        """
        Delete the account the token belongs to and return its id.

        The acting identity always comes from the verified token. A
        ``user_id`` supplied by the caller is only compared against it.

        Order:
        1. verify token (nothing is deleted if this fails)
        2. delete the user's secret
        3. delete every friend request sent or received
        4. delete the identity

        A `StoreError` in 2 or 3 stops before 4, and both steps are safe to
        repeat. A `ProviderError` in 4 is reported even though 2 and 3 have
        already committed.
        """
        verified_id = self.identity.verify_token(auth_token)

        if user_id is not None and str(user_id) != verified_id:
            logger.warning(
                f"account_delete_mismatch claimed={user_id} verified={verified_id}"
            )
            raise UnauthorizedError("Token does not belong to this account.")

        self.secrets.delete_secrets(verified_id)
        self.friends.delete_edges_for(verified_id)
        self.identity.delete_identity(verified_id)

        logger.info(f"account_deleted user_id={verified_id}")
        return verified_id
