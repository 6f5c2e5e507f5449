import logging
from datetime import datetime, timezone
from typing import Optional

from supabase import Client

from app.core.exceptions import ForbiddenError, NotFoundError
from app.friendship.service import FriendService
from app.models.secret import SecretMessage
from app.utils.db import store_errors
from app.utils.profiles import get_profile_by_email

logger = logging.getLogger(__name__)

TABLE = "secrets"


class SecretService:
    """Get and save a user's single secret message.

    A missing row means "no secret set" and is returned as ``None``.
    Reading somebody else's secret is gated on friendship.
    """

    def __init__(self, client: Client, friends: FriendService):
        self.client = client
        self.friends = friends

    def get_secret(self, user_id: str) -> Optional[SecretMessage]:
        with store_errors("reading secret"):
            response = (
                self.client.table(TABLE)
                .select("*")
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )

        if not response.data:
            return None
        return SecretMessage(**response.data[0])

    def save_secret(self, user_id: str, message: str) -> SecretMessage:
        """Create or replace the user's secret. Last write wins."""
        with store_errors("saving secret"):
            response = (
                self.client.table(TABLE)
                .upsert(
                    {
                        "user_id": str(user_id),
                        "message": message,
                        "updated_at": datetime.now(timezone.utc).isoformat(),
                    },
                    on_conflict="user_id",
                )
                .execute()
            )

        logger.info(f"secret_saved user_id={user_id}")
        return SecretMessage(**response.data[0])

    def get_friend_secret(
        self, requester_id: str, target_user_id: str
    ) -> Optional[SecretMessage]:
        """
        Read ``target_user_id``'s secret on behalf of ``requester_id``.

        Raises `ForbiddenError` unless the two are friends. Once they are,
        returns the secret or ``None`` if the friend has not set one.
        """
        if not self.friends.are_friends(requester_id, target_user_id):
            logger.info(
                f"secret_access_denied requester={requester_id} target={target_user_id}"
            )
            raise ForbiddenError("Forbidden - Not friends.")

        return self.get_secret(target_user_id)

    def get_friend_secret_by_email(
        self, requester_id: str, email: str
    ) -> Optional[SecretMessage]:
        friend = get_profile_by_email(self.client, email)
        if friend is None:
            raise NotFoundError("User not found.")

        return self.get_friend_secret(requester_id, friend.id)

    def delete_secrets(self, user_id: str) -> None:
        with store_errors("deleting secrets"):
            self.client.table(TABLE).delete().eq("user_id", str(user_id)).execute()
