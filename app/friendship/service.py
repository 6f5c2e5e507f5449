import logging
from datetime import datetime, timezone
from typing import List, Optional, Set

from supabase import Client

from app.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    SelfRequestError,
)
from app.models.friend_request import FriendRequest, FriendRequestStatus
from app.utils.db import store_errors
from app.utils.ids import parse_id
from app.utils.profiles import get_emails, get_profile_by_email

logger = logging.getLogger(__name__)

TABLE = "friend_requests"


def pair_filter(user1_id: str, user2_id: str) -> str:
    """PostgREST ``or`` filter matching an edge between two users, either direction."""
    user1_id, user2_id = parse_id(user1_id), parse_id(user2_id)
    return (
        f"and(from_user_id.eq.{user1_id},to_user_id.eq.{user2_id}),"
        f"and(from_user_id.eq.{user2_id},to_user_id.eq.{user1_id})"
    )


def touching_filter(user_id: str) -> str:
    """PostgREST ``or`` filter matching every edge with ``user_id`` at either end."""
    user_id = parse_id(user_id)
    return f"from_user_id.eq.{user_id},to_user_id.eq.{user_id}"


class FriendService:
    """
    Friend request lifecycle and the friendship predicate.

    Friendship is symmetric: it exists iff some edge between the unordered
    pair has status ``accepted``. Edges move ``pending -> accepted|rejected``
    exactly once; both targets are terminal. Re-requesting after a rejection
    creates a new edge.
    """

    def __init__(self, client: Client):
        self.client = client

    # --- predicate ---

    def are_friends(self, user1_id: str, user2_id: str) -> bool:
        """True iff an accepted edge links the two users in either direction."""
        user1_id, user2_id = parse_id(user1_id), parse_id(user2_id)
        if user1_id == user2_id:
            return False

        with store_errors("checking friendship"):
            response = (
                self.client.table(TABLE)
                .select("id")
                .or_(pair_filter(user1_id, user2_id))
                .eq("status", FriendRequestStatus.ACCEPTED.value)
                .limit(1)
                .execute()
            )

        return bool(response.data)

    # --- requests ---

    def send_request(self, from_user_id: str, to_email: str) -> FriendRequest:
        """
        Send a friend request to the user registered under ``to_email``.

        **Errors**
        - `NotFoundError`: no profile has that email.
        - `SelfRequestError`: the email belongs to the sender.
        - `ConflictError`: a pending or accepted edge already links the pair.
        """
        from_user_id = str(from_user_id)

        receiver = get_profile_by_email(self.client, to_email)
        if receiver is None:
            raise NotFoundError("User not found.")

        # email equality is only a proxy; compare the resolved ids
        if receiver.id == from_user_id:
            raise SelfRequestError()

        existing = self._live_edge_between(from_user_id, receiver.id)
        if existing is not None:
            if existing.status == FriendRequestStatus.ACCEPTED:
                raise ConflictError("Already friends with this user.")
            raise ConflictError(
                "Friend request already sent (or already pending from the other user)."
            )

        with store_errors("creating friend request"):
            created = (
                self.client.table(TABLE)
                .insert(
                    {
                        "from_user_id": from_user_id,
                        "to_user_id": receiver.id,
                        "status": FriendRequestStatus.PENDING.value,
                    }
                )
                .execute()
            )

        request = FriendRequest(**created.data[0])
        request.to_user_email = receiver.email
        logger.info(
            f"friend_request_sent id={request.id} from={from_user_id} to={receiver.id}"
        )
        return request

    def list_incoming_requests(self, user_id: str) -> List[FriendRequest]:
        """Pending requests sent to ``user_id``, oldest first, with sender emails."""
        return self._pending_requests("to_user_id", str(user_id))

    def list_outgoing_requests(self, user_id: str) -> List[FriendRequest]:
        """Pending requests sent by ``user_id``, oldest first, with recipient emails."""
        return self._pending_requests("from_user_id", str(user_id))

    def accept_request(
        self, request_id: str, recipient_id: Optional[str] = None
    ) -> FriendRequest:
        return self._transition(request_id, FriendRequestStatus.ACCEPTED, recipient_id)

    def reject_request(
        self, request_id: str, recipient_id: Optional[str] = None
    ) -> FriendRequest:
        return self._transition(request_id, FriendRequestStatus.REJECTED, recipient_id)

    # --- friends ---

    def list_friends(self, user_id: str) -> Set[str]:
        """Emails of everyone ``user_id`` has an accepted edge with.

        Full scan of the user's accepted edges; there is no materialized
        friends view.
        """
        user_id = parse_id(user_id)

        with store_errors("listing friends"):
            response = (
                self.client.table(TABLE)
                .select("*")
                .or_(touching_filter(user_id))
                .eq("status", FriendRequestStatus.ACCEPTED.value)
                .execute()
            )

        edges = [FriendRequest(**row) for row in response.data or []]
        friend_ids = {edge.other_user(user_id) for edge in edges}
        emails = get_emails(self.client, friend_ids)

        return {emails[friend_id] for friend_id in friend_ids if friend_id in emails}

    def delete_edges_for(self, user_id: str) -> None:
        """Delete every edge touching ``user_id``, sent or received."""
        with store_errors("deleting friend requests"):
            (
                self.client.table(TABLE)
                .delete()
                .or_(touching_filter(str(user_id)))
                .execute()
            )

    # --- internals ---

    def get_request(self, request_id: str) -> FriendRequest:
        request_id = parse_id(request_id, kind="Friend request")

        with store_errors("looking up friend request"):
            response = (
                self.client.table(TABLE)
                .select("*")
                .eq("id", request_id)
                .limit(1)
                .execute()
            )

        if not response.data:
            raise NotFoundError("Friend request not found.")
        return FriendRequest(**response.data[0])

    def _live_edge_between(
        self, user1_id: str, user2_id: str
    ) -> Optional[FriendRequest]:
        with store_errors("checking existing friend requests"):
            response = (
                self.client.table(TABLE)
                .select("*")
                .or_(pair_filter(user1_id, user2_id))
                .in_(
                    "status",
                    [
                        FriendRequestStatus.PENDING.value,
                        FriendRequestStatus.ACCEPTED.value,
                    ],
                )
                .execute()
            )

        edges = [FriendRequest(**row) for row in response.data or []]
        # an accepted edge outranks a stray pending one
        edges.sort(key=lambda edge: edge.status != FriendRequestStatus.ACCEPTED)
        return edges[0] if edges else None

    def _pending_requests(self, column: str, user_id: str) -> List[FriendRequest]:
        with store_errors("listing friend requests"):
            response = (
                self.client.table(TABLE)
                .select("*")
                .eq(column, user_id)
                .eq("status", FriendRequestStatus.PENDING.value)
                .order("created_at")
                .execute()
            )

        requests = [FriendRequest(**row) for row in response.data or []]
        emails = get_emails(
            self.client,
            [r.from_user_id for r in requests] + [r.to_user_id for r in requests],
        )
        for r in requests:
            r.from_user_email = emails.get(r.from_user_id)
            r.to_user_email = emails.get(r.to_user_id)
        return requests

    def _transition(
        self,
        request_id: str,
        target: FriendRequestStatus,
        recipient_id: Optional[str],
    ) -> FriendRequest:
        request = self.get_request(request_id)

        if recipient_id is not None and request.to_user_id != parse_id(recipient_id):
            raise ForbiddenError("Only the recipient can answer a friend request.")

        if not request.status.can_become(target):
            raise ConflictError(
                f"Friend request is already {request.status.value}."
            )

        # conditional on status so a concurrent answer cannot be overwritten
        with store_errors("updating friend request"):
            response = (
                self.client.table(TABLE)
                .update(
                    {
                        "status": target.value,
                        "updated_at": datetime.now(timezone.utc).isoformat(),
                    }
                )
                .eq("id", request.id)
                .eq("status", FriendRequestStatus.PENDING.value)
                .execute()
            )

        if not response.data:
            raise ConflictError("Friend request was answered concurrently.")

        updated = FriendRequest(**response.data[0])
        logger.info(
            f"friend_request_{target.value} id={updated.id} from={updated.from_user_id} to={updated.to_user_id}"
        )
        return updated
