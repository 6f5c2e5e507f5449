from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel


class FriendRequestStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    def can_become(self, target: "FriendRequestStatus") -> bool:
        return target in TRANSITIONS[self]


# accepted and rejected are terminal
TRANSITIONS: Dict[FriendRequestStatus, FrozenSet[FriendRequestStatus]] = {
    FriendRequestStatus.PENDING: frozenset(
        {FriendRequestStatus.ACCEPTED, FriendRequestStatus.REJECTED}
    ),
    FriendRequestStatus.ACCEPTED: frozenset(),
    FriendRequestStatus.REJECTED: frozenset(),
}


class FriendRequest(BaseModel):
    """A directed edge ``from_user_id -> to_user_id``."""

    id: str
    from_user_id: str
    to_user_id: str
    status: FriendRequestStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    from_user_email: Optional[str] = None
    to_user_email: Optional[str] = None

    def other_user(self, user_id: str) -> str:
        return self.to_user_id if self.from_user_id == user_id else self.from_user_id
