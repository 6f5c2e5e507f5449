from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


# friend request
class FriendRequestModel(BaseModel):
    email: str


class FriendRequestDetail(BaseModel):
    id: str
    from_user_id: str
    to_user_id: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    from_user_email: Optional[str] = None
    to_user_email: Optional[str] = None


class FriendRequestResponseModel(BaseModel):
    message: str
    request: FriendRequestDetail


# incoming / outgoing
class FriendRequestListResponseModel(BaseModel):
    requests: List[FriendRequestDetail]


# accept / reject
class AnswerFriendRequestResponseModel(BaseModel):
    request: FriendRequestDetail


# friends
class FriendsListResponseModel(BaseModel):
    friends: List[str]


class FriendshipCheckResponseModel(BaseModel):
    user_id: str
    are_friends: bool
