from uuid import UUID

from fastapi import APIRouter, Depends

from app.core.dependencies import get_current_user_id, get_friend_service
from app.friendship.service import FriendService

from .schemas import (
    FriendRequestModel,
    FriendRequestResponseModel,
    FriendRequestListResponseModel,
    AnswerFriendRequestResponseModel,
    FriendsListResponseModel,
    FriendshipCheckResponseModel,
)


router = APIRouter()


@router.post("/request", response_model=FriendRequestResponseModel, status_code=201)
def send_friend_request(
    data: FriendRequestModel,
    user_id: str = Depends(get_current_user_id),
    friends: FriendService = Depends(get_friend_service),
):
    """
    Send a friend request to another user using their email.

    **Input**
    - `email`: The email the other user signed up with.

    **Returns**
    - `{ "message": "Friend request sent.", "request": {...} }`

    **Errors**
    - `400`: Attempt to send a friend request to yourself.
    - `401`: Invalid or expired token.
    - `404`: No user found with the provided email.
    - `409`: A request is already pending between you, or you are already friends.
    - `500`: Database error.
    """
    request = friends.send_request(user_id, data.email)

    return {
        "message": "Friend request sent.",
        "request": request.model_dump(mode="json"),
    }


@router.get(
    "/requests/incoming", response_model=FriendRequestListResponseModel, status_code=200
)
def incoming_requests(
    user_id: str = Depends(get_current_user_id),
    friends: FriendService = Depends(get_friend_service),
):
    """Pending requests other users sent you, oldest first."""
    requests = friends.list_incoming_requests(user_id)
    return {"requests": [r.model_dump(mode="json") for r in requests]}


@router.get(
    "/requests/outgoing", response_model=FriendRequestListResponseModel, status_code=200
)
def outgoing_requests(
    user_id: str = Depends(get_current_user_id),
    friends: FriendService = Depends(get_friend_service),
):
    """Pending requests you sent that have not been answered yet."""
    requests = friends.list_outgoing_requests(user_id)
    return {"requests": [r.model_dump(mode="json") for r in requests]}


# Only the recipient can accept or reject
@router.post(
    "/requests/{request_id}/accept",
    response_model=AnswerFriendRequestResponseModel,
    status_code=200,
)
def accept_friend_request(
    request_id: UUID,
    user_id: str = Depends(get_current_user_id),
    friends: FriendService = Depends(get_friend_service),
):
    """
    Accept a pending friend request addressed to you.

    **Errors**
    - `403`: The request was sent to someone else.
    - `404`: No such friend request.
    - `409`: The request was already accepted or rejected.
    """
    request = friends.accept_request(str(request_id), recipient_id=user_id)
    return {"request": request.model_dump(mode="json")}


@router.post(
    "/requests/{request_id}/reject",
    response_model=AnswerFriendRequestResponseModel,
    status_code=200,
)
def reject_friend_request(
    request_id: UUID,
    user_id: str = Depends(get_current_user_id),
    friends: FriendService = Depends(get_friend_service),
):
    """
    Reject a pending friend request addressed to you.

    The sender may send a new request later; this one stays rejected.
    """
    request = friends.reject_request(str(request_id), recipient_id=user_id)
    return {"request": request.model_dump(mode="json")}


@router.get("", response_model=FriendsListResponseModel, status_code=200)
def list_friends(
    user_id: str = Depends(get_current_user_id),
    friends: FriendService = Depends(get_friend_service),
):
    return {"friends": sorted(friends.list_friends(user_id))}


@router.get(
    "/check/{other_user_id}",
    response_model=FriendshipCheckResponseModel,
    status_code=200,
)
def check_friendship(
    other_user_id: UUID,
    user_id: str = Depends(get_current_user_id),
    friends: FriendService = Depends(get_friend_service),
):
    return {
        "user_id": str(other_user_id),
        "are_friends": friends.are_friends(user_id, other_user_id),
    }
