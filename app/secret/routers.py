from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_current_user_id, get_secret_service
from app.models.secret import SecretMessage
from app.secret.service import SecretService

from .schemas import SaveSecretModel, SecretResponseModel


router = APIRouter()


def _secret_response(secret: Optional[SecretMessage]) -> dict:
    return {"secret": secret.model_dump(mode="json") if secret else None}


@router.get("", response_model=SecretResponseModel, status_code=200)
def get_my_secret(
    user_id: str = Depends(get_current_user_id),
    secrets: SecretService = Depends(get_secret_service),
):
    """
    Return your own secret message.

    `secret` is `null` when you have not saved one yet; that is not an error.
    """
    return _secret_response(secrets.get_secret(user_id))


@router.put("", response_model=SecretResponseModel, status_code=200)
def save_my_secret(
    data: SaveSecretModel,
    user_id: str = Depends(get_current_user_id),
    secrets: SecretService = Depends(get_secret_service),
):
    """Create or overwrite your secret message."""
    return _secret_response(secrets.save_secret(user_id, data.message))


@router.get("/friends", response_model=SecretResponseModel, status_code=200)
def get_friend_secret_by_email(
    email: str = Query(...),
    user_id: str = Depends(get_current_user_id),
    secrets: SecretService = Depends(get_secret_service),
):
    """
    Read a friend's secret message, looking the friend up by email.

    **Errors**
    - `403`: You are not friends with this user.
    - `404`: No user has this email.
    """
    return _secret_response(secrets.get_friend_secret_by_email(user_id, email))


@router.get("/friends/{friend_id}", response_model=SecretResponseModel, status_code=200)
def get_friend_secret(
    friend_id: UUID,
    user_id: str = Depends(get_current_user_id),
    secrets: SecretService = Depends(get_secret_service),
):
    """
    Read a friend's secret message.

    **Errors**
    - `403`: You are not friends with this user. Distinct from a `200` with
      `secret: null`, which means the friend has not set one.
    """
    return _secret_response(secrets.get_friend_secret(user_id, str(friend_id)))
