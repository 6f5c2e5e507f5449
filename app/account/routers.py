from typing import Optional

from fastapi import APIRouter, Depends

from app.account.service import AccountDeletionService
from app.core.dependencies import get_account_deletion_service, get_bearer_token

from .schemas import DeleteAccountResponseModel


router = APIRouter()


@router.delete(
    "/delete-account", response_model=DeleteAccountResponseModel, status_code=200
)
def delete_account(
    token: Optional[str] = Depends(get_bearer_token),
    accounts: AccountDeletionService = Depends(get_account_deletion_service),
):
    """
    Permanently delete the authenticated user's account.

    The account to delete is taken from the bearer token, never from the
    request body. The user's secret and every friend request they sent or
    received are removed before the identity itself.

    **Errors**
    - `401`: Missing, invalid or expired token. Nothing is deleted.
    - `500`: Database or identity provider failure.
    """
    accounts.delete_account(None, token)
    return {"message": "Account deleted successfully"}
