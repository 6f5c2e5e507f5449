import logging
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import Client

from app.core import config
from app.core.exceptions import UnauthorizedError
from app.core.identity import SupabaseIdentityProvider
from app.core.supabase_client import get_supabase
from app.account.service import AccountDeletionService
from app.friendship.service import FriendService
from app.secret.service import SecretService

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401 like any other bad token
security = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    return credentials.credentials if credentials else None


def verify_token(token: Optional[str] = Depends(get_bearer_token)) -> dict:
    """Decode a Supabase access token locally and return its claims."""
    if not token:
        raise UnauthorizedError("Missing bearer token.")

    try:
        payload = jwt.decode(
            token,
            config.SUPABASE_JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            issuer=f"{config.SUPABASE_URL}/auth/v1",
            options={"verify_aud": False, "require": ["sub", "exp"]},
            leeway=config.JWT_LEEWAY,
        )
        return payload

    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expired.")

    except jwt.InvalidTokenError as e:
        logger.info(f"jwt_verification_failed error={e}")
        raise UnauthorizedError("Invalid token.")


def get_current_user_id(payload: dict = Depends(verify_token)) -> str:
    return str(payload["sub"])


def get_identity_provider(
    client: Client = Depends(get_supabase),
) -> SupabaseIdentityProvider:
    return SupabaseIdentityProvider(client)


def get_friend_service(client: Client = Depends(get_supabase)) -> FriendService:
    return FriendService(client)


def get_secret_service(
    client: Client = Depends(get_supabase),
    friends: FriendService = Depends(get_friend_service),
) -> SecretService:
    return SecretService(client, friends)


def get_account_deletion_service(
    identity: SupabaseIdentityProvider = Depends(get_identity_provider),
    secrets: SecretService = Depends(get_secret_service),
    friends: FriendService = Depends(get_friend_service),
) -> AccountDeletionService:
    return AccountDeletionService(identity, secrets, friends)
