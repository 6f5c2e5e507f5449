import os
import httpx
import logging

from fastapi.responses import JSONResponse
from fastapi import APIRouter, status, HTTPException, Request, Response, Depends

from supabase import AuthApiError, Client

from app.core.supabase_client import get_supabase
from app.core.dependencies import (
    get_current_user_id,
    get_friend_service,
    get_secret_service,
    verify_token,
)
from app.friendship.service import FriendService
from app.secret.service import SecretService
from app.core.exceptions import StoreError
from app.utils.db import store_errors
from app.utils.env_helper import env_bool, env_none_or_str
from .schemas import (
    UserRegistrationModel,
    UserRegistrationResponseModel,
    UserLoginModel,
    UserLoginResponseModel,
    AccessTokenResponseModel,
    MeResponseModel,
)


logger = logging.getLogger(__name__)
router = APIRouter()

COOKIE_NAME = "refresh_token"
COOKIE_PATH = "/auth/access"
COOKIE_MAX_AGE = 60 * 60 * 24 * 7  # 7 days


def _set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=COOKIE_NAME,
        value=refresh_token,
        httponly=env_bool("HTTPONLY", default=True),
        secure=env_bool("SECURE", default=False),
        samesite=os.getenv("SAMESITE", "Lax"),
        domain=env_none_or_str("COOKIE_DOMAIN", None),
        max_age=COOKIE_MAX_AGE,
        path=COOKIE_PATH,
    )


@router.post("/register", response_model=UserRegistrationResponseModel, status_code=201)
def register_user(data: UserRegistrationModel, client: Client = Depends(get_supabase)):
    """
    Register a new user.

    Creates a Supabase Auth user and the matching `profiles` row that other
    users find when sending a friend request by email.

    **Input Fields**
    - **email**: A valid email. Must not already exist in Supabase Auth.
    - **password**: Minimum 8 characters with a lowercase letter, an
      uppercase letter, a number and a special character.

    **Errors**
    - 400: Invalid input or failed to create user
    - 409: Email already registered
    - 500: Unexpected Supabase or server error
    """
    try:
        res = client.auth.sign_up(
            {
                "email": data.email,
                "password": data.password.get_secret_value(),
            }
        )
    except AuthApiError as error:
        logger.error(f"supabase_error={error}")
        raise HTTPException(status_code=409, detail=error.message)

    if not res.user:
        raise HTTPException(status_code=400, detail="Failed to create user")

    user_id = str(res.user.id)

    try:
        with store_errors("creating profile"):
            client.table("profiles").insert(
                {
                    "id": user_id,
                    "email": res.user.email,
                }
            ).execute()
    except StoreError:
        # an auth user without a profile could never be found by email
        # and would block signing up again with the same address
        logger.error(f"profile_create_failed user_id={user_id}, removing auth user")
        try:
            client.auth.admin.delete_user(user_id)
        except (AuthApiError, httpx.HTTPError) as error:
            logger.error(f"auth_user_cleanup_failed user_id={user_id} error={error}")
        raise

    logger.info(f"user_register_success email={data.email}")

    return {"id": user_id, "email": res.user.email}


@router.post("/login", response_model=UserLoginResponseModel, status_code=200)
def login_user(
    user_data: UserLoginModel, response: Response, client: Client = Depends(get_supabase)
):
    """
    Authenticate a user with email and password.

    Returns a short-lived access token; the refresh token is set in an
    HttpOnly cookie scoped to `/auth/access`.

    **Errors**
    - 401: Invalid email or password
    - 500: Supabase or internal server error
    """
    try:
        res = client.auth.sign_in_with_password(
            {
                "email": user_data.email,
                "password": user_data.password.get_secret_value(),
            }
        )
    except AuthApiError as error:
        raise HTTPException(status_code=401, detail=error.message)

    if not res.session:
        raise HTTPException(
            status_code=500,
            detail="Supabase authentication returned an unexpected response.",
        )

    _set_refresh_cookie(response, res.session.refresh_token)
    logger.info(f"user_login_success email={user_data.email}")

    return {
        "access_token": res.session.access_token,
        "expires_in": res.session.expires_in,
        "user_id": str(res.user.id),
        "email": res.user.email,
    }


@router.get("/access", response_model=AccessTokenResponseModel, status_code=200)
def get_new_access(
    request: Request, response: Response, client: Client = Depends(get_supabase)
):
    """
    Issue a new access token using the refresh token stored in an HttpOnly cookie.

    **Errors**
    - 401: Missing, expired, revoked, or invalid refresh token
    """
    refresh_token = request.cookies.get(COOKIE_NAME)

    if not refresh_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No refresh token provided.",
        )

    try:
        session = client.auth.refresh_session(refresh_token)
    except AuthApiError:
        session = None

    if not session or not session.session:
        # an error response would drop headers set on the injected response
        failed = JSONResponse(
            {"detail": "Refresh token invalid or expired. Please log in again."},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
        failed.delete_cookie(
            key=COOKIE_NAME,
            domain=env_none_or_str("COOKIE_DOMAIN", None),
            path=COOKIE_PATH,
        )
        return failed

    _set_refresh_cookie(response, session.session.refresh_token)
    return {"access_token": session.session.access_token}


@router.get("/me", response_model=MeResponseModel, status_code=200)
def get_me(
    payload: dict = Depends(verify_token),
    user_id: str = Depends(get_current_user_id),
    friends: FriendService = Depends(get_friend_service),
    secrets: SecretService = Depends(get_secret_service),
):
    """
    Everything the home page needs about the logged-in user.

    **Returns**
    - `auth`: user's id & email (from the token claims)
    - `has_secret`: whether a secret message has been saved
    - `friends`: emails of accepted friends
    - `incoming_requests`: pending requests others sent YOU
    - `outgoing_requests`: pending requests YOU sent
    """
    incoming = friends.list_incoming_requests(user_id)
    outgoing = friends.list_outgoing_requests(user_id)

    return {
        "auth": {"id": user_id, "email": payload.get("email")},
        "has_secret": secrets.get_secret(user_id) is not None,
        "friends": sorted(friends.list_friends(user_id)),
        "incoming_requests": [
            {
                "id": r.id,
                "user_id": r.from_user_id,
                "email": r.from_user_email,
                "created_at": r.created_at,
            }
            for r in incoming
        ],
        "outgoing_requests": [
            {
                "id": r.id,
                "user_id": r.to_user_id,
                "email": r.to_user_email,
                "created_at": r.created_at,
            }
            for r in outgoing
        ],
    }


@router.post("/logout")
def logout():
    """
    Logs out the user by clearing the refresh_token cookie. Supabase cannot
    invalidate access tokens early, so they stay valid until they expire.
    """
    response = JSONResponse({"logged_out": True})

    response.delete_cookie(
        key=COOKIE_NAME,
        path=COOKIE_PATH,  # must match set_cookie()
        domain=env_none_or_str("COOKIE_DOMAIN", None),
    )

    return response
