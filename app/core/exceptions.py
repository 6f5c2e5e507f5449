import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors a caller can branch on."""

    status_code = 500
    default_detail = "Internal server error."

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(AppError):
    status_code = 404
    default_detail = "Not found."


class ForbiddenError(AppError):
    status_code = 403
    default_detail = "Forbidden."


class SelfRequestError(AppError):
    status_code = 400
    default_detail = "Cannot send friend request to yourself."


class ConflictError(AppError):
    status_code = 409
    default_detail = "Conflict."


class UnauthorizedError(AppError):
    status_code = 401
    default_detail = "Unauthorized."


class StoreError(AppError):
    default_detail = "Database error."


class ProviderError(AppError):
    default_detail = "Identity provider error."


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"request_failed path={request.url.path} error={type(exc).__name__} detail={exc.detail}"
        )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code, content={"detail": exc.detail}, headers=headers
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
