from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .auth import routers as auth_router
from .friendship import routers as friend_router
from .secret import routers as secret_router
from .account import routers as account_router

from .core import config
from .core.exceptions import register_exception_handlers
from .core.middleware import logging_middleware
from .utils.logging_config import setup_logging

setup_logging()

app = FastAPI(title="Secret Friends")
app.include_router(auth_router.router, prefix="/auth", tags=["Authentication"])
app.include_router(secret_router.router, prefix="/secret", tags=["Secret"])
app.include_router(friend_router.router, prefix="/friends", tags=["Friendship"])
app.include_router(account_router.router, prefix="/api", tags=["Account"])

register_exception_handlers(app)

app.middleware("http")(logging_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"status": "ok"}
