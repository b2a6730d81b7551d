"""
api/auth_service.py -- FastAPI application for the auth service.

Run with:  python main.py auth
           uvicorn asgi:auth_app --port 3000

Middleware stack (outermost to innermost):
  1. log_requests        -- one log line per request
  2. catch_unrecognized  -- turns unexpected exceptions into the generic 400

Lifespan opens the UserStore on startup and closes it on shutdown.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.errors import install_error_handling
from api.middleware import configure_logging, install_request_logging
from api.routes.users import router as users_router
from auth.store import UserStore
from core.config import get_settings

configure_logging(get_settings().log_level)
logger = logging.getLogger("blogstack.api.auth")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger.info("Auth service starting up")
    if not settings.jwt_key:
        # Not fatal: signup/signin will fail per request until it is set.
        logger.warning("JWT_KEY is not set -- session tokens cannot be issued")
    app.state.user_store = UserStore(settings.auth_db_url)
    logger.info("User store initialized")

    yield

    app.state.user_store.close()
    logger.info("Auth service shutdown complete")


app = FastAPI(
    title="Blogstack Auth Service",
    description="Signup, signin, signout and current-user over a JWT session cookie.",
    version="0.1.0",
    lifespan=lifespan,
)

install_error_handling(app)
install_request_logging(app, logger)

app.include_router(users_router, prefix="/api", tags=["Users"])
