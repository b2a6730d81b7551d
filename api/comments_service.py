"""
api/comments_service.py -- FastAPI application for the comments service.

Run with:  python main.py comments
           uvicorn asgi:comments_app --port 4001

Middleware stack (outermost to innermost):
  1. CORSMiddleware      -- open to every origin by default (CORS_ORIGINS)
  2. log_requests        -- one log line per request
  3. catch_unrecognized  -- turns unexpected exceptions into the generic 400

Lifespan builds the comment store on startup. With COMMENTS_DB_URL unset the
store is in memory and every comment is lost on restart.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import install_error_handling
from api.middleware import configure_logging, install_request_logging
from api.routes.comments import router as comments_router
from comments.store import build_comment_store
from core.config import get_settings

configure_logging(get_settings().log_level)
logger = logging.getLogger("blogstack.api.comments")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Comments service starting up")
    app.state.comment_store = build_comment_store(get_settings().comments_db_url)

    yield

    app.state.comment_store.close()
    logger.info("Comments service shutdown complete")


app = FastAPI(
    title="Blogstack Comments Service",
    description="Append-only comment lists keyed by post id.",
    version="0.1.0",
    lifespan=lifespan,
)

install_error_handling(app)
install_request_logging(app, logger)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(comments_router, tags=["Comments"])
