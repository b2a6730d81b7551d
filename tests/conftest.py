"""
tests/conftest.py -- Shared test fixtures for the blogstack services.

This module provides:
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - user_store / comment_store: isolated stores, fresh for every test
    (comment_store is parametrized over the memory and SQL implementations)
  - auth_client: TestClient over the auth service app
  - comments_client: TestClient over the comments service app

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker
thread. A uuid in the name keeps every test's database separate, which
replaces the wipe-every-collection-before-each-test step a shared database
would need.

JWT_KEY must be set before any auth module import so get_settings() sees it.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager

os.environ.setdefault("JWT_KEY", "test-signing-key")

import pytest
from fastapi.testclient import TestClient

from api.auth_service import app as auth_app
from api.comments_service import app as comments_app
from auth.store import UserStore
from comments.store import CommentStore, MemoryCommentStore, SqlCommentStore
from core.config import get_settings


def _shared_memory_url(prefix: str) -> str:
    return f"sqlite:///file:{prefix}_{uuid.uuid4().hex}?mode=memory&cache=shared&uri=true"


def _patch_lifespan(**state):
    """Return an async context manager that replaces the real lifespan.

    Every keyword becomes an attribute on app.state for the client's lifetime.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        for name, value in state.items():
            setattr(app.state, name, value)
        yield

    return test_lifespan


@pytest.fixture
def user_store() -> Generator[UserStore, None, None]:
    store = UserStore(_shared_memory_url("test_auth"))
    yield store
    store.close()


@pytest.fixture(params=["memory", "sql"])
def comment_store(request) -> Generator[CommentStore, None, None]:
    """Every comment test runs once per store implementation."""
    if request.param == "memory":
        store: CommentStore = MemoryCommentStore()
    else:
        store = SqlCommentStore(_shared_memory_url("test_comments"))
    yield store
    store.close()


@pytest.fixture
def auth_client(user_store: UserStore) -> Generator[TestClient, None, None]:
    """TestClient over the real auth app with an isolated user store.

    The client keeps cookies between requests, so a signup followed by a
    currentuser call behaves like a browser session.
    """
    auth_app.router.lifespan_context = _patch_lifespan(user_store=user_store)
    with TestClient(auth_app, raise_server_exceptions=True) as client:
        yield client


@pytest.fixture
def comments_client(comment_store: CommentStore) -> Generator[TestClient, None, None]:
    comments_app.router.lifespan_context = _patch_lifespan(comment_store=comment_store)
    with TestClient(comments_app, raise_server_exceptions=True) as client:
        yield client


@pytest.fixture
def signup(auth_client: TestClient):
    """Return a helper that signs up and asserts the 201."""

    def _signup(email: str = "test@test.com", password: str = "password"):
        resp = auth_client.post("/api/users/signup", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.text
        return resp

    return _signup


@pytest.fixture
def without_jwt_key(monkeypatch) -> Generator[None, None, None]:
    """Run the test with JWT_KEY unset, restoring the cached settings afterwards."""
    monkeypatch.setenv("JWT_KEY", "")
    get_settings.cache_clear()
    yield
    monkeypatch.undo()
    get_settings.cache_clear()
