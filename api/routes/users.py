"""
api/routes/users.py -- Auth service endpoints.

Routes (mounted under /api):
  GET  /api/users/currentuser  -- claims from the session cookie, or null
  POST /api/users/signup       -- create account; sets session cookie; 201
  POST /api/users/signin       -- password signin; sets session cookie; 200
  POST /api/users/signout      -- clears session cookie; 200 {}

Signup:  validate -> uniqueness pre-check -> hash -> persist -> sign -> respond.
Signin:  validate -> lookup -> verify -> sign -> respond.

Nothing is compensated if a later step fails. A persistence error after the
uniqueness check passed (e.g. the duplicate-email race hitting the UNIQUE
constraint) falls through to the generic 400 translator.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.models import CurrentUserResponse, ErrorResponse, SessionUser, UserResponse
from api.validation import is_email, length, not_empty, validate_request
from auth.dependencies import current_user
from auth.models import SessionClaims, User
from auth.store import UserStore
from auth.tokens import (
    authenticate_user,
    clear_session_cookie,
    create_session_token,
    hash_password,
    set_session_cookie,
)
from core.errors import bad_request

logger = logging.getLogger("blogstack.api.users")

router = APIRouter()

_ERRORS = {400: {"model": ErrorResponse}}

SIGNUP_RULES = (
    is_email("email", "Email must be valid"),
    length("password", "Password must be between 4 and 20 characters", min=4, max=20),
)

SIGNIN_RULES = (
    is_email("email", "Email must be valid"),
    not_empty("password", "Password must be not be empty"),
)


@router.get("/users/currentuser", response_model=CurrentUserResponse)
def get_current_user(claims: Optional[SessionClaims] = Depends(current_user)) -> CurrentUserResponse:
    """Return the identity asserted by the session cookie, if it verifies."""
    if claims is None:
        return CurrentUserResponse(currentUser=None)
    return CurrentUserResponse(currentUser=SessionUser.from_claims(claims))


@router.post("/users/signup", response_model=UserResponse, status_code=201, responses=_ERRORS)
def signup(request: Request, body: dict = Depends(validate_request(*SIGNUP_RULES))) -> JSONResponse:
    """Register a new account and sign it in."""
    user_store: UserStore = request.app.state.user_store
    email: str = body["email"]
    password: str = body["password"]

    if user_store.get_by_email(email) is not None:
        raise bad_request("Email in use")

    user = User(email=email, hashed_password=hash_password(password))
    user_store.create_user(user)

    token = create_session_token(user.id, user.email)
    resp = JSONResponse(status_code=201, content=UserResponse.from_user(user).model_dump())
    set_session_cookie(resp, token)
    return resp


@router.post("/users/signin", response_model=UserResponse, responses=_ERRORS)
def signin(request: Request, body: dict = Depends(validate_request(*SIGNIN_RULES))) -> JSONResponse:
    """Sign in with email and password.

    Unknown email and wrong password raise the same error so the response does
    not reveal which one failed.
    """
    user_store: UserStore = request.app.state.user_store
    user = authenticate_user(user_store, body["email"], body["password"])
    if user is None:
        logger.info("Rejected signin attempt")
        raise bad_request("Invalid credentials")

    token = create_session_token(user.id, user.email)
    resp = JSONResponse(status_code=200, content=UserResponse.from_user(user).model_dump())
    set_session_cookie(resp, token)
    return resp


@router.post("/users/signout")
def signout() -> JSONResponse:
    """Drop the session cookie. The token itself is not revoked."""
    resp = JSONResponse(content={})
    clear_session_cookie(resp)
    return resp
