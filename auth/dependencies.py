"""
auth/dependencies.py -- FastAPI Depends() helpers for the session cookie.

current_user() is the soft variant: it returns the verified claims or None
and never raises. require_auth() wraps it and raises a NOT_AUTHORIZED
AppError when there is no valid session.

Verification is purely cryptographic. The claims are not re-checked against
the user store, so a token stays valid for as long as JWT_KEY is unchanged.
"""

from __future__ import annotations

from fastapi import Depends, Request

from auth.models import SessionClaims
from auth.tokens import decode_session, decode_session_token
from core.config import get_settings
from core.errors import not_authorized


def current_user(request: Request) -> SessionClaims | None:
    """Return the claims of the request's session token, or None."""
    raw = request.cookies.get(get_settings().session_cookie_name)
    if not raw:
        return None
    token = decode_session(raw)
    if token is None:
        return None
    return decode_session_token(token)


def require_auth(claims: SessionClaims | None = Depends(current_user)) -> SessionClaims:
    """Require a valid session.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(user: SessionClaims = Depends(require_auth)): ...
    """
    if claims is None:
        raise not_authorized()
    return claims
