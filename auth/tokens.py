"""
auth/tokens.py -- Password hashing, session JWTs, and the session cookie carrier.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with JWT_KEY and carry the
       user's id and email plus an iat claim. There is no expiry and no
       server-side revocation; signout only clears the client's cookie.
       Verification returns None on any failure -- the route layer treats
       that as "no current user".

  JWT_KEY: read from core.config.get_settings() at call time, not at import.
       A missing key is not a startup error; create_session_token() raises
       SigningKeyMissing and the error translator answers with the generic 400.

  Passwords: bcrypt directly (no passlib wrapper). The _DUMMY_HASH constant
       lets authenticate_user() run a full bcrypt check for unknown emails
       so response time does not reveal whether an account exists.

  Cookie carrier: the "session" cookie holds unpadded URL-safe
       base64(JSON {"jwt": token}).
       httponly and samesite=lax always; secure only when SECURE_COOKIES=true.

Layer rule: no imports from api/ or comments/. Import from core/ is allowed.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import bcrypt
from jose import JWTError, jwt

from auth.models import SessionClaims
from core.config import get_settings

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

logger = logging.getLogger("blogstack.auth")

_ALGORITHM = "HS256"


class SigningKeyMissing(RuntimeError):
    """Raised when a token must be signed but JWT_KEY is not configured."""


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """Return a salted bcrypt hash of the given plaintext password.

    The signup rules cap passwords at 20 characters, well below bcrypt's
    72-byte truncation threshold.
    """
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


# Computed once at module load so the first signin is not measurably slower.
_DUMMY_HASH: str = hash_password("blogstack_timing_dummy")


def authenticate_user(store: UserStore, email: str, password: str) -> User | None:
    """Return the User when email and password match, None otherwise.

    Unknown email and wrong password are indistinguishable to the caller,
    and both cost one bcrypt check.
    """
    user = store.get_by_email(email)
    if user is None:
        verify_password(password, _DUMMY_HASH)
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_session_token(user_id: str, email: str) -> str:
    """Sign a JWT asserting {id, email}."""
    key = get_settings().jwt_key
    if not key:
        logger.error("JWT_KEY is not set; cannot sign a session token")
        raise SigningKeyMissing("JWT_KEY must be defined")
    payload = {
        "id": user_id,
        "email": email,
        "iat": int(datetime.now(timezone.utc).timestamp()),
    }
    return jwt.encode(payload, key, algorithm=_ALGORITHM)


def decode_session_token(token: str) -> SessionClaims | None:
    """Verify a JWT and return its claims, or None on any failure."""
    key = get_settings().jwt_key
    if not key:
        return None
    try:
        payload = jwt.decode(token, key, algorithms=[_ALGORITHM])
    except JWTError:
        return None
    if not isinstance(payload.get("id"), str) or not isinstance(payload.get("email"), str):
        return None
    return SessionClaims(id=payload["id"], email=payload["email"], iat=payload.get("iat"))


# ---------------------------------------------------------------------------
# Cookie carrier
# ---------------------------------------------------------------------------


def encode_session(token: str) -> str:
    """Unpadded URL-safe base64, so the cookie value never needs quoting."""
    raw = base64.urlsafe_b64encode(json.dumps({"jwt": token}).encode("utf-8"))
    return raw.rstrip(b"=").decode("ascii")


def decode_session(value: str) -> str | None:
    """Return the JWT held by a session cookie value, or None if malformed."""
    padded = value + "=" * (-len(value) % 4)
    try:
        data = json.loads(base64.b64decode(padded, altchars=b"-_", validate=True))
    except (binascii.Error, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    token = data.get("jwt")
    return token if isinstance(token, str) else None


def set_session_cookie(response, token: str) -> None:
    """Attach the signed token to the response as the session cookie."""
    settings = get_settings()
    response.set_cookie(
        settings.session_cookie_name,
        value=encode_session(token),
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
        path="/",
    )


def clear_session_cookie(response) -> None:
    settings = get_settings()
    response.delete_cookie(
        settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
    )
