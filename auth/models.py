"""
auth/models.py -- Domain dataclasses for authentication entities.

Pure data containers. UserStore does the persistence work, auth/tokens.py
does the cryptography, and the route layer decides what goes on the wire.

Layer rule: no imports from api/ or comments/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered account.

    id is None until UserStore.create_user() assigns one. hashed_password is
    the bcrypt hash; the plaintext password is never stored.
    """

    email: str
    hashed_password: str
    id: str | None = None
    created_at: str | None = None

    def to_public(self) -> dict:
        """Return the JSON representation sent to clients. Never includes the hash."""
        return {"id": self.id, "email": self.email}


@dataclass
class SessionClaims:
    """The identity asserted by a verified session token."""

    id: str
    email: str
    iat: int | None = None
