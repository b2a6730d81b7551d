"""
API response models for the blogstack services.

These Pydantic v2 models define the HTTP transport contract. They are kept
separate from the dataclasses in auth/models.py and comments/models.py, which
own the internal representation; route handlers map between the two.

Request bodies are not modelled here: they are checked by the declarative
rules in api/validation.py so failures come back in the {message, field}
envelope rather than FastAPI's default 422 shape.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from auth.models import SessionClaims, User
from comments.models import Comment

# ---------------------------------------------------------------------------
# Auth service
# ---------------------------------------------------------------------------


class UserResponse(BaseModel):
    """Public view of a user. The password hash is never part of it."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(**user.to_public())


class SessionUser(BaseModel):
    """Claims carried by a verified session token."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    iat: Optional[int] = None

    @classmethod
    def from_claims(cls, claims: SessionClaims) -> "SessionUser":
        return cls(id=claims.id, email=claims.email, iat=claims.iat)


class CurrentUserResponse(BaseModel):
    """Response for GET /api/users/currentuser. currentUser is null when signed out."""

    model_config = ConfigDict(frozen=True)

    currentUser: Optional[SessionUser] = None  # noqa: N815 -- wire name


# ---------------------------------------------------------------------------
# Comments service
# ---------------------------------------------------------------------------


class CommentResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    content: Any = None

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        return cls(id=comment.id, content=comment.content)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ErrorItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    field: Optional[str] = None


class ErrorResponse(BaseModel):
    """Envelope returned on every error: {"errors": [{"message", "field"?}]}."""

    model_config = ConfigDict(frozen=True)

    errors: list[ErrorItem]
