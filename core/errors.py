"""
core/errors.py -- Domain error taxonomy shared by both services.

Every expected failure is an AppError tagged with an ErrorKind. The HTTP layer
(api/errors.py) owns the single function that turns a kind into a status code,
so nothing below the route layer knows about HTTP.

Layer rule: core/ is the kernel. No imports from api/, auth/, or comments/.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    REQUEST_VALIDATION = "request_validation"
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    NOT_AUTHORIZED = "not_authorized"


@dataclass(frozen=True)
class FieldError:
    """One entry of the error envelope. field is None for non-field errors."""

    message: str
    field: Optional[str] = None

    def to_dict(self) -> dict:
        if self.field is None:
            return {"message": self.message}
        return {"message": self.message, "field": self.field}


class AppError(Exception):
    """A recognized failure carrying its kind and the entries to serialize."""

    def __init__(self, kind: ErrorKind, errors: list[FieldError]) -> None:
        self.kind = kind
        self.errors = errors
        super().__init__("; ".join(e.message for e in errors))

    def serialize(self) -> list[dict]:
        return [e.to_dict() for e in self.errors]


def request_validation_error(errors: list[FieldError]) -> AppError:
    return AppError(ErrorKind.REQUEST_VALIDATION, errors)


def bad_request(message: str) -> AppError:
    return AppError(ErrorKind.BAD_REQUEST, [FieldError(message)])


def not_found() -> AppError:
    return AppError(ErrorKind.NOT_FOUND, [FieldError("Not Found")])


def not_authorized() -> AppError:
    return AppError(ErrorKind.NOT_AUTHORIZED, [FieldError("Not authorized")])
