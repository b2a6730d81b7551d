"""
api/validation.py -- Declarative per-field request body rules.

Rules are plain values built by the constructors below and handed to
validate_request(), which returns a FastAPI dependency:

    SIGNUP_RULES = (
        is_email("email", "Email must be valid"),
        length("password", "Password must be between 4 and 20 characters", min=4, max=20),
    )

    @router.post("/signup")
    def signup(body: dict = Depends(validate_request(*SIGNUP_RULES))): ...

Every rule runs, so a response lists every failing field, one entry per failed
rule in declaration order. Rules marked trim=True write the trimmed string
back into the body the handler receives.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from email_validator import SPECIAL_USE_DOMAIN_NAMES, EmailNotValidError, validate_email
from fastapi import Request

from core.errors import FieldError, request_validation_error

_MISSING = object()


@dataclass(frozen=True)
class FieldRule:
    """A single predicate over one body field."""

    field: str
    message: str
    check: Callable[[str], bool]
    trim: bool = False

    def apply(self, body: dict) -> FieldError | None:
        value = body.get(self.field, _MISSING)
        if not isinstance(value, str):
            return FieldError(self.message, self.field)
        if self.trim:
            value = value.strip()
            body[self.field] = value
        if not self.check(value):
            return FieldError(self.message, self.field)
        return None


# ---------------------------------------------------------------------------
# Rule constructors
# ---------------------------------------------------------------------------


def _looks_like_email(value: str) -> bool:
    """Syntax-only check; reserved TLDs such as .test and .local are ordinary here.

    email-validator rejects special-use domains even with deliverability off,
    and test_environment only exempts .test, so any other reserved final
    label is swapped for "test" before the syntax and IDNA checks run.
    """
    local_part, at, domain = value.rpartition("@")
    head, dot, tld = domain.rpartition(".")
    if at and dot and tld.lower() in SPECIAL_USE_DOMAIN_NAMES:
        value = f"{local_part}@{head}.test"
    try:
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        return False
    return True


def is_email(field: str, message: str) -> FieldRule:
    return FieldRule(field=field, message=message, check=_looks_like_email)


def length(field: str, message: str, *, min: int = 0, max: int | None = None) -> FieldRule:  # noqa: A002
    """Length bounds are inclusive and measured after trimming."""

    def check(value: str) -> bool:
        if len(value) < min:
            return False
        return max is None or len(value) <= max

    return FieldRule(field=field, message=message, check=check, trim=True)


def not_empty(field: str, message: str) -> FieldRule:
    return FieldRule(field=field, message=message, check=bool, trim=True)


# ---------------------------------------------------------------------------
# Dependency factory
# ---------------------------------------------------------------------------


def run_rules(body: Any, rules: tuple[FieldRule, ...]) -> dict:
    """Evaluate rules against body; return the sanitized copy or raise.

    A body that is not a JSON object is validated as an empty object.
    """
    sanitized = dict(body) if isinstance(body, dict) else {}
    errors = [err for err in (rule.apply(sanitized) for rule in rules) if err is not None]
    if errors:
        raise request_validation_error(errors)
    return sanitized


async def read_json_body(request: Request) -> Any:
    """Return the parsed JSON body, or None when the request has no body."""
    raw = await request.body()
    if not raw:
        return None
    return await request.json()


def validate_request(*rules: FieldRule) -> Callable[[Request], Any]:
    """Build a dependency that validates the JSON body before the handler runs."""

    async def dependency(request: Request) -> dict:
        return run_rules(await read_json_body(request), rules)

    return dependency
