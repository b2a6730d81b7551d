"""
comments/models.py -- Domain dataclass for a single comment.

A comment is created on append and never mutated or deleted. content is
stored exactly as received, including None when the client omitted it.
"""

from __future__ import annotations

import secrets
from dataclasses import asdict, dataclass
from typing import Any


def new_comment_id() -> str:
    """Return an opaque 8-hex-character comment id (4 random bytes)."""
    return secrets.token_hex(4)


@dataclass(frozen=True)
class Comment:
    id: str
    content: Any

    def to_dict(self) -> dict:
        return asdict(self)
