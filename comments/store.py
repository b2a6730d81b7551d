"""
comments/store.py -- Storage for per-post comment lists.

CommentStore is the interface the route layer sees. It lives on
app.state.comment_store for the lifetime of the app, so tests get a fresh
store per client and the backing storage can change without touching routes.

Subclasses supply only two primitives:
  _load(post_id)            -- the stored list, or None if nothing was posted
  _save(post_id, comments)  -- replace the stored list

append_comment() is read / mutate / write-back over those primitives. The
three steps are not atomic: two concurrent appends to the same post can both
read the same list and the later write wins, dropping a comment. Neither
implementation guards against this.

Implementations:
  MemoryCommentStore -- dict of lists, the default.
  SqlCommentStore    -- SQLAlchemy Core table, selected by COMMENTS_DB_URL.

Usage:
    store = MemoryCommentStore()
    store.append_comment("123", "hello")   # [Comment(id="9f1c03ab", content="hello")]
    store.list_comments("123")
    store.close()
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from sqlalchemy import Column, Integer, MetaData, PrimaryKeyConstraint, String, Table, Text, create_engine
from sqlalchemy.engine import Engine

from comments.models import Comment, new_comment_id

logger = logging.getLogger("blogstack.comments.store")


class CommentStore(ABC):
    @abstractmethod
    def _load(self, post_id: str) -> Optional[list[Comment]]: ...

    @abstractmethod
    def _save(self, post_id: str, comments: list[Comment]) -> None: ...

    def list_comments(self, post_id: str) -> list[Comment]:
        """Return the post's comments in insertion order; [] if none exist."""
        return self._load(post_id) or []

    def append_comment(self, post_id: str, content: Any) -> list[Comment]:
        """Append a new comment and return the post's full updated list."""
        comments = self._load(post_id) or []
        comments.append(Comment(id=new_comment_id(), content=content))
        self._save(post_id, comments)
        return comments

    def close(self) -> None:
        pass


# ---------------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------------


class MemoryCommentStore(CommentStore):
    """Comments held in a process-local dict. Lost on restart."""

    def __init__(self) -> None:
        self._by_post: dict[str, list[Comment]] = {}

    def _load(self, post_id: str) -> Optional[list[Comment]]:
        stored = self._by_post.get(post_id)
        return list(stored) if stored is not None else None

    def _save(self, post_id: str, comments: list[Comment]) -> None:
        self._by_post[post_id] = list(comments)


# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_metadata = MetaData()

_comments = Table(
    "comments",
    _metadata,
    Column("post_id", String(255), nullable=False),
    Column("seq", Integer, nullable=False),  # position within the post's list
    Column("comment_id", String(8), nullable=False),
    Column("content", Text),  # JSON-encoded, so non-string content round-trips
    PrimaryKeyConstraint("post_id", "seq"),
)


class SqlCommentStore(CommentStore):
    """Comments persisted with SQLAlchemy Core.

    _save() rewrites the post's rows inside one transaction; the read that
    precedes it in append_comment() is a separate connection, so the
    lost-update window is the same as for the in-memory store.
    """

    def __init__(self, db_url: str) -> None:
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        _metadata.create_all(self.engine)

    def _load(self, post_id: str) -> Optional[list[Comment]]:
        with self.engine.connect() as conn:
            rows = conn.execute(
                _comments.select().where(_comments.c.post_id == post_id).order_by(_comments.c.seq)
            ).fetchall()
        if not rows:
            return None
        return [Comment(id=row.comment_id, content=json.loads(row.content)) for row in rows]

    def _save(self, post_id: str, comments: list[Comment]) -> None:
        with self.engine.begin() as conn:
            conn.execute(_comments.delete().where(_comments.c.post_id == post_id))
            if comments:
                conn.execute(
                    _comments.insert(),
                    [
                        {
                            "post_id": post_id,
                            "seq": seq,
                            "comment_id": c.id,
                            "content": json.dumps(c.content),
                        }
                        for seq, c in enumerate(comments)
                    ],
                )

    def close(self) -> None:
        self.engine.dispose()


def build_comment_store(db_url: str = "") -> CommentStore:
    """Return the SQL store when a URL is configured, else the in-memory one."""
    if db_url:
        logger.info("Using SQL comment store")
        return SqlCommentStore(db_url)
    logger.info("Using in-memory comment store")
    return MemoryCommentStore()
