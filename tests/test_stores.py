"""Unit tests for auth/store.py and comments/store.py.

Covers:
- UserStore create / lookup by email, UNIQUE email enforcement
- CommentStore list / append semantics for both implementations
- build_comment_store() selects the implementation from the URL
"""

import re

import pytest
from sqlalchemy.exc import IntegrityError

from auth.models import User
from comments.store import MemoryCommentStore, SqlCommentStore, build_comment_store

# ---------------------------------------------------------------------------
# UserStore
# ---------------------------------------------------------------------------


def test_create_and_lookup_user(user_store) -> None:
    user = User(email="a@example.com", hashed_password="hash")
    user_id = user_store.create_user(user)
    assert re.fullmatch(r"[0-9a-f]{24}", user_id)
    assert user.id == user_id
    assert user.created_at

    by_email = user_store.get_by_email("a@example.com")
    assert by_email is not None
    assert by_email.id == user_id
    assert by_email.hashed_password == "hash"


def test_lookup_misses_return_none(user_store) -> None:
    assert user_store.get_by_email("ghost@example.com") is None


def test_duplicate_email_violates_unique_constraint(user_store) -> None:
    user_store.create_user(User(email="a@example.com", hashed_password="h1"))
    with pytest.raises(IntegrityError):
        user_store.create_user(User(email="a@example.com", hashed_password="h2"))
    assert user_store.count_users() == 1


def test_public_view_hides_hash() -> None:
    user = User(email="a@example.com", hashed_password="h", id="x")
    assert user.to_public() == {"id": "x", "email": "a@example.com"}


# ---------------------------------------------------------------------------
# CommentStore (both implementations via the parametrized fixture)
# ---------------------------------------------------------------------------


def test_list_unknown_post_is_empty(comment_store) -> None:
    assert comment_store.list_comments("nope") == []


def test_append_returns_full_list_in_order(comment_store) -> None:
    comment_store.append_comment("p", "a")
    result = comment_store.append_comment("p", "b")
    assert [c.content for c in result] == ["a", "b"]
    assert [c.content for c in comment_store.list_comments("p")] == ["a", "b"]


def test_append_generates_hex_ids(comment_store) -> None:
    (comment,) = comment_store.append_comment("p", "x")
    assert re.fullmatch(r"[0-9a-f]{8}", comment.id)


def test_non_string_content_is_kept(comment_store) -> None:
    comment_store.append_comment("p", None)
    comment_store.append_comment("p", {"nested": [1, 2]})
    assert [c.content for c in comment_store.list_comments("p")] == [None, {"nested": [1, 2]}]


def test_returned_list_is_a_snapshot(comment_store) -> None:
    listed = comment_store.list_comments("p")
    listed.append("not stored")
    comment_store.append_comment("p", "real")
    assert [c.content for c in comment_store.list_comments("p")] == ["real"]


def test_sql_store_survives_reopen(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'comments.db'}"
    first = SqlCommentStore(url)
    first.append_comment("p", "kept")
    first.close()

    second = SqlCommentStore(url)
    assert [c.content for c in second.list_comments("p")] == ["kept"]
    second.close()


def test_build_comment_store_selects_implementation(tmp_path) -> None:
    assert isinstance(build_comment_store(""), MemoryCommentStore)
    sql = build_comment_store(f"sqlite:///{tmp_path / 'c.db'}")
    assert isinstance(sql, SqlCommentStore)
    sql.close()
