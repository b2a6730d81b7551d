"""Unit tests for auth/tokens.py -- hashing, JWTs, and the cookie carrier."""

import pytest
from jose import jwt

from auth.models import User
from auth.tokens import (
    SigningKeyMissing,
    authenticate_user,
    create_session_token,
    decode_session,
    decode_session_token,
    encode_session,
    hash_password,
    verify_password,
)


def test_hash_is_salted_and_verifiable() -> None:
    first = hash_password("secret")
    second = hash_password("secret")
    assert first != second
    assert first != "secret"
    assert verify_password("secret", first)
    assert not verify_password("Secret", first)


def test_verify_against_malformed_hash_is_false() -> None:
    assert verify_password("secret", "not-a-bcrypt-hash") is False


def test_token_round_trip() -> None:
    claims = decode_session_token(create_session_token("abc123", "a@example.com"))
    assert claims is not None
    assert (claims.id, claims.email) == ("abc123", "a@example.com")
    assert isinstance(claims.iat, int)


def test_token_signed_with_other_key_is_rejected() -> None:
    forged = jwt.encode({"id": "abc123", "email": "a@example.com"}, "some-other-key", algorithm="HS256")
    assert decode_session_token(forged) is None


def test_token_missing_claims_is_rejected() -> None:
    from core.config import get_settings

    token = jwt.encode({"email": "a@example.com"}, get_settings().jwt_key, algorithm="HS256")
    assert decode_session_token(token) is None


def test_garbage_token_is_rejected() -> None:
    assert decode_session_token("definitely.not.ajwt") is None


def test_signing_without_key_raises(without_jwt_key) -> None:
    with pytest.raises(SigningKeyMissing):
        create_session_token("abc123", "a@example.com")


def test_decoding_without_key_returns_none(without_jwt_key) -> None:
    assert decode_session_token("a.b.c") is None


def test_session_carrier_round_trip() -> None:
    value = encode_session("header.payload.signature")
    assert "=" not in value
    assert decode_session(value) == "header.payload.signature"


@pytest.mark.parametrize("value", ["", "%%%", "bm90IGpzb24", "WzFd", "eyJqd3QiOiAxfQ"])
def test_malformed_session_values(value: str) -> None:
    """Empty, non-base64, non-JSON, a JSON list, and {"jwt": 1} all decode to None."""
    assert decode_session(value) is None


class _FakeStore:
    def __init__(self, user: User | None) -> None:
        self.user = user

    def get_by_email(self, email: str) -> User | None:
        if self.user is not None and self.user.email == email:
            return self.user
        return None


def test_authenticate_user_matches() -> None:
    user = User(email="a@example.com", hashed_password=hash_password("secret"), id="u1")
    assert authenticate_user(_FakeStore(user), "a@example.com", "secret") is user


@pytest.mark.parametrize(("email", "password"), [("a@example.com", "wrong"), ("b@example.com", "secret")])
def test_authenticate_user_failures_look_the_same(email: str, password: str) -> None:
    user = User(email="a@example.com", hashed_password=hash_password("secret"), id="u1")
    assert authenticate_user(_FakeStore(user), email, password) is None
