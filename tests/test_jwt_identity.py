from __future__ import annotations

import time
from uuid import uuid4

import pytest
from jose import jwt

from infrastructure.adapters.identity.jwt_identity import JWTIdentityAdapter

SECRET = "test-secret"


def _token(secret: str = SECRET, **claims) -> str:
    payload = {"sub": str(uuid4()), "aud": "authenticated", "exp": int(time.time()) + 60}
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture()
def adapter() -> JWTIdentityAdapter:
    return JWTIdentityAdapter(secret=SECRET)


def test_valid_token_resolves_subject(adapter: JWTIdentityAdapter) -> None:
    user_id = uuid4()

    assert adapter.resolve_user_id(_token(sub=str(user_id))) == user_id


@pytest.mark.parametrize(
    "token_factory",
    [
        lambda: _token(secret="other-secret"),
        lambda: _token(aud="anon"),
        lambda: _token(exp=int(time.time()) - 60),
        lambda: _token(sub="not-a-uuid"),
        lambda: "garbage",
    ],
)
def test_invalid_tokens_resolve_to_none(adapter: JWTIdentityAdapter, token_factory) -> None:
    assert adapter.resolve_user_id(token_factory()) is None


def test_unconfigured_secret_rejects_everything() -> None:
    assert JWTIdentityAdapter(secret="").resolve_user_id(_token()) is None
