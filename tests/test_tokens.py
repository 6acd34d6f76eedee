"""Tests for the token helper utilities."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from fitbit_gateway.tokens import TokenData, load_token_file, write_token_file


def test_load_token_file_normalizes_scope(tmp_path):
    token_payload = {
        "access_token": "abc",
        "refresh_token": "refresh",
        "expires_at": "2099-01-01T00:00:00+00:00",
        "scope": "nutrition profile",
        "token_type": "Bearer",
        "user_id": "228TQ4",
    }
    path = tmp_path / "tokens.json"
    path.write_text(json.dumps(token_payload), encoding="utf-8")

    token = load_token_file(path)

    assert token.scope == ["nutrition", "profile"]
    assert token.user_id == "228TQ4"
    assert not token.will_expire_within()


def test_expires_in_sets_expiry():
    token = TokenData.from_dict({"access_token": "abc", "expires_in": 30})

    assert token.will_expire_within()
    assert not token.will_expire_within(timedelta(seconds=0))


def test_missing_access_token_is_rejected():
    with pytest.raises(ValueError):
        TokenData.from_dict({"refresh_token": "abc"})


def test_write_token_file_round_trip(tmp_path):
    expires_at = datetime.now(timezone.utc) + timedelta(hours=1)
    token = TokenData(
        access_token="abc",
        refresh_token="def",
        token_type="Bearer",
        expires_at=expires_at,
        scope=["nutrition"],
    )
    path = tmp_path / "nested" / "tokens.json"

    write_token_file(token, path)

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["access_token"] == "abc"
    assert saved["refresh_token"] == "def"
    assert saved["scope"] == "nutrition"
    assert load_token_file(path).expires_at == expires_at


def test_from_bearer_token_keeps_previous_refresh_token_and_user():
    previous = TokenData(access_token="old", refresh_token="keep", user_id="228TQ4")
    bearer = SimpleNamespace(
        access_token="new",
        refresh_token=None,
        expires_at=datetime(2099, 1, 1, tzinfo=timezone.utc),
        scope="nutrition",
        token_type="Bearer",
    )

    token = TokenData.from_bearer_token(bearer, previous=previous)

    assert token.access_token == "new"
    assert token.refresh_token == "keep"
    assert token.user_id == "228TQ4"
    assert token.scope == ["nutrition"]
