"""Unit tests for auth/tokens.py -- bearer token issue and verification."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import jwt

from auth.tokens import create_access_token, decode_access_token
from core.config import get_settings


def test_issue_then_verify_roundtrip() -> None:
    token = create_access_token(7, "igor")
    claims = decode_access_token(token)
    assert claims is not None
    assert claims.username == "igor"
    assert claims.user_id == 7


def test_expiry_is_one_hour_after_issue() -> None:
    issued = datetime.now(timezone.utc).replace(microsecond=0)
    claims = decode_access_token(create_access_token(1, "igor", issued_at=issued))
    assert claims.issued_at == issued
    assert claims.expires_at - claims.issued_at == timedelta(hours=1)


def test_deterministic_for_same_inputs() -> None:
    issued = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert create_access_token(1, "igor", issued_at=issued) == create_access_token(1, "igor", issued_at=issued)


def test_expired_token_rejected() -> None:
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    assert decode_access_token(create_access_token(1, "igor", issued_at=issued)) is None


def test_wrong_signature_rejected() -> None:
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    forged = jwt.encode(
        {"user_id": 1, "username": "igor", "iat": datetime.now(timezone.utc), "exp": exp},
        "some-other-secret-that-is-long-enough-xx",
        algorithm="HS256",
    )
    assert decode_access_token(forged) is None


def test_malformed_token_rejected() -> None:
    assert decode_access_token("not-a-jwt") is None
    assert decode_access_token("") is None


def test_missing_identity_claims_rejected() -> None:
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"sub": "igor", "exp": exp}, get_settings().secret_key, algorithm="HS256")
    assert decode_access_token(token) is None


def test_other_algorithm_rejected() -> None:
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode(
        {"user_id": 1, "username": "igor", "iat": datetime.now(timezone.utc), "exp": exp},
        get_settings().secret_key,
        algorithm="HS512",
    )
    # Only HS256 is accepted, even with the right key.
    assert decode_access_token(token) is None
