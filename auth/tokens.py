"""
auth/tokens.py -- Bearer token issue and verification.

JWT: python-jose with HS256. Tokens carry user_id, username, issued-at and
expiry, signed with Settings.secret_key. Expiry is issued-at plus
Settings.token_expire_seconds (one hour by default). There is no revocation
list -- a token is valid until it expires.

Verification returns None on any failure (malformed, bad signature, expired,
missing claims). The dependency layer turns that into a generic 401, so the
client never learns which check failed.

Layer rule: no imports from api/, users/, or ratings/.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from auth.models import TokenClaims
from core.config import get_settings

logger = logging.getLogger("peerrate.auth")

_ALGORITHM = "HS256"
_REQUIRED_CLAIMS = ("user_id", "username", "iat", "exp")


def create_access_token(user_id: int, username: str, issued_at: datetime | None = None) -> str:
    """Encode a signed JWT for the given identity.

    Args:
        user_id:   Numeric user id from the store.
        username:  Username, also stored as the JWT subject claim.
        issued_at: Issue time (UTC). Defaults to now. Given the same secret,
                   identity and issued_at, the token is byte-for-byte identical.
    """
    settings = get_settings()
    issued_at = issued_at or datetime.now(timezone.utc)
    payload = {
        "sub": username,
        "user_id": user_id,
        "username": username,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=settings.token_expire_seconds),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> TokenClaims | None:
    """Verify a JWT and return its claims, or None if it is not acceptable."""
    try:
        payload = jwt.decode(token, get_settings().secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        logger.debug("Rejected token: %s", exc)
        return None
    if any(claim not in payload for claim in _REQUIRED_CLAIMS):
        return None
    if not isinstance(payload["user_id"], int) or not isinstance(payload["username"], str):
        return None
    return TokenClaims(
        user_id=payload["user_id"],
        username=payload["username"],
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
