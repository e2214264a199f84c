"""
auth/dependencies.py -- FastAPI Depends() helpers for bearer authentication.

Protected routes accept exactly one credential: an
"Authorization: Bearer <token>" header. The scheme name is matched
case-insensitively.

try_get_current_claims() is the soft variant (returns None on failure).
get_current_claims() wraps it and raises UnauthorizedError (401) otherwise.
The 401 body is the same for missing, malformed, tampered and expired tokens.

Layer rule: no imports from api/ or ratings/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.models import TokenClaims
from auth.tokens import decode_access_token
from core.errors import UnauthorizedError


def _bearer_token(request: Request) -> str | None:
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def try_get_current_claims(request: Request) -> TokenClaims | None:
    """Return verified token claims for the request, or None. Never raises."""
    token = _bearer_token(request)
    if token is None:
        return None
    return decode_access_token(token)


def get_current_claims(request: Request) -> TokenClaims:
    """Require a valid bearer token. Raises UnauthorizedError (401) otherwise.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(claims: TokenClaims = Depends(get_current_claims)): ...
    """
    claims = try_get_current_claims(request)
    if claims is None:
        raise UnauthorizedError()
    return claims
