"""
auth/models.py -- Domain dataclass for decoded bearer-token claims.

Pattern: Data class (pure data container, zero logic). Mirrors
users/models.py -- dataclasses own domain shape; tokens.py does the work.

Layer rule: no imports from api/ or ratings/.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TokenClaims:
    """The verified payload of an access token.

    Tokens are stateless: nothing here is stored server-side, and a token
    stays valid until expires_at regardless of what happens to the store.
    """

    user_id: int
    username: str
    issued_at: datetime
    expires_at: datetime
