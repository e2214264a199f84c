"""
api/limiter.py -- Shared slowapi rate limiter instance.

Imported by api/main.py (to mount SlowAPIMiddleware) and api/routes/auth.py
(to throttle POST /login with @limiter.limit()). A single shared instance
means every route counts against the same in-memory store.

Limits are keyed on the client address. The login limit itself comes from
Settings.login_rate_limit.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://", key_prefix="peerrate")
