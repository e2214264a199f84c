"""
auth/credentials.py -- Registration and password authentication.

register_user() enforces username uniqueness (via the store's atomic
create_user) and hashes the password before anything is stored.

authenticate_user() always runs exactly one bcrypt verification, whether or
not the username exists:
  - Unknown username: bcrypt runs against _DUMMY_HASH (same cost as a real check)
  - Wrong password:   bcrypt runs against the real hash
so response time does not reveal which usernames are registered.

Layer rule: no imports from api/ or ratings/.
"""

from __future__ import annotations

import logging

from auth.passwords import hash_password, verify_password
from users.models import User
from users.store import UserRepository

logger = logging.getLogger("peerrate.auth")


# Timing equalization dummy hash. Computed once at module load, with the
# configured cost factor, so a login for an unknown username runs exactly one
# bcrypt check, the same as a login with a wrong password.
_DUMMY_HASH: str = hash_password("peerrate_timing_dummy")


def register_user(store: UserRepository, username: str, password: str) -> User:
    """Create a user with a hashed password and return the stored record.

    Callers must have already checked that both fields are non-empty strings.
    Raises UsernameTakenError if the username is already registered.

    The hash is computed before the store lock is taken, so a duplicate
    registration still pays for one bcrypt round. The store's check-and-insert
    is what guarantees uniqueness.
    """
    hashed = hash_password(password)
    user = store.create_user(username, hashed)
    logger.info("Registered user id=%d username=%s", user.id, user.username)
    return user


def authenticate_user(store: UserRepository, username: str, password: str) -> User | None:
    """Return the matching User on a correct username/password pair, else None.

    An unknown username is not an error. The caller maps None to a 401.
    """
    user = store.get_by_username(username)
    if user is None:
        # Equalize timing -- do NOT return before running bcrypt.
        verify_password(password, _DUMMY_HASH)
        logger.info("Login failed: unknown username")
        return None
    if not verify_password(password, user.hashed_password):
        logger.info("Login failed for user id=%d", user.id)
        return None
    return user
