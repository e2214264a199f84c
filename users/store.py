"""
users/store.py -- In-memory repository for User records.

Pattern: Repository. UserStore is the single source of truth for identities
and ratings. Services and routes never touch the underlying dict directly.

Storage:
  A dict keyed by username. Python dicts preserve insertion order, so
  list_users() returns users in registration order without a second index,
  and get_by_username() is O(1).

Concurrency:
  FastAPI runs sync route handlers in a thread pool, so two registrations can
  race. Every read and mutation takes self._lock. create_user() performs the
  uniqueness check, id assignment and insert inside one critical section, so
  usernames stay unique and ids stay strictly increasing under concurrency.

Ids:
  Assigned from a counter that starts at id_start and only moves forward.
  clear() drops users but keeps the counter, so ids are never reused.

Nothing survives the process. There is no persistence layer.

Layer rule: no imports from api/, auth/, or ratings/.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from core.errors import UserNotFoundError, UsernameTakenError
from users.models import Rating, Score, User

logger = logging.getLogger("peerrate.users")


class UserRepository(Protocol):
    """The store interface the credential and rating services depend on."""

    def get_by_username(self, username: str) -> User | None: ...

    def create_user(self, username: str, hashed_password: str) -> User: ...

    def list_users(self) -> list[User]: ...

    def add_rating(self, target_username: str, from_username: str, score: Score) -> Rating: ...


class UserStore:
    """Thread-safe in-memory repository for User entities.

    Usage:
        store = UserStore()
        user = store.create_user("igor", hash_password("123456"))
        store.get_by_username("igor")
        store.add_rating("igor", from_username="maria", score=5)
    """

    def __init__(self, id_start: int = 1) -> None:
        self._users: dict[str, User] = {}
        self._next_id = id_start
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_username(self, username: str) -> User | None:
        """Look up a user by exact username (case-sensitive). Returns None if not found."""
        with self._lock:
            return self._users.get(username)

    def list_users(self) -> list[User]:
        """Return all users in registration order.

        Returns a new list so callers can iterate without holding the lock.
        Callers are responsible for projecting away hashed_password.
        """
        with self._lock:
            return list(self._users.values())

    def get_ratings(self, username: str) -> list[Rating]:
        """Return a copy of the ratings a user has received, oldest first."""
        with self._lock:
            user = self._users.get(username)
            if user is None:
                raise UserNotFoundError()
            return list(user.ratings)

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_user(self, username: str, hashed_password: str) -> User:
        """Insert a new user and return it with its assigned id.

        Raises UsernameTakenError if the username already exists. The
        existing record is never overwritten.
        """
        with self._lock:
            if username in self._users:
                raise UsernameTakenError()
            user = User(id=self._next_id, username=username, hashed_password=hashed_password)
            self._users[username] = user
            self._next_id += 1
        logger.debug("Stored user id=%d", user.id)
        return user

    def add_rating(self, target_username: str, from_username: str, score: Score) -> Rating:
        """Append a rating to target_username's record.

        Raises UserNotFoundError if the target does not exist. The rater is
        not checked here -- that is the rating service's job.
        """
        rating = Rating(from_username=from_username, score=score)
        with self._lock:
            target = self._users.get(target_username)
            if target is None:
                raise UserNotFoundError()
            target.ratings.append(rating)
        return rating

    def clear(self) -> None:
        """Drop every user. The id counter is kept so ids are never reused."""
        with self._lock:
            self._users.clear()

    def close(self) -> None:
        """Release resources. Nothing to release for the in-memory backing."""
        logger.debug("UserStore closed with %d users", len(self._users))
