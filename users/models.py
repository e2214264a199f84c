"""
users/models.py -- Domain dataclasses for registered users and their ratings.

Pattern: Data class (pure data container, zero logic). The store and the
services do the work; the API layer projects User onto {id, username} so
hashed_password and ratings never cross the HTTP boundary.

Layer rule: no imports from api/, auth/, or ratings/.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

Score = Union[int, float]


@dataclass
class Rating:
    """One score given to a user. Appended to User.ratings, never edited."""

    from_username: str
    score: Score


@dataclass
class User:
    """A registered identity.

    id and username are fixed at creation. hashed_password is a bcrypt hash
    and must never be returned to clients. ratings is append-only.
    """

    id: int
    username: str
    hashed_password: str
    ratings: list[Rating] = field(default_factory=list)
