"""
ratings/service.py -- Business logic for rating one user from another.

Authorization model:
  The bearer token gates access to POST /rate, but by default it does not
  authorize individual fields. A caller authenticated as A may submit a
  rating "from" B, and a user may rate themselves. Both cases are logged as
  warnings so they show up in operations, but they are accepted.

  Settings.strict_rating=True turns both into errors:
    - token identity != from_username -> ForbiddenError (403)
    - from_username == to_username    -> RatingValidationError (400)

Layer rule: no imports from api/.
"""

from __future__ import annotations

import logging

from auth.models import TokenClaims
from core.config import get_settings
from core.errors import ForbiddenError, RatingValidationError, UserNotFoundError
from ratings.models import RatingReceipt
from users.models import Score
from users.store import UserRepository

logger = logging.getLogger("peerrate.ratings")


def _check_rater(from_username: str, to_username: str, rater: TokenClaims | None, strict: bool) -> None:
    if rater is not None and rater.username != from_username:
        if strict:
            raise ForbiddenError()
        logger.warning(
            "User %s submitted a rating on behalf of %s",
            rater.username,
            from_username,
        )
    if from_username == to_username:
        if strict:
            raise RatingValidationError("Users cannot rate themselves")
        logger.warning("User %s rated themselves", from_username)


def rate_user(
    store: UserRepository,
    from_username: str,
    to_username: str,
    score: Score,
    *,
    rater: TokenClaims | None = None,
) -> RatingReceipt:
    """Record a rating of to_username by from_username and echo it back.

    Args:
        store:         User repository holding both users.
        from_username: Registered user giving the score.
        to_username:   Registered user receiving the score.
        score:         Numeric score. The API layer has already checked the type.
        rater:         Claims of the authenticated caller, when known. Only
                       consulted for the identity checks described above.

    Raises:
        UserNotFoundError: either username is not registered.
        ForbiddenError / RatingValidationError: strict mode only.
    """
    if store.get_by_username(from_username) is None or store.get_by_username(to_username) is None:
        raise UserNotFoundError()

    _check_rater(from_username, to_username, rater, get_settings().strict_rating)

    store.add_rating(to_username, from_username=from_username, score=score)
    logger.info("Rating recorded: %s -> %s (%s)", from_username, to_username, score)
    return RatingReceipt(from_username=from_username, to_username=to_username, score=score)
