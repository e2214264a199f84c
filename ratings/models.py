"""
ratings/models.py -- Result type returned by the rating service.

Layer rule: no imports from api/ or auth/.
"""

from __future__ import annotations

from dataclasses import dataclass

from users.models import Score


@dataclass(frozen=True)
class RatingReceipt:
    """Echo of an accepted rating: who rated whom, and with what score.

    This is the documented response shape of POST /rate -- the input echoed
    back, not an aggregate.
    """

    from_username: str
    to_username: str
    score: Score
