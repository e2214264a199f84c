"""Unit tests for ratings/service.py.

Covers:
- echoed receipt and appended rating on success
- 404 when either side is unregistered, with nothing appended
- permissive default: mismatched rater and self-rating are accepted but logged
- strict mode: mismatched rater -> 403, self-rating -> 400
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest

from auth.models import TokenClaims
from core.errors import ForbiddenError, RatingValidationError, UserNotFoundError
from ratings.models import RatingReceipt
from ratings.service import rate_user
from users.models import Rating
from users.store import UserStore


def _claims(username: str) -> TokenClaims:
    now = datetime.now(timezone.utc)
    return TokenClaims(user_id=1, username=username, issued_at=now, expires_at=now + timedelta(hours=1))


@pytest.fixture
def populated(store: UserStore) -> UserStore:
    store.create_user("igor", "hash")
    store.create_user("maria", "hash")
    return store


def test_rate_echoes_input_and_appends(populated: UserStore) -> None:
    receipt = rate_user(populated, "igor", "maria", 5)
    assert receipt == RatingReceipt(from_username="igor", to_username="maria", score=5)
    assert populated.get_ratings("maria") == [Rating("igor", 5)]


def test_unknown_target_raises_not_found(populated: UserStore) -> None:
    with pytest.raises(UserNotFoundError) as exc_info:
        rate_user(populated, "igor", "rayla", 5)
    assert exc_info.value.message == "User not registered"


def test_unknown_rater_raises_not_found_and_appends_nothing(populated: UserStore) -> None:
    with pytest.raises(UserNotFoundError):
        rate_user(populated, "rayla", "maria", 5)
    assert populated.get_ratings("maria") == []


class TestPermissiveDefault:
    def test_rating_on_behalf_of_another_user_is_accepted(
        self, populated: UserStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="peerrate.ratings"):
            receipt = rate_user(populated, "igor", "maria", 4, rater=_claims("maria"))
        assert receipt.from_username == "igor"
        assert "on behalf of igor" in caplog.text

    def test_self_rating_is_accepted(self, populated: UserStore, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="peerrate.ratings"):
            rate_user(populated, "igor", "igor", 10, rater=_claims("igor"))
        assert populated.get_ratings("igor") == [Rating("igor", 10)]
        assert "rated themselves" in caplog.text


@pytest.mark.usefixtures("strict_rating")
class TestStrictMode:
    def test_mismatched_rater_forbidden(self, populated: UserStore) -> None:
        with pytest.raises(ForbiddenError):
            rate_user(populated, "igor", "maria", 4, rater=_claims("maria"))
        assert populated.get_ratings("maria") == []

    def test_self_rating_rejected(self, populated: UserStore) -> None:
        with pytest.raises(RatingValidationError):
            rate_user(populated, "igor", "igor", 4, rater=_claims("igor"))

    def test_matching_rater_allowed(self, populated: UserStore) -> None:
        rate_user(populated, "igor", "maria", 4, rater=_claims("igor"))
        assert populated.get_ratings("maria") == [Rating("igor", 4)]
