"""
api/routes/ratings.py -- Submit a rating of one user by another.

Routes:
  POST /rate -- 201 {fromUsername, toUsername, score}

The bearer token gates access. Whether its identity must match fromUsername
is decided by the rating service (Settings.strict_rating), not here.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from api.models import ErrorResponse, RateRequest, RatingResponse
from auth.dependencies import get_current_claims
from auth.models import TokenClaims
from ratings.service import rate_user
from users.store import UserStore

# Auth policy:
# - POST /rate: requires a bearer token
router = APIRouter()


@router.post(
    "/rate",
    response_model=RatingResponse,
    status_code=201,
    responses={404: {"model": ErrorResponse}},
)
def rate(
    request: Request,
    body: RateRequest,
    claims: TokenClaims = Depends(get_current_claims),
) -> RatingResponse:
    """Append a rating to toUsername's record and echo it back."""
    user_store: UserStore = request.app.state.user_store
    receipt = rate_user(
        user_store,
        body.from_username,
        body.to_username,
        body.score,
        rater=claims,
    )
    return RatingResponse.from_receipt(receipt)
