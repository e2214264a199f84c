"""
api/routes/users.py -- Registered user listing.

Read-only. Every entry is projected through UserPublic, so password hashes
and ratings are never part of the response regardless of store contents.
"""

from fastapi import APIRouter, Depends, Request

from api.models import UserPublic
from auth.dependencies import get_current_claims
from users.store import UserStore

# Auth policy:
# - GET /users: requires a bearer token
# Router-level dependency enforces auth; the handler does not repeat it.
router = APIRouter(dependencies=[Depends(get_current_claims)])


@router.get("/users", response_model=list[UserPublic])
def list_users(request: Request) -> list[UserPublic]:
    """Return every registered user as {id, username}, in registration order."""
    user_store: UserStore = request.app.state.user_store
    return [UserPublic.from_user(u) for u in user_store.list_users()]
