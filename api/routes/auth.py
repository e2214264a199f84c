"""
api/routes/auth.py -- Registration and login endpoints.

Routes:
  POST /register -- create an account; 201 {id, username}, 409 if taken
  POST /login    -- exchange username/password for a bearer token

Security:
  POST /login is rate-limited per client address (Settings.login_rate_limit).
  authenticate_user() provides timing equalization -- use it, never inline
  get_by_username() + verify_password().
  Login responses carry Cache-Control: no-store.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import ErrorResponse, LoginRequest, RegisterRequest, TokenResponse, UserPublic
from auth.credentials import authenticate_user, register_user
from auth.tokens import create_access_token
from core.config import get_settings
from core.errors import AuthenticationError
from users.store import UserStore

# Auth policy:
# - POST /register: public -- anyone may create an account
# - POST /login:    public -- login endpoint must be unauthenticated
router = APIRouter()


@router.post("/register", response_model=UserPublic, status_code=201)
def register(request: Request, body: RegisterRequest) -> UserPublic:
    """Register a new user. The password hash is never returned."""
    user_store: UserStore = request.app.state.user_store
    user = register_user(user_store, body.username, body.password)
    return UserPublic.from_user(user)


def _login_rate_limit() -> str:
    # Read per request so the configured limit can change without re-importing routes.
    return get_settings().login_rate_limit


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
@limiter.limit(_login_rate_limit)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with username and password; return a one-hour bearer token.

    Wrong username and wrong password produce the same 401 body, so the
    response does not reveal whether the username exists.
    """
    user_store: UserStore = request.app.state.user_store
    user = authenticate_user(user_store, body.username, body.password)
    if user is None:
        resp = JSONResponse(
            status_code=AuthenticationError.status_code,
            content=ErrorResponse(error=AuthenticationError.default_message).model_dump(),
        )
        resp.headers["Cache-Control"] = "no-store"
        return resp

    token = create_access_token(user.id, user.username)
    resp = JSONResponse(status_code=200, content=TokenResponse(token=token).model_dump())
    resp.headers["Cache-Control"] = "no-store"
    return resp
