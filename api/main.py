"""
api/main.py -- FastAPI application entry point for PeerRate.

Exposes registration, login, user listing and peer rating over HTTP.

Run with:      python main.py --reload
               uvicorn api.main:app --reload

Middleware stack (outermost to innermost):
  1. TrustedHostMiddleware -- rejects requests with unexpected Host headers
  2. CORSMiddleware        -- adds CORS headers for allowed browser origins
  3. SlowAPIMiddleware     -- enforces per-route rate limits from api.limiter

Lifespan creates the in-memory UserStore on startup and closes it on
shutdown. Nothing in the store outlives the process.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.limiter import limiter
from api.models import ErrorResponse, HealthResponse
from api.routes.auth import router as auth_router
from api.routes.ratings import router as ratings_router
from api.routes.users import router as users_router
from core.config import get_settings
from core.errors import PeerRateError, UnauthorizedError
from users.store import UserStore

API_VERSION = "1.0.0"

_settings = get_settings()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("peerrate.api")


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared UserStore on startup and close it on shutdown.

    Route handlers reach the store through request.app.state.user_store, so
    tests can wire in their own store by swapping this lifespan.
    """
    logger.info("PeerRate API starting up")
    app.state.user_store = UserStore(id_start=_settings.user_id_start)
    logger.info(
        "User store initialized (id_start=%d, strict_rating=%s)",
        _settings.user_id_start,
        _settings.strict_rating,
    )

    yield

    app.state.user_store.close()
    logger.info("PeerRate API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="PeerRate API",
    description="User registration, bearer-token login, and peer ratings.",
    version=API_VERSION,
    lifespan=lifespan,
    # Swagger UI is public and lives at /api-docs; ReDoc is not served.
    docs_url="/api-docs",
    redoc_url=None,
)

# ---------------------------------------------------------------------------
# Middleware stack
# ---------------------------------------------------------------------------

app.add_middleware(
    TrustedHostMiddleware,
    allowed_hosts=_settings.allowed_hosts,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)

app.add_middleware(SlowAPIMiddleware)

# SlowAPI looks for app.state.limiter by convention.
app.state.limiter = limiter


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(auth_router, tags=["Auth"])
app.include_router(users_router, tags=["Users"])
app.include_router(ratings_router, tags=["Ratings"])


# ---------------------------------------------------------------------------
# Exception handlers
#
# Every error leaves the API as {"error": "<message>"} so clients can parse
# failures uniformly.
# ---------------------------------------------------------------------------


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )


@app.exception_handler(PeerRateError)
async def peerrate_error_handler(request: Request, exc: PeerRateError) -> JSONResponse:
    """Map domain errors raised by services and dependencies to their status codes."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return _error(exc.status_code, exc.message, headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 (not FastAPI's default 422) when a body is missing fields or has the wrong types."""
    errors = exc.errors()
    # For json_invalid, loc[1] is the parse offset, not a field name.
    if any(err.get("type") == "json_invalid" for err in errors):
        return _error(400, "Malformed JSON body")
    # loc is ("body", <field>, ...); union members add a trailing type tag.
    fields = sorted({str(err["loc"][1]) if len(err["loc"]) > 1 else "body" for err in errors})
    return _error(400, f"Invalid or missing fields: {', '.join(fields)}")


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 when a rate limit is exceeded.

    Retry-After is the length of the exceeded limit's window in seconds.
    """
    retry_after = exc.limit.limit.get_expiry()
    return _error(429, "Too many requests.", {"Retry-After": str(retry_after)})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap routing errors (unknown path, wrong method) in the same envelope."""
    return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors.

    The raw exception is written to the log only, never to the response body.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error(500, PeerRateError.default_message)


# ---------------------------------------------------------------------------
# Health endpoint
#
# Defined directly in main.py (not in a router) so it is always reachable.
# No auth and no rate limit -- load balancers and monitors must not be blocked.
# ---------------------------------------------------------------------------


@app.get("/health", tags=["Health"])
async def health(request: Request) -> HealthResponse:
    """Return API liveness, version and the number of registered users."""
    return HealthResponse(version=API_VERSION, users=request.app.state.user_store.count())
