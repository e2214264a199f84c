"""
core/errors.py -- Error taxonomy shared by services and the HTTP layer.

Services raise these; api/main.py maps every PeerRateError to a JSON
response of the form {"error": message} with the class's status code.
Keeping the status code on the exception means the mapping lives in one
place instead of being repeated in each route handler.

None of these are fatal to the process. Each request is independently
recoverable and no operation is retried internally.
"""

from __future__ import annotations


class PeerRateError(Exception):
    """Base class for errors that are surfaced to API clients."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class RequestValidationFailed(PeerRateError):
    """Missing or malformed request input (400)."""

    status_code = 400
    default_message = "Invalid request body."


class RatingValidationError(PeerRateError):
    """A rating that is well-formed but not allowed, e.g. a self-rating in strict mode (400)."""

    status_code = 400
    default_message = "Invalid rating."


class AuthenticationError(PeerRateError):
    """Wrong username or password on login (401)."""

    status_code = 401
    default_message = "Invalid credentials"


class UnauthorizedError(PeerRateError):
    """Missing, malformed, tampered or expired bearer token (401).

    The message is deliberately generic: clients never learn which of the
    four cases applied.
    """

    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(PeerRateError):
    """Authenticated, but not allowed to act for the requested identity (403)."""

    status_code = 403
    default_message = "Not allowed to rate on behalf of another user"


class UsernameTakenError(PeerRateError):
    """Registration for a username that already exists (409)."""

    status_code = 409
    default_message = "User already exists"


class UserNotFoundError(PeerRateError):
    """A referenced username does not resolve to a registered user (404)."""

    status_code = 404
    default_message = "User not registered"
