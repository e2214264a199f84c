"""
API request and response models for PeerRate REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in users/models.py and
ratings/models.py, which own the internal domain representation. Route
handlers map between the two -- in particular, User is always projected onto
UserPublic so hashed_password never reaches a response body.

Field names on the wire are camelCase where the public contract says so
(fromUsername, toUsername); Python attributes stay snake_case via aliases.
"""

from typing import Annotated, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator

from ratings.models import RatingReceipt
from users.models import User

# bcrypt only looks at the first 72 bytes of a password (and bcrypt>=5 refuses
# longer input), so registration rejects anything longer.
_BCRYPT_MAX_BYTES = 72

_Username = Annotated[StrictStr, Field(min_length=1, max_length=255)]
_Password = Annotated[StrictStr, Field(min_length=1, max_length=255)]

# Booleans are not numbers here: StrictInt and StrictFloat both reject them.
# Ints stay ints so a score of 5 is echoed as 5, not 5.0.
_Score = Union[StrictInt, Annotated[StrictFloat, Field(allow_inf_nan=False)]]


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request body for POST /register."""

    username: _Username
    password: _Password

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > _BCRYPT_MAX_BYTES:
            raise ValueError(f"password must be at most {_BCRYPT_MAX_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    """Request body for POST /login."""

    username: _Username
    password: _Password


class RateRequest(BaseModel):
    """Request body for POST /rate."""

    model_config = ConfigDict(populate_by_name=True)

    from_username: _Username = Field(alias="fromUsername")
    to_username: _Username = Field(alias="toUsername")
    score: _Score


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class UserPublic(BaseModel):
    """Public projection of a user: {id, username} and nothing else."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(id=user.id, username=user.username)


class TokenResponse(BaseModel):
    """Response for POST /login."""

    model_config = ConfigDict(frozen=True)

    token: str


class RatingResponse(BaseModel):
    """Response for POST /rate -- the accepted rating echoed back."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_username: str = Field(alias="fromUsername")
    to_username: str = Field(alias="toUsername")
    score: Union[int, float]

    @classmethod
    def from_receipt(cls, receipt: RatingReceipt) -> "RatingResponse":
        return cls(
            from_username=receipt.from_username,
            to_username=receipt.to_username,
            score=receipt.score,
        )


class ErrorResponse(BaseModel):
    """Error envelope returned on every 4xx/5xx response: {"error": message}."""

    model_config = ConfigDict(frozen=True)

    error: str


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    users: int
