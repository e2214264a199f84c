"""
core/config.py -- PeerRate settings, read from the environment and .env.

get_settings() is the only way other modules see configuration. It is
cached, so tests that change environment variables call
get_settings.cache_clear() afterwards.

The token signing key (SECRET_KEY) must come from the environment and be at
least 32 characters. With DEBUG=true a throwaway key is generated instead.

Layer rule: no imports from api/, auth/, users/, or ratings/.
"""

import logging
import secrets
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("peerrate.config")


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file (given DEBUG=true).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    log_level: str = "INFO"
    # Empty string is the sentinel for "not configured". The model_validator
    # below either generates a dev key or raises, so callers never see "".
    secret_key: str = ""

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    # Tokens live for exactly one hour unless overridden.
    token_expire_seconds: int = Field(default=3600, gt=0)
    # bcrypt cost factor. 4 is the library minimum, 31 the maximum.
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    login_rate_limit: str = "100/minute"

    # ------------------------------------------------------------------
    # Users and ratings
    # ------------------------------------------------------------------

    user_id_start: int = Field(default=1, ge=0)
    # When true, POST /rate requires fromUsername to match the token identity
    # and rejects self-ratings. Off by default (permissive behaviour).
    strict_rating: bool = False

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    # Lists are read from the environment as JSON, e.g. ALLOWED_HOSTS='["api.example.com"]'.
    allowed_hosts: list[str] = ["*"]
    cors_origins: list[str] = []

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        """Fill in or reject SECRET_KEY.

        A missing key is generated when DEBUG is on (tokens then die with the
        process) and is a startup error otherwise.
        """
        if not self.secret_key and not self.debug:
            raise ValueError("SECRET_KEY is required unless DEBUG=true.")
        if not self.secret_key:
            self.secret_key = secrets.token_hex(32)
            logger.warning("DEBUG is on and SECRET_KEY is unset; signing tokens with a random per-process key.")
        if len(self.secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
