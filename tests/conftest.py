"""
tests/conftest.py -- Shared test fixtures for PeerRate.

This module provides:
  - store:          a fresh in-memory UserStore
  - client:         (TestClient, UserStore) wired through a patched lifespan
  - register/login helpers for building Authorization headers

Every client fixture gets its own UserStore, so tests never see users created
by another test.

Environment must be prepared before any project import: get_settings() is an
lru_cache singleton, and api.main reads it at import time.
  DEBUG=true            -- dev mode, no production SECRET_KEY checks beyond length
  SECRET_KEY            -- fixed, so clearing the settings cache keeps tokens valid
  BCRYPT_ROUNDS=4       -- bcrypt's minimum cost keeps the suite fast
  LOGIN_RATE_LIMIT      -- high enough that the suite never trips it
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: set before any api/auth/core import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SECRET_KEY", "peerrate-test-secret-key-0123456789abcdef")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOGIN_RATE_LIMIT", "10000/minute")

import pytest
from fastapi.testclient import TestClient

from api.limiter import limiter
from api.main import app
from core.config import get_settings
from users.store import UserStore

DEFAULT_PASSWORD = "123456"


def _patch_lifespan(user_store: UserStore):
    """Return a lifespan that wires a pre-created store into app.state."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        yield

    return test_lifespan


def register(client: TestClient, username: str, password: str = DEFAULT_PASSWORD):
    return client.post("/register", json={"username": username, "password": password})


def login(client: TestClient, username: str, password: str = DEFAULT_PASSWORD):
    return client.post("/login", json={"username": username, "password": password})


def auth_headers(client: TestClient, username: str, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
    """Register (if needed) and log in; return a Bearer Authorization header."""
    register(client, username, password)
    resp = login(client, username, password)
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def store() -> UserStore:
    return UserStore()


@pytest.fixture
def client(store: UserStore) -> Generator[tuple[TestClient, UserStore], None, None]:
    """Yield (client, store) with the real app and an isolated store."""
    app.router.lifespan_context = _patch_lifespan(store)
    with TestClient(app, raise_server_exceptions=True) as test_client:
        yield test_client, store


@pytest.fixture
def strict_rating(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Enable STRICT_RATING for one test, then drop the cached Settings."""
    monkeypatch.setenv("STRICT_RATING", "true")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def low_login_limit(monkeypatch: pytest.MonkeyPatch) -> Generator[str, None, None]:
    """Drop the login limit to 2/minute with empty limiter counters."""
    monkeypatch.setenv("LOGIN_RATE_LIMIT", "2/minute")
    get_settings.cache_clear()
    limiter.reset()
    yield "2/minute"
    limiter.reset()
    get_settings.cache_clear()
