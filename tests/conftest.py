"""Pytest configuration and fixtures shared across all test modules.

Environment variables are seeded before any ``request_guard`` import so the
settings object is built with test values.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("APP_CSRF_ENABLED", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from request_guard.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from request_guard.core.app_factory import create_app


class FakeClock:
    """Deterministic clock for window/expiry tests."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock):
    """Limiter without a sweeper thread; tests call sweep() directly."""
    with InMemoryFixedWindowRateLimiter(
        max_requests=3,
        window_seconds=60,
        grace_seconds=60,
        sweep_interval_seconds=None,
        clock=clock,
    ) as instance:
        yield instance


@pytest.fixture
def app(limiter: InMemoryFixedWindowRateLimiter) -> FastAPI:
    return create_app(rate_limiter=limiter)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def csrf_headers(client: TestClient) -> dict[str, str]:
    """Fetch a token (sets the cookie on the client) and build the echo header."""
    token = client.get("/v1/csrf-token").json()["csrf_token"]
    return {"X-CSRF-Token": token}
