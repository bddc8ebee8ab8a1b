"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

- The limiter instance is owned by the application (``app.state``), built by
  ``build_rate_limiter`` when the app is created and closed on shutdown.
- Routes depend on ``enforce_rate_limit`` only, which must run before any
  payload handling.
- Clients are identified by remote address.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import HTTPException, Request, status

from request_guard.adapters.rate_limit.base import AbstractRateLimiter
from request_guard.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from request_guard.core.config import AppSettings, settings

logger = logging.getLogger(__name__)


def build_rate_limiter(app_settings: AppSettings | None = None) -> AbstractRateLimiter:
    """Create a limiter from configuration (sweeper thread included).

    Args:
        app_settings: Settings to read; defaults to the global settings.

    Returns:
        AbstractRateLimiter: Configured limiter instance.
    """

    cfg = app_settings or settings.app
    return InMemoryFixedWindowRateLimiter(
        max_requests=cfg.rate_limit_requests,
        window_seconds=cfg.rate_limit_window_seconds,
        grace_seconds=cfg.rate_limit_grace_seconds,
        sweep_interval_seconds=cfg.rate_limit_sweep_interval_seconds,
    )


def get_rate_limiter(request: Request) -> AbstractRateLimiter:
    """Return the limiter owned by the running application."""

    return request.app.state.rate_limiter


def _build_rate_limit_key(request: Request) -> str:
    """Build the limiter identifier for the current request."""

    client_host = request.client.host if request.client else "unknown"
    return f"ip:{client_host}"


def _hash_limiter_key(key: str) -> str:
    """Hash the rate limit key for logging without exposing client addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency enforcing rate limits.

    Consumes one request from the client's budget. When the budget for the
    current window is spent, raises HTTP 429 carrying the wait time.

    Args:
        request: FastAPI request.

    Raises:
        HTTPException: 429 Too Many Requests when rate limit is exceeded.
    """

    if not settings.app.rate_limit_enabled:
        return

    limiter = get_rate_limiter(request)
    key = _build_rate_limit_key(request)
    key_hash = _hash_limiter_key(key)

    result = limiter.check(key)
    if result.allowed:
        logger.info(
            "rate_limit.allowed",
            extra={
                "key_hash": key_hash,
                "limit": result.limit,
                "remaining": result.remaining,
                "reset_in_s": round(result.reset_in, 3),
            },
        )
        return

    retry_after = result.retry_after_seconds or 0
    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": key_hash,
            "limit": result.limit,
            "retry_after_s": retry_after,
            "path": request.url.path,
        },
    )

    headers: dict[str, str] = {}
    if settings.app.rate_limit_include_headers:
        headers["Retry-After"] = str(retry_after)
        headers["X-RateLimit-Limit"] = str(result.limit)
        headers["X-RateLimit-Remaining"] = str(result.remaining)
        headers["X-RateLimit-Reset-In"] = f"{result.reset_in:.3f}"

    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail="Rate limit exceeded. Try again later.",
        headers=headers or None,
    )
