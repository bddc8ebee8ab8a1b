"""Application factory for the request-defense API.

Each app instance owns its rate limiter: it is built here, exposed on
``app.state.rate_limiter`` and closed when the app shuts down.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from request_guard.adapters.rate_limit.base import AbstractRateLimiter
from request_guard.api.routes import csrf_router, feedback_router, health_router, stays_router
from request_guard.core.config import settings
from request_guard.core.exception_handlers import setup_exception_handlers
from request_guard.core.logging import configure_logging
from request_guard.core.middleware import request_id_middleware
from request_guard.core.openapi import apply_openapi_customizations
from request_guard.core.rate_limit import build_rate_limiter

logger = logging.getLogger(__name__)


def create_app(rate_limiter: AbstractRateLimiter | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        rate_limiter: Limiter to use; one is built from settings if omitted.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    limiter = rate_limiter if rate_limiter is not None else build_rate_limiter(settings.app)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("app.startup", extra={"app_env": settings.app_env})
        try:
            yield
        finally:
            app.state.rate_limiter.close()
            logger.info("app.shutdown")

    app = FastAPI(
        title="DINO Request Guard",
        description=(
            "Request-defense layer for the DINO travel and visa tracker: "
            "per-client fixed-window rate limiting, CSRF tokens, and "
            "validation plus sanitization of feedback and stay payloads."
        ),
        version="0.1.0",
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
        lifespan=lifespan,
    )
    app.state.rate_limiter = limiter

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(csrf_router, prefix="/v1")
    app.include_router(feedback_router, prefix="/v1")
    app.include_router(stays_router, prefix="/v1")
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
