from __future__ import annotations

from request_guard.api.routes.csrf import router as csrf_router
from request_guard.api.routes.feedback import router as feedback_router
from request_guard.api.routes.health import router as health_router
from request_guard.api.routes.stays import router as stays_router

__all__ = ["csrf_router", "feedback_router", "health_router", "stays_router"]
