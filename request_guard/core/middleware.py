"""HTTP middleware for request ID propagation and correlation.

Every response carries the request id and the total handling time, and every
log line emitted while the request is in flight is tagged with the same id.
A client-supplied id is echoed only when it is short and made of safe
characters; anything else is replaced by a fresh UUID.

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import re
import time
import uuid

from fastapi import Request, Response

from request_guard.core.config import settings
from request_guard.core.logging import clear_request_id, set_request_id

_SAFE_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(candidate: str | None) -> str:
    """Return ``candidate`` if it is a safe correlation id, else a new UUID."""
    if candidate and _SAFE_REQUEST_ID_RE.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


async def request_id_middleware(request: Request, call_next) -> Response:
    """Bind a correlation id for the request and echo it on the response.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        The downstream response with the request id header and
        ``X-Request-Duration-ms`` set.
    """
    header_name = settings.log.request_id_header
    request_id = resolve_request_id(request.headers.get(header_name))
    started = time.perf_counter()

    set_request_id(request_id)
    try:
        response: Response = await call_next(request)
    finally:
        clear_request_id()

    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{elapsed_ms:.2f}")
    return response
