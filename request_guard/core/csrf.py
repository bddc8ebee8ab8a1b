"""CSRF token issue and verification (double-submit cookie).

The reference token lives with the client: ``issue_csrf_cookie`` sets it as a
cookie, and state-changing requests must echo the same value in a header.
The server keeps no token state.
"""

from __future__ import annotations

import hmac
import logging
import secrets

from fastapi import Request, Response

from request_guard.core.config import settings
from request_guard.core.errors import ForbiddenAppError

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
TOKEN_LENGTH = TOKEN_BYTES * 2


def generate_token() -> str:
    """Return 32 CSPRNG bytes as 64 lowercase hex characters."""
    return secrets.token_hex(TOKEN_BYTES)


def validate_token(candidate: str, reference: str) -> bool:
    """Check a presented token against the caller-held reference.

    The comparison is constant-time so response timing does not reveal how
    many leading characters matched.

    Args:
        candidate: Token presented by the client.
        reference: Token the caller stored for this session.

    Returns:
        True only if both are strings, the candidate is 64 characters long,
        and the two are equal.

    Examples:
        >>> token = generate_token()
        >>> validate_token(token, token)
        True
        >>> validate_token("abc", "abc")
        False
    """
    if not isinstance(candidate, str) or not isinstance(reference, str):
        return False
    if len(candidate) != TOKEN_LENGTH:
        return False
    # compare_digest only accepts ASCII str
    return hmac.compare_digest(candidate.encode(), reference.encode())


def issue_csrf_cookie(response: Response) -> str:
    """Generate a token, attach it as the CSRF cookie and return it."""
    token = generate_token()
    response.set_cookie(
        key=settings.app.csrf_cookie_name,
        value=token,
        httponly=False,
        samesite="strict",
        secure=settings.app.csrf_cookie_secure,
    )
    return token


async def verify_csrf_token(request: Request) -> None:
    """FastAPI dependency rejecting requests without a matching token.

    Usage:
        @router.post("/feedback", dependencies=[Depends(verify_csrf_token)])

    Raises:
        ForbiddenAppError: If the header is missing or does not match the cookie.
    """
    if not settings.app.csrf_enabled:
        return

    presented = request.headers.get(settings.app.csrf_header_name)
    reference = request.cookies.get(settings.app.csrf_cookie_name)

    if presented is None or reference is None or not validate_token(presented, reference):
        logger.warning(
            "csrf.rejected",
            extra={
                "header_present": presented is not None,
                "cookie_present": reference is not None,
                "path": request.url.path,
            },
        )
        raise ForbiddenAppError(
            code="csrf_invalid",
            message="Missing or invalid CSRF token",
            details={"hint": f"Fetch /v1/csrf-token and echo it in {settings.app.csrf_header_name}"},
        )
