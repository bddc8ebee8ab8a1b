from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from request_guard.core.csrf import issue_csrf_cookie
from request_guard.core.rate_limit import enforce_rate_limit

router = APIRouter(tags=["Security"])


@router.get("/csrf-token", dependencies=[Depends(enforce_rate_limit)])
def get_csrf_token(response: Response) -> dict[str, str]:
    """Issue a fresh CSRF token.

    The token is set as a cookie and returned in the body; clients echo it
    in the CSRF header on every state-changing request.
    """

    return {"csrf_token": issue_csrf_cookie(response)}
