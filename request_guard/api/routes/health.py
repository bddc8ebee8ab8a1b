from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict[str, str]:
    """Liveness probe. Not rate limited, so monitors never get throttled."""

    return {"status": "ok"}
