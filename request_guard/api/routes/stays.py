from __future__ import annotations

from fastapi import APIRouter, Depends

from request_guard.core.csrf import verify_csrf_token
from request_guard.core.rate_limit import enforce_rate_limit
from request_guard.schemas.stay import StayRequest, StayValidationResponse
from request_guard.services.stay_service import validate_stay

router = APIRouter(tags=["Stays"])


@router.post(
    "/stays/validate",
    response_model=StayValidationResponse,
    dependencies=[Depends(enforce_rate_limit), Depends(verify_csrf_token)],
)
def validate_stay_entry(payload: StayRequest) -> StayValidationResponse:
    """Validate a travel stay and return its sanitized form with warnings."""

    return validate_stay(payload)
