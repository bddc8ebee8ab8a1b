from __future__ import annotations

from fastapi import APIRouter, Depends

from request_guard.core.csrf import verify_csrf_token
from request_guard.core.rate_limit import enforce_rate_limit
from request_guard.schemas.feedback import FeedbackRequest, FeedbackResponse
from request_guard.services.feedback_service import accept_feedback

router = APIRouter(tags=["Feedback"])


@router.post(
    "/feedback",
    response_model=FeedbackResponse,
    dependencies=[Depends(enforce_rate_limit), Depends(verify_csrf_token)],
)
def submit_feedback(payload: FeedbackRequest) -> FeedbackResponse:
    """Accept a feedback submission from the dashboard.

    Rate limiting runs first, then the CSRF check; the payload is validated
    and sanitized before it is returned.

    Raises:
        ValidationAppError: 400 when the message, email or page URL is invalid.
    """

    return FeedbackResponse(success=True, feedback=accept_feedback(payload))
