"""Feedback intake: validate fields, then sanitize before anything else sees them.

Delivery (mail, storage) is outside this service; it returns the cleaned
record for whoever persists it.
"""

from __future__ import annotations

import logging

from request_guard.core.config import settings
from request_guard.core.errors import ValidationAppError
from request_guard.schemas.feedback import FeedbackRecord, FeedbackRequest
from request_guard.utils.sanitizers import sanitize_file_name, sanitize_structure
from request_guard.utils.validators import is_valid_email, is_valid_url

logger = logging.getLogger(__name__)


def _validate(payload: FeedbackRequest) -> None:
    """Raise ValidationAppError for the first field that fails its check."""
    min_chars = settings.app.feedback_min_message_chars
    message_length = len(payload.message.strip())
    if message_length < min_chars:
        raise ValidationAppError(
            code="message_too_short",
            message=f"Message must be at least {min_chars} characters long",
            details={"field": "message", "min_length": min_chars, "actual_length": message_length},
        )

    if payload.user_email is not None and not is_valid_email(payload.user_email):
        raise ValidationAppError(
            code="invalid_email",
            message="user_email is not a valid email address",
            details={"field": "user_email"},
        )

    if payload.page_url is not None and not is_valid_url(payload.page_url):
        raise ValidationAppError(
            code="invalid_url",
            message="page_url is not a valid absolute URL",
            details={"field": "page_url"},
        )


def accept_feedback(payload: FeedbackRequest) -> FeedbackRecord:
    """Validate and sanitize a feedback submission.

    Args:
        payload: Parsed request body.

    Returns:
        FeedbackRecord with every text field sanitized and the screenshot
        name reduced to a safe file name.

    Raises:
        ValidationAppError: If the message is too short or the email/URL is malformed.
    """
    _validate(payload)

    cleaned = sanitize_structure(payload.model_dump(exclude={"screenshot_name"}))
    if payload.screenshot_name:
        cleaned["screenshot_name"] = sanitize_file_name(payload.screenshot_name)

    record = FeedbackRecord(**cleaned)
    logger.info(
        "feedback.accepted",
        extra={
            "feedback_type": record.feedback_type,
            "message_length": len(record.message),
            "has_email": record.user_email is not None,
            "has_screenshot": record.screenshot_name is not None,
        },
    )
    return record
