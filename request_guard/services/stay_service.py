"""Stay validation for travel entries entering the API."""

from __future__ import annotations

import logging
from datetime import date

from request_guard.core.errors import ValidationAppError
from request_guard.schemas.stay import StayRecord, StayRequest, StayValidationResponse
from request_guard.utils.sanitizers import sanitize_structure
from request_guard.utils.validators import (
    has_sql_injection_pattern,
    is_valid_country_code,
    is_valid_date,
)

logger = logging.getLogger(__name__)

FREE_TEXT_FIELDS = ("city", "from_city", "visa_type", "notes")


def _require_country_code(field: str, value: str) -> None:
    if not is_valid_country_code(value):
        raise ValidationAppError(
            code="invalid_country_code",
            message=f"{field} must be a two-letter uppercase country code",
            details={"field": field, "hint": "e.g. 'JP', 'KR', 'TH'"},
        )


def _require_date(field: str, value: str) -> None:
    if not is_valid_date(value):
        raise ValidationAppError(
            code="invalid_date",
            message=f"{field} must be a real calendar date in YYYY-MM-DD format",
            details={"field": field},
        )


def validate_stay(payload: StayRequest) -> StayValidationResponse:
    """Check a stay's structured fields and return it sanitized.

    Country codes and dates are hard requirements. SQL-like tokens in free
    text only produce warnings: the store uses parameterized queries, so the
    heuristic is a signal for review, not a gate.

    Raises:
        ValidationAppError: On a malformed code or date, or an exit before entry.
    """
    _require_country_code("country_code", payload.country_code)
    if payload.from_country_code is not None:
        _require_country_code("from_country_code", payload.from_country_code)

    _require_date("entry_date", payload.entry_date)
    if payload.exit_date is not None:
        _require_date("exit_date", payload.exit_date)
        if date.fromisoformat(payload.exit_date) < date.fromisoformat(payload.entry_date):
            raise ValidationAppError(
                code="exit_before_entry",
                message="exit_date must not be earlier than entry_date",
                details={"entry_date": payload.entry_date, "exit_date": payload.exit_date},
            )

    warnings = [
        f"{field} contains characters or keywords commonly used in SQL injection"
        for field in FREE_TEXT_FIELDS
        if has_sql_injection_pattern(getattr(payload, field) or "")
    ]

    stay = StayRecord(**sanitize_structure(payload.model_dump()))
    logger.info(
        "stay.validated",
        extra={
            "country_code": stay.country_code,
            "has_exit_date": stay.exit_date is not None,
            "warning_count": len(warnings),
        },
    )
    return StayValidationResponse(stay=stay, warnings=warnings)
