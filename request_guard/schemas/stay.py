"""Pydantic schemas for travel stay validation."""

from __future__ import annotations

from pydantic import BaseModel, Field


class StayRequest(BaseModel):
    """A stay in a country, as entered on the dashboard.

    Field shapes are deliberately loose here (plain strings); the guard
    validators decide what is acceptable so rejections carry a domain code.
    """

    country_code: str = Field(..., max_length=8, description="ISO 3166-1 alpha-2 code, e.g. 'JP'.")
    entry_date: str = Field(..., max_length=32, description="Entry date as YYYY-MM-DD.")
    exit_date: str | None = Field(
        default=None,
        max_length=32,
        description="Exit date as YYYY-MM-DD; omitted while the stay is ongoing.",
    )
    city: str | None = Field(default=None, max_length=200)
    from_country_code: str | None = Field(default=None, max_length=8)
    from_city: str | None = Field(default=None, max_length=200)
    visa_type: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None, max_length=2000)


class StayRecord(BaseModel):
    """Stay after sanitization. Escaping can lengthen text, so no caps here."""

    country_code: str
    entry_date: str
    exit_date: str | None = None
    city: str | None = None
    from_country_code: str | None = None
    from_city: str | None = None
    visa_type: str | None = None
    notes: str | None = None


class StayValidationResponse(BaseModel):
    """Sanitized stay plus non-fatal warnings raised while checking it."""

    stay: StayRecord
    warnings: list[str] = Field(
        default_factory=list,
        description="Heuristic findings (e.g. SQL-like tokens in free text); not rejections.",
    )
