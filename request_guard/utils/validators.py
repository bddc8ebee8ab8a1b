"""Format validators for user-supplied fields.

Every validator is a pure predicate: malformed or non-string input returns
False and never raises.
"""

from __future__ import annotations

import re
from datetime import date

from pydantic import AnyUrl, TypeAdapter, ValidationError

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_COUNTRY_CODE_RE = re.compile(r"[A-Z]{2}")

_URL_ADAPTER = TypeAdapter(AnyUrl)

# Best-effort signal only. Queries must still be parameterized; this never
# replaces driver/ORM escaping and legitimate prose will trip it.
_SQL_INJECTION_PATTERNS = (
    re.compile(r"\b(SELECT|INSERT|UPDATE|DELETE|DROP|UNION|ALTER|CREATE)\b", re.IGNORECASE),
    re.compile(r"--|/\*|\*/|;|'|\""),
    re.compile(r"\bOR\b\s*\d+\s*=\s*\d+", re.IGNORECASE),
    re.compile(r"\bAND\b\s*\d+\s*=\s*\d+", re.IGNORECASE),
)


def is_valid_email(value: str) -> bool:
    """Check that ``value`` looks like ``local@domain.tld``.

    This is format plausibility, not RFC 5322 and not deliverability.
    """
    return isinstance(value, str) and _EMAIL_RE.fullmatch(value) is not None


def is_valid_date(value: str) -> bool:
    """Check for a ``YYYY-MM-DD`` string naming a real calendar day.

    Examples:
        >>> is_valid_date("2024-02-29")
        True
        >>> is_valid_date("2024-02-30")
        False
    """
    if not isinstance(value, str) or _DATE_RE.fullmatch(value) is None:
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_country_code(value: str) -> bool:
    """Check for the ISO 3166-1 alpha-2 shape (two uppercase letters).

    The code is not looked up against an actual country list.
    """
    return isinstance(value, str) and _COUNTRY_CODE_RE.fullmatch(value) is not None


def is_valid_url(value: str) -> bool:
    """Check that ``value`` parses as an absolute URL."""
    if not isinstance(value, str):
        return False
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def has_sql_injection_pattern(value: str) -> bool:
    """Flag text containing common SQL injection tokens.

    Matches SQL keywords, comment/terminator/quote characters and ``OR 1=1``
    style tautologies. False positives on ordinary text ("Don't", "select a
    city") are expected, so callers should treat a hit as a warning signal.
    """
    if not isinstance(value, str):
        return False
    return any(pattern.search(value) for pattern in _SQL_INJECTION_PATTERNS)
