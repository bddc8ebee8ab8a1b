"""OpenAPI metadata and customization utilities.

Adds the CSRF header as an API-key style security scheme, marks the
state-changing endpoints as requiring it, and documents the 429 response
on every rate-limited path.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

from request_guard.core.config import settings

_UNLIMITED_PATH_SUFFIXES = ("/health",)


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags, security and 429 docs."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema
        schema = original_openapi()

        components = schema.setdefault("components", {})
        components.setdefault("securitySchemes", {}).setdefault(
            "CsrfToken",
            {
                "type": "apiKey",
                "in": "header",
                "name": settings.app.csrf_header_name,
                "description": "Echo the token from GET /v1/csrf-token (also set as a cookie).",
            },
        )

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in (
            {"name": "Security", "description": "CSRF token issuance."},
            {"name": "Feedback", "description": "Beta feedback intake."},
            {"name": "Stays", "description": "Travel stay validation."},
            {"name": "Health", "description": "Liveness checks."},
        ):
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for path, methods in schema.get("paths", {}).items():
            if path.endswith(_UNLIMITED_PATH_SUFFIXES):
                continue
            for method, operation in methods.items():
                if not isinstance(operation, dict):
                    continue
                operation.setdefault("responses", {}).setdefault(
                    "429",
                    {"description": "Rate limit exceeded; see Retry-After."},
                )
                if method == "post":
                    operation["security"] = [{"CsrfToken": []}]

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
