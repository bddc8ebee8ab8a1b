from __future__ import annotations

import uuid

import pytest
from fastapi.testclient import TestClient

from request_guard.core.middleware import resolve_request_id


def test_preserves_incoming_request_id_header(client: TestClient) -> None:
    resp = client.get("/health", headers={"X-Request-ID": "trip-2024-req-1"})

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == "trip-2024-req-1"


def test_generates_request_id_and_duration_when_missing(client: TestClient) -> None:
    resp = client.get("/health")

    assert resp.headers.get("X-Request-ID")
    assert resp.headers.get("X-Request-Duration-ms") is not None


def test_request_id_present_on_rate_limited_response(client: TestClient) -> None:
    for _ in range(3):
        client.get("/v1/csrf-token")

    resp = client.get("/v1/csrf-token", headers={"X-Request-ID": "throttled-1"})

    assert resp.status_code == 429
    assert resp.headers.get("X-Request-ID") == "throttled-1"


def test_unsafe_request_id_is_replaced(client: TestClient) -> None:
    forged = "<script>x</script>"

    resp = client.get("/health", headers={"X-Request-ID": forged})

    echoed = resp.headers.get("X-Request-ID")
    assert echoed and echoed != forged
    assert uuid.UUID(echoed)


@pytest.mark.parametrize(
    ("candidate", "kept"),
    [
        ("trip-2024.req_1", True),
        ("a" * 64, True),
        ("a" * 65, False),
        ("id with spaces", False),
        ("", False),
        (None, False),
    ],
)
def test_resolve_request_id(candidate, kept: bool) -> None:
    assert (resolve_request_id(candidate) == candidate) is kept
