"""Integration tests for health endpoints."""
from __future__ import annotations

import pytest

pytest.importorskip("fastapi")


def test_health_endpoints(api_client) -> None:
    """Both liveness and readiness probes should respond with success."""

    health = api_client.get("/healthz")
    ready = api_client.get("/readyz")

    assert health.status_code == 200
    assert health.json() == {"status": "ok"}
    assert ready.status_code == 200
    assert ready.json() == {"status": "ready"}
