"""Smoke tests for health and app wiring."""

import logging

from httpx import AsyncClient

from casework.shared.telemetry.logging import RequestContextFilter
from casework.shared.utils.generators import REQUEST_ID_LENGTH


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("database_backend") == "memory"


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "bad id!"})
    assert response.headers["X-Request-ID"] != "bad id!"
    assert len(response.headers["X-Request-ID"]) == REQUEST_ID_LENGTH


async def test_access_log_carries_request_context(client: AsyncClient, caplog) -> None:
    caplog.handler.addFilter(RequestContextFilter())
    caplog.set_level(logging.INFO, logger="casework.access")

    await client.get(
        "/api/v1/health", headers={"X-Request-ID": "abc-123", "X-Actor-Id": "staff-7"}
    )

    access = [r for r in caplog.records if r.name == "casework.access"]
    assert access
    assert access[-1].request_id == "abc-123"
    assert access[-1].actor == "staff-7"
