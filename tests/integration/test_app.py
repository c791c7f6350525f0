"""Application wiring: health, routing errors and request ids."""

from __future__ import annotations

import pytest

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == "1.0.0"
    assert "timestamp" in body


async def test_health_needs_no_token(client, auth_headers):
    response = await client.get("/health", headers=auth_headers("forged"))

    assert response.status_code == 200


async def test_unknown_route(client):
    response = await client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Route not found"}


async def test_wrong_method(client):
    response = await client.patch("/health")

    assert response.status_code == 405
    assert response.json() == {"success": False, "error": "Method not allowed"}


async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["x-request-id"] == "req-123"


async def test_request_id_is_generated(client):
    response = await client.get("/health")

    assert len(response.headers["x-request-id"]) == 36
