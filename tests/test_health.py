"""Tests for the health endpoint and request middleware."""

import pytest

from asme.core.config import settings


@pytest.mark.asyncio
async def test_health_reports_env_and_version(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "env": settings.ENV, "version": settings.VERSION}


@pytest.mark.asyncio
async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


@pytest.mark.asyncio
async def test_request_id_generated_when_missing(client):
    response = await client.get("/health")
    assert len(response.headers["X-Request-ID"]) == 32
