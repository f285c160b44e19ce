"""Tests for health endpoints."""

import pytest


@pytest.mark.asyncio
async def test_root_health_check(async_client):
    """Test root health endpoint."""
    response = await async_client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


@pytest.mark.asyncio
async def test_api_health_check(async_client):
    response = await async_client.get("/api/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["uptime_seconds"] >= 0
    assert data["database"] is None


@pytest.mark.asyncio
async def test_root_info(async_client):
    response = await async_client.get("/")
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


@pytest.mark.asyncio
async def test_responses_carry_request_id(async_client):
    response = await async_client.get("/health")
    assert len(response.headers["X-Request-ID"]) == 8
    assert response.headers["X-Response-Time"].endswith("ms")
