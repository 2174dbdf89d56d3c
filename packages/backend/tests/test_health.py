"""Health endpoint tests."""

import pytest

import storefront.api.health as health


@pytest.mark.asyncio
async def test_health_returns_ok(client):
    """Health endpoint should return server status and version."""
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["server"] == "ok"
    assert "version" in data


@pytest.mark.asyncio
async def test_health_reports_database(client, engine, monkeypatch):
    monkeypatch.setattr(health, "engine", engine)
    data = (await client.get("/api/health")).json()
    assert data["database"] == "ok"


@pytest.mark.asyncio
async def test_health_degraded_without_redis(client, engine, monkeypatch):
    """No Redis pool in tests → redis check fails, status degraded."""
    monkeypatch.setattr(health, "engine", engine)
    data = (await client.get("/api/health")).json()
    assert data["redis"].startswith("error:")
    assert data["status"] == "degraded"
