"""Health — liveness and readiness probes."""

import app.infrastructure.database as db_module


async def test_liveness(client):
    res = await client.get("/v1/health/")

    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_ready_when_database_reachable(client):
    res = await client.get("/v1/health/ready")

    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy"}


async def test_not_ready_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)

    res = await client.get("/v1/health/ready")

    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"
