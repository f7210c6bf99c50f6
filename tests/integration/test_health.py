"""Health endpoint against the configured database and optional Redis."""

from collections.abc import AsyncGenerator

import pytest
from httpx import AsyncClient

from src.painel.core.db import dispose_engine

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
async def _dispose_default_engine() -> AsyncGenerator[None]:
    yield
    await dispose_engine()


async def test_healthy_without_redis(client: AsyncClient, mock_redis_unavailable):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "healthy"
    assert body["redis"] == "not_configured"
    assert body["cached"] is False


async def test_second_call_is_cached(client: AsyncClient, mock_redis_unavailable):
    await client.get("/health")
    response = await client.get("/health")

    assert response.json()["cached"] is True


async def test_degraded_when_redis_ping_fails(client: AsyncClient, monkeypatch):
    class BrokenRedis:
        async def ping(self) -> bool:
            raise ConnectionError("connection refused")

    async def _broken() -> BrokenRedis:
        return BrokenRedis()

    monkeypatch.setattr("src.painel.core.health.get_redis", _broken)

    response = await client.get("/health")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "degraded"
    assert body["redis"].startswith("unhealthy")
