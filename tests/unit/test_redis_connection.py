"""Tests for the optional Redis connection."""

from collections.abc import Generator

import pytest

from src.painel.core import redis as redis_core
from src.painel.core.config import get_settings

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _fresh_connection() -> Generator[None]:
    redis_core.reset_redis_state()
    yield
    redis_core.reset_redis_state()


def use_redis_url(monkeypatch: pytest.MonkeyPatch, url: str | None) -> None:
    settings = get_settings().model_copy(update={"redis_url": url})
    monkeypatch.setattr(redis_core, "get_settings", lambda: settings)


async def test_not_configured(monkeypatch: pytest.MonkeyPatch):
    use_redis_url(monkeypatch, None)

    assert await redis_core.get_redis() is None
    assert redis_core._connection.attempted is True


async def test_unreachable_server_is_not_retried(monkeypatch: pytest.MonkeyPatch):
    use_redis_url(monkeypatch, "redis://127.0.0.1:1/0")
    attempts = []
    connect = redis_core.RedisConnection.connect

    async def counting_connect(self, url, max_connections):
        attempts.append(url)
        return await connect(self, url, max_connections)

    monkeypatch.setattr(redis_core.RedisConnection, "connect", counting_connect)

    assert await redis_core.get_redis() is None
    assert await redis_core.get_redis() is None
    assert attempts == ["redis://127.0.0.1:1/0"]
    assert redis_core._connection.pool is None


async def test_close_allows_a_new_attempt(monkeypatch: pytest.MonkeyPatch):
    use_redis_url(monkeypatch, None)
    await redis_core.get_redis()

    await redis_core.close_redis()

    assert redis_core._connection.attempted is False
