"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-at-least-32-characters")
# Cheap hashing keeps the suite fast
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "8192")
# Upload retries run without waiting
os.environ.setdefault("UPLOAD_BACKOFF_BASE_SECONDS", "0")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import httpx
import pytest
from fakeredis import aioredis as fakeredis_aio
from redis.asyncio import Redis
from storage3 import AsyncStorageClient

from src.painel.core import redis as redis_core
from src.painel.core.config import get_settings
from src.painel.core.realtime import ChangeFeed, reset_change_feed
from src.painel.core.state_store import FileStateBackend, StateStore
from src.painel.services import kanban_board
from src.painel.services.notification_service import NotificationEngine
from src.painel.services.storage_service import StorageClient

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()

STORAGE_URL = "http://storage.test"


# --- Redis Test Fixtures (shared) ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """Provides a fakeredis client for testing.

    Returns an in-memory Redis implementation that behaves like
    a real Redis server but doesn't require external dependencies.
    """
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis_unavailable(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[None]:
    """Patches get_redis() to return None (simulates Redis unavailable)."""
    redis_core.reset_redis_state()

    async def _get_none() -> None:
        return None

    monkeypatch.setattr("src.painel.core.redis.get_redis", _get_none)
    monkeypatch.setattr("src.painel.core.health.get_redis", _get_none)
    yield
    redis_core.reset_redis_state()


# --- Process-wide singletons ---


@pytest.fixture(autouse=True)
def _reset_singletons() -> Generator[None]:
    """Give every test a fresh change feed and transition guard."""
    reset_change_feed()
    kanban_board._guard = None
    yield
    reset_change_feed()
    kanban_board._guard = None


# --- Notification engine ---


@pytest.fixture
async def state_store(tmp_path: Path) -> StateStore:
    store = StateStore(FileStateBackend(tmp_path / "state.json"))
    await store.load()
    return store


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notification_engine(state_store: StateStore, fake_clock: FakeClock) -> NotificationEngine:
    return NotificationEngine(state_store, dedup_window_seconds=60, clock=fake_clock)


@pytest.fixture
def change_feed() -> ChangeFeed:
    return ChangeFeed()


# --- Storage ---


def storage_error(status_code: int, error: str, message: str) -> httpx.Response:
    # Supabase Storage error body
    return httpx.Response(
        status_code,
        json={"statusCode": str(status_code), "error": error, "message": message},
    )


class StorageStub:
    """Records storage calls and answers them from a scripted handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.fail_uploads: dict[str, list[int]] = {}
        self.refuse_signing: set[str] = set()
        self.existing: set[str] = set()

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "POST" and path.startswith("/storage/v1/object/sign/"):
            key = path.split("/", 6)[-1]
            if key in self.refuse_signing:
                return storage_error(400, "not_found", "Object not found")
            return httpx.Response(200, json={"signedURL": f"/object/sign/{key}?token=t"})
        if request.method == "HEAD":
            key = path.split("/", 5)[-1]
            return httpx.Response(200 if key in self.existing else 404)
        if request.method == "POST" and path.startswith("/storage/v1/object/"):
            key = path.split("/", 5)[-1]
            for name, codes in self.fail_uploads.items():
                if name in key and codes:
                    return storage_error(codes.pop(0), "Unauthorized", "Permission denied")
            return httpx.Response(200, json={"Key": f"site_personalizacoes/{key}"})
        return httpx.Response(404)

    @property
    def uploaded_paths(self) -> list[str]:
        return [
            r.url.path.split("/", 5)[-1]
            for r in self.requests
            if r.method == "POST" and "/object/sign/" not in r.url.path
        ]


@pytest.fixture
def storage_stub() -> StorageStub:
    return StorageStub()


@pytest.fixture
async def storage_client(storage_stub: StorageStub) -> AsyncGenerator[StorageClient]:
    storage = AsyncStorageClient(
        f"{STORAGE_URL}/storage/v1/",
        {"apiKey": "service-key", "Authorization": "Bearer service-key"},
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(storage_stub.handler)),
    )
    client = StorageClient(storage, "site_personalizacoes")
    yield client
    await client.aclose()
