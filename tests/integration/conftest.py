"""Integration test fixtures for the database and HTTP client.

Each test gets its own SQLite database file with the full schema, an app whose
session dependency points at it, a stubbed storage backend and a file-backed
notification engine subscribed to the change feed.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from src.painel.api.dependencies import get_db_session
from src.painel.core import redis as redis_core
from src.painel.core.db import get_session
from src.painel.core.health import reset_health_cache
from src.painel.core.realtime import get_change_feed
from src.painel.core.security import create_access_token
from src.painel.main import create_app
from src.painel.services.notification_service import NotificationEngine
from src.painel.services.storage_service import StorageClient
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory


@pytest.fixture(autouse=True)
async def _reset_redis_between_tests() -> AsyncGenerator[None]:
    """Redis clients are bound to the event loop of the test that created them."""
    redis_core.reset_redis_state()
    reset_health_cache()
    yield
    await redis_core.close_redis()
    reset_health_cache()


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Fresh database file with every table created."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'painel.db'}", poolclass=NullPool
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session for seeding and checking rows.

    Like the request sessions it does not auto-commit: call
    `await db_session.commit()` after adding rows.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
def app(
    engine: AsyncEngine,
    storage_client: StorageClient,
    notification_engine: NotificationEngine,
) -> FastAPI:
    """Application wired the way the lifespan would wire it, against the test database."""
    application = create_app()

    async def _test_session() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    application.dependency_overrides[get_db_session] = _test_session
    application.state.storage = storage_client
    application.state.notification_engine = notification_engine
    notification_engine.subscribe(get_change_feed())
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def test_user(db_session: AsyncSession) -> dict:
    """An active dashboard user."""
    user = UserFactory.build(full_name="Ana Souza")
    db_session.add(user)
    await db_session.commit()

    return {
        "id": str(user.id),
        "email": user.email,
        "password": DEFAULT_TEST_PASSWORD,
    }


@pytest.fixture
def auth_headers(test_user: dict) -> dict[str, str]:
    token, _ = create_access_token(test_user["id"])
    return {"Authorization": f"Bearer {token}"}
