"""Database engine management."""

import ssl
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.painel.core.config import get_settings

_engine: AsyncEngine | None = None


def _get_connect_args(database_url: str) -> dict[str, Any]:
    """Get driver connection arguments, including SSL for asyncpg."""
    settings = get_settings()
    if make_url(database_url).get_backend_name() != "postgresql":
        return {}

    connect_args: dict[str, Any] = {}
    ssl_mode = settings.database_ssl_mode
    if ssl_mode != "disable":
        ssl_context = ssl.create_default_context()
        if ssl_mode in ("prefer", "require"):
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
        elif ssl_mode in ("verify-ca", "verify-full"):
            ssl_context.check_hostname = ssl_mode == "verify-full"
            ssl_context.verify_mode = ssl.CERT_REQUIRED
        connect_args["ssl"] = ssl_context

    return connect_args


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine; pool sizing only applies to server databases."""
    settings = get_settings()
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        return create_async_engine(database_url)
    return create_async_engine(
        database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        connect_args=_get_connect_args(database_url),
    )


def get_engine() -> AsyncEngine:
    """Get or create the database engine singleton."""
    global _engine
    if _engine is None:
        _engine = build_engine(get_settings().database_url)
    return _engine


async def dispose_engine() -> None:
    """Dispose the database engine. Call during shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
