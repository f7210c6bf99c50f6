"""Optional Redis connection for the notification state store and health checks.

The panel runs fine without Redis: the state store falls back to a JSON file
and the health check reports `not_configured`. One connection attempt is made
per process lifetime (or per close_redis() cycle); a failed attempt is
remembered so every request does not pay for a connect timeout.
"""

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from src.painel.core.config import get_settings
from src.painel.core.logging import get_logger

logger = get_logger(__name__)

CONNECT_TIMEOUT_SECONDS = 2.0


class RedisConnection:
    """Lazily connected client plus the outcome of the last attempt."""

    def __init__(self) -> None:
        self.client: Redis | None = None
        self.pool: ConnectionPool | None = None
        self.attempted = False

    async def connect(self, url: str, max_connections: int) -> Redis | None:
        self.attempted = True
        pool = ConnectionPool.from_url(
            url,
            max_connections=max_connections,
            decode_responses=True,
            socket_connect_timeout=CONNECT_TIMEOUT_SECONDS,
        )
        client = Redis(connection_pool=pool)
        try:
            await client.ping()  # type: ignore[misc]
        except (RedisError, OSError) as e:
            logger.warning("Redis unreachable, state falls back to file", error=str(e))
            await client.aclose()
            await pool.disconnect()
            return None

        self.client, self.pool = client, pool
        logger.info("Redis connected", max_connections=max_connections)
        return client

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            logger.info("Redis connection closed")
        if self.pool is not None:
            await self.pool.disconnect()
        self.forget()

    def forget(self) -> None:
        self.client = None
        self.pool = None
        self.attempted = False


_connection = RedisConnection()


async def get_redis() -> Redis | None:
    """Shared client, or None when REDIS_URL is unset or the first attempt failed."""
    if _connection.client is not None or _connection.attempted:
        return _connection.client

    settings = get_settings()
    if not settings.redis_url:
        _connection.attempted = True
        logger.info("Redis not configured (REDIS_URL not set)")
        return None
    return await _connection.connect(settings.redis_url, settings.redis_pool_size)


async def close_redis() -> None:
    """Close the pool on shutdown. The next get_redis() connects again."""
    await _connection.close()


def reset_redis_state() -> None:
    """Drop the cached client without closing it (tests switch event loops)."""
    _connection.forget()
