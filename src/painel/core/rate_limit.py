"""Login rate limiting with an optional Redis backend.

Uses Redis for distributed limits when REDIS_URL is configured and per-process
memory otherwise. Disabled when APP_ENV=testing.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.painel.core.config import get_settings
from src.painel.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Key rate limits by client IP only; never by user-controlled headers."""
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create the limiter with the storage backend matching the environment."""
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    # slowapi talks to Redis synchronously, so the plain redis:// URI is used as-is
    if settings.redis_url:
        logger.info("Rate limiter using Redis backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.redis_url)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


limiter = create_limiter()
