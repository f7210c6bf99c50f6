from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.painel.api.middlewares import setup_middlewares
from src.painel.api.v1.router import api_router, public_router
from src.painel.core.config import get_settings
from src.painel.core.db import dispose_engine
from src.painel.core.exceptions import setup_exception_handlers
from src.painel.core.health import setup_health_endpoint, setup_metrics
from src.painel.core.logging import get_logger, setup_logging
from src.painel.core.rate_limit import limiter
from src.painel.core.realtime import get_change_feed, reset_change_feed
from src.painel.core.redis import close_redis, get_redis
from src.painel.core.state_store import create_state_store
from src.painel.services.notification_service import NotificationEngine
from src.painel.services.storage_service import StorageClient

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    redis = await get_redis()
    store = create_state_store(redis, settings.state_file_path, settings.state_key_prefix)
    await store.load()

    feed = get_change_feed()
    engine = NotificationEngine(
        store,
        dedup_window_seconds=settings.notification_dedup_window_seconds,
        timezone=settings.display_timezone,
    )
    engine.subscribe(feed)
    app.state.notification_engine = engine
    app.state.storage = None
    if settings.storage_service_key:
        app.state.storage = await StorageClient.connect(settings)
    else:
        logger.warning("STORAGE_SERVICE_KEY not set, file endpoints will answer 503")

    yield

    logger.info("Closing connections...")
    engine.unsubscribe(feed)
    reset_change_feed()
    if app.state.storage is not None:
        await app.state.storage.aclose()
    await close_redis()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Login and session"},
    {"name": "users", "description": "Panel user accounts"},
    {"name": "projects", "description": "Client site projects, statistics and commands"},
    {"name": "board", "description": "Kanban board over the status pipeline"},
    {"name": "customizations", "description": "Change requests on delivered sites"},
    {"name": "personalizations", "description": "Client form submissions and their files"},
    {"name": "model-templates", "description": "Site models offered on the public form"},
    {"name": "notifications", "description": "Status-change notification center"},
    {"name": "public", "description": "Unauthenticated personalization form"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Panel for tracking client website projects from form to publication",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    setup_middlewares(app, settings)

    app.include_router(api_router)
    app.include_router(public_router)

    setup_health_endpoint(app)
    setup_metrics(app)

    return app


app = create_app()
