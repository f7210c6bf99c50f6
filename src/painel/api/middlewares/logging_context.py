"""Per-request structlog context."""

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.painel.core.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id (and, once authenticated, user_id) for the request's log lines."""
    clear_request_context()
    bind_request_context(correlation_id.get())
    try:
        response = await call_next(request)
        logger.debug(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )
        return response
    finally:
        clear_request_context()
