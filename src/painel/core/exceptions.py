"""Domain exceptions and handlers with request_id in responses."""

from urllib.parse import quote

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.painel.core.logging import get_logger

logger = get_logger(__name__)


class GatewayNotInitializedError(RuntimeError):
    """Raised when the data gateway is used before startup finished wiring it."""

    def __init__(self, component: str = "database") -> None:
        super().__init__(f"{component} client not initialized")


class StatusConflictError(Exception):
    """Raised when a status compare-and-set finds a different current value."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected status '{expected}' but found '{actual}'")


class TransitionInProgressError(Exception):
    """Raised when another status transition already holds the board guard."""


class LoginRequiredError(Exception):
    """Raised when a protected route is reached without a valid session."""

    def __init__(self, requested_path: str, login_path: str = "/login") -> None:
        self.requested_path = requested_path
        self.login_url = f"{login_path}?next={quote(requested_path, safe='/')}"
        super().__init__("Authentication required")


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=exc.headers,
        )

    @app.exception_handler(LoginRequiredError)
    async def login_required_handler(request: Request, exc: LoginRequiredError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={
                "detail": str(exc),
                "login_url": exc.login_url,
                "request_id": correlation_id.get(),
            },
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(GatewayNotInitializedError)
    async def gateway_not_initialized_handler(
        request: Request, exc: GatewayNotInitializedError
    ) -> JSONResponse:
        logger.warning("Gateway not initialized", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "detail": str(exc),
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
