"""Response security headers."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

# Token-bearing and personal-data responses must never be cached
_NO_STORE_PREFIXES = (
    "/api/v1/auth/",
    "/api/v1/personalizations/",
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds a fixed header set to every response."""

    # Swagger UI needs inline scripts and its CDN
    DOCS_CSP = (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
        "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
        "img-src 'self' data: cdn.jsdelivr.net; "
        "frame-ancestors 'none'"
    )
    STRICT_CSP = "default-src 'self'; frame-ancestors 'none'"

    def __init__(self, app: ASGIApp, docs_enabled: bool = True):
        super().__init__(app)
        self.headers = {
            "Content-Security-Policy": self.DOCS_CSP if docs_enabled else self.STRICT_CSP,
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "strict-origin-when-cross-origin",
            "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        }

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for header, value in self.headers.items():
            response.headers[header] = value
        if request.url.path.startswith(_NO_STORE_PREFIXES):
            response.headers["Cache-Control"] = "no-store"
        return response
