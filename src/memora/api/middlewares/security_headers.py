"""Security headers middleware (Helmet-style)."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

# Responses under these prefixes carry credentials and must never be cached
NO_STORE_PREFIXES = ("/api/v1/auth/",)

# CSP for development with Swagger UI: requires inline scripts and CDN assets
DEVELOPMENT_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "img-src 'self' data: cdn.jsdelivr.net; "
    "frame-ancestors 'none'"
)


def build_security_headers(content_security_policy: str | None = None) -> dict[str, str]:
    """Headers added to every response. An empty CSP string disables the CSP header."""
    headers = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "X-Permitted-Cross-Domain-Policies": "none",
    }
    csp = DEVELOPMENT_CSP if content_security_policy is None else content_security_policy
    if csp:
        headers["Content-Security-Policy"] = csp
    return headers


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses and no-store to token endpoints."""

    def __init__(self, app: ASGIApp, content_security_policy: str | None = None):
        super().__init__(app)
        self.headers = build_security_headers(content_security_policy)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.update(self.headers)

        if request.url.path.startswith(NO_STORE_PREFIXES):
            response.headers["Cache-Control"] = "no-store"
            response.headers["Pragma"] = "no-cache"

        return response
