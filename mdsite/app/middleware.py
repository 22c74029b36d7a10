"""Middleware for security headers and the media cache policy."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

# Media is cached for two days outside of debug mode.
MEDIA_MAX_AGE = 172800

SECURITY_HEADERS = {
    'Referrer-Policy': 'origin-when-cross-origin',
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'deny',
    'X-XSS-Protection': '0',
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add standard security headers to every response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


class CacheControlMiddleware(BaseHTTPMiddleware):
    """Set Cache-Control on responses under a path prefix.

    Debug servers send ``no-cache`` so edited media shows up immediately.
    """

    def __init__(self, app: ASGIApp, prefix: str, debug: bool = False) -> None:
        super().__init__(app)
        self.prefix = prefix
        self.value = 'no-cache' if debug else f'max-age={MEDIA_MAX_AGE}'

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        if request.url.path.startswith(self.prefix):
            response.headers['Cache-Control'] = self.value
        return response
