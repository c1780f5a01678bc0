"""
HTTP middleware for the MovieShelf API
"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import time
import logging

logger = logging.getLogger(__name__)

# Longest log line before it gets cut
MAX_LOG_LINE = 80


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers (XSS, CSP, etc.)"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        # XSS Protection
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"

        # Content Security Policy - posters come from the TMDB image CDN,
        # Swagger UI loads from jsdelivr
        csp_directives = [
            "default-src 'self'",
            "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net",
            "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net",
            "img-src 'self' https://image.tmdb.org https://fastapi.tiangolo.com data:",
            "frame-src https://www.youtube.com",
        ]
        response.headers["Content-Security-Policy"] = "; ".join(csp_directives)
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per API request: method, path, status and duration"""

    def __init__(self, app, prefix: str = "/api"):
        super().__init__(app)
        self.prefix = prefix

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)

        path = request.url.path
        if path.startswith(self.prefix):
            duration_ms = (time.perf_counter() - start) * 1000
            log_line = f"{request.method} {path} {response.status_code} in {duration_ms:.0f}ms"
            if len(log_line) > MAX_LOG_LINE:
                log_line = log_line[:MAX_LOG_LINE - 1] + "…"
            logger.info(log_line)

        return response
