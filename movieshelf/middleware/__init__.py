"""
Middleware package for security headers and request logging
"""
from .security import SecurityHeadersMiddleware, RequestLoggingMiddleware

__all__ = [
    "SecurityHeadersMiddleware",
    "RequestLoggingMiddleware",
]
