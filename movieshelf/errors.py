"""
Error taxonomy for MovieShelf.

Stores and services raise these; the handlers registered in
``movieshelf.main`` turn them into JSON responses. Messages are safe to
show to API clients.
"""
from typing import Dict, List, Optional


class MovieShelfError(Exception):
    """Base class for errors surfaced to API callers"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class ValidationError(MovieShelfError):
    """Malformed input; carries one entry per offending field"""
    status_code = 400

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []

    @property
    def fields(self) -> List[str]:
        return [error["field"] for error in self.errors]


class ConflictError(MovieShelfError):
    """Uniqueness violation (duplicate username, email or favorite)"""
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class AuthenticationError(MovieShelfError):
    """Missing, invalid or expired token, or bad login credentials"""
    status_code = 401

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class NotFoundError(MovieShelfError):
    status_code = 404


class CatalogError(MovieShelfError):
    """The upstream movie catalog (TMDb) failed or is not configured"""
    status_code = 502
