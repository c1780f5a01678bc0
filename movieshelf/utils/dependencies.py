from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from movieshelf.errors import AuthenticationError
from movieshelf.services.auth_service import AuthService, TokenIdentity
from movieshelf.services.favorites_service import FavoritesService
from movieshelf.services.tmdb_service import TMDBService


# Services are built once by create_app() and kept on app.state
def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_favorites_service(request: Request) -> FavoritesService:
    return request.app.state.favorites_service


def get_tmdb_service(request: Request) -> TMDBService:
    return request.app.state.tmdb_service


# Missing credentials are reported by us, not by HTTPBearer
security = HTTPBearer(auto_error=False)


# Dependency to get the current authenticated user
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenIdentity:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")

    # Validate
    return auth_service.validate(credentials.credentials)
