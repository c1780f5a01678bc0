from fastapi import APIRouter, Depends, Path, status
from typing import List

from movieshelf.errors import NotFoundError
from movieshelf.schemas.auth import MessageResponse
from movieshelf.schemas.favorites import FavoriteAdd, FavoriteResponse, FavoriteSync
from movieshelf.services.auth_service import TokenIdentity
from movieshelf.services.favorites_service import FavoritesService
from movieshelf.utils.dependencies import get_current_user, get_favorites_service

router = APIRouter(prefix="/api/favorites", tags=["Favorites"])


@router.get("", response_model=List[FavoriteResponse])
def get_favorites(
    current_user: TokenIdentity = Depends(get_current_user),
    favorites: FavoritesService = Depends(get_favorites_service),
):
    """Get user's favorite movies in the order they were added"""
    return favorites.list(current_user.id)


@router.post("", response_model=FavoriteResponse, status_code=status.HTTP_201_CREATED)
def add_favorite(
    movie: FavoriteAdd,
    current_user: TokenIdentity = Depends(get_current_user),
    favorites: FavoritesService = Depends(get_favorites_service),
):
    """
    Add a movie to user's favorites

    - **movieId**: TMDB movie ID (required)
    - **title**: Movie title (required)
    - **posterPath**, **rating**: display fields copied from the catalog
    """
    return favorites.add(current_user.id, movie)


@router.post("/sync", response_model=List[FavoriteResponse])
def sync_favorites(
    payload: FavoriteSync,
    current_user: TokenIdentity = Depends(get_current_user),
    favorites: FavoritesService = Depends(get_favorites_service),
):
    """
    Merge favorites saved on the device before login.

    Movies already in the account are skipped (the server copy wins).
    Returns the full server list.
    """
    return favorites.reconcile(current_user.id, payload.favorites)


@router.delete("/{movie_id}", response_model=MessageResponse)
def remove_favorite(
    movie_id: int = Path(..., description="TMDB movie ID"),
    current_user: TokenIdentity = Depends(get_current_user),
    favorites: FavoritesService = Depends(get_favorites_service),
):
    """Remove a movie from favorites"""
    if not favorites.remove(current_user.id, movie_id):
        raise NotFoundError("Favorite not found")
    return {"message": "Movie removed from favorites"}
