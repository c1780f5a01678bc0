from fastapi import APIRouter, Depends, Query
from typing import Any, Dict

from movieshelf.services.tmdb_service import TMDBService
from movieshelf.utils.dependencies import get_tmdb_service

router = APIRouter(prefix="/api/movies", tags=["Movies"])


@router.get("/popular")
def get_popular(
    page: int = Query(1, ge=1, le=500, description="Page number"),
    tmdb: TMDBService = Depends(get_tmdb_service),
) -> Dict[str, Any]:
    return tmdb.get_popular(page)


@router.get("/top_rated")
def get_top_rated(
    page: int = Query(1, ge=1, le=500, description="Page number"),
    tmdb: TMDBService = Depends(get_tmdb_service),
) -> Dict[str, Any]:
    return tmdb.get_top_rated(page)


@router.get("/search")
def search_movies(
    query: str = Query(..., min_length=1, max_length=200, description="Search query"),
    page: int = Query(1, ge=1, le=500, description="Page number"),
    tmdb: TMDBService = Depends(get_tmdb_service),
) -> Dict[str, Any]:
    """
    Simple text search for movies

    Used for: Basic search bar functionality
    """
    return tmdb.search_movies(query, page)


# Must stay below the fixed paths above
@router.get("/{movie_id}")
def get_movie_details(
    movie_id: int,
    tmdb: TMDBService = Depends(get_tmdb_service),
) -> Dict[str, Any]:
    """Movie details with credits and videos appended"""
    return tmdb.get_movie_details(movie_id)
