from typing import Iterable, List
import logging

from movieshelf.errors import ConflictError
from movieshelf.models.favorite import FavoriteMovie
from movieshelf.schemas.favorites import FavoriteAdd
from movieshelf.storage.favorite_store import FavoriteStore

logger = logging.getLogger(__name__)


class FavoritesService:
    """Service for favorite movie operations"""

    def __init__(self, store: FavoriteStore):
        self.store = store

    def list(self, user_id: int) -> List[FavoriteMovie]:
        """Get user's favorites, oldest first"""
        return self.store.list_by_user(user_id)

    def add(self, user_id: int, movie: FavoriteAdd) -> FavoriteMovie:
        """Add a movie to user's favorites"""
        # Check if already in favorites
        if self.store.find(user_id, movie.movie_id):
            raise ConflictError("Movie already in favorites", field="movieId")

        return self.store.add(
            user_id,
            movie.movie_id,
            title=movie.title,
            poster_path=movie.poster_path,
            rating=movie.rating,
        )

    def remove(self, user_id: int, movie_id: int) -> bool:
        """Remove a movie from favorites; False if it was not there"""
        return self.store.remove(user_id, movie_id)

    def reconcile(self, user_id: int, local_favorites: Iterable[FavoriteAdd]) -> List[FavoriteMovie]:
        """
        Merge favorites a client saved while signed out.

        Each local favorite is replayed through add(). Movies the user
        already has are skipped and the server copy wins, so a differing
        cached title or rating on the local copy is dropped. Returns the
        server list, which the client should treat as authoritative.
        """
        added = 0
        for movie in local_favorites:
            try:
                self.add(user_id, movie)
                added += 1
            except ConflictError:
                continue

        logger.info(f"Reconciled favorites for user {user_id}: {added} added")
        return self.list(user_id)
