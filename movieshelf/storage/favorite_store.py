"""
Favorite Store
==============
Keeps per-user favorite movies in memory.

Invariant: at most one record per (user_id, movie_id). The store itself
rejects a second add, whatever the caller checked first.
"""
from collections import OrderedDict
from datetime import datetime, timezone
from itertools import count
from typing import List, Optional, Tuple
import threading
import logging

from movieshelf.errors import ConflictError
from movieshelf.models.favorite import FavoriteMovie

logger = logging.getLogger(__name__)


class FavoriteStore:
    """
    Favorites kept in insertion order, keyed by (user_id, movie_id).
    """

    def __init__(self):
        self._favorites: "OrderedDict[Tuple[int, int], FavoriteMovie]" = OrderedDict()
        self._ids = count(1)
        self._lock = threading.Lock()

    def list_by_user(self, user_id: int) -> List[FavoriteMovie]:
        """Favorites of one user, oldest first"""
        with self._lock:
            return [fav for (owner, _), fav in self._favorites.items() if owner == user_id]

    def find(self, user_id: int, movie_id: int) -> Optional[FavoriteMovie]:
        return self._favorites.get((user_id, movie_id))

    def add(
        self,
        user_id: int,
        movie_id: int,
        title: str,
        poster_path: Optional[str] = None,
        rating: Optional[str] = None,
    ) -> FavoriteMovie:
        """
        Save a favorite.

        Raises:
            ConflictError: if the user already has this movie saved
        """
        key = (user_id, movie_id)
        with self._lock:
            if key in self._favorites:
                raise ConflictError("Movie already in favorites", field="movieId")

            favorite = FavoriteMovie(
                id=next(self._ids),
                user_id=user_id,
                movie_id=movie_id,
                title=title,
                poster_path=poster_path,
                rating=rating,
                created_at=datetime.now(timezone.utc),
            )
            self._favorites[key] = favorite

        logger.debug(f"User {user_id} favorited movie {movie_id}")
        return favorite

    def remove(self, user_id: int, movie_id: int) -> bool:
        """
        Delete a favorite.

        Returns:
            True if a record existed and was removed, False otherwise
        """
        with self._lock:
            removed = self._favorites.pop((user_id, movie_id), None)
        return removed is not None

    def __len__(self) -> int:
        return len(self._favorites)
