from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class FavoriteMovie(BaseModel):
    """
    Favorite movie saved by a user.
    Display fields are copied from the catalog when the favorite is added
    and are not kept in sync afterwards.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    user_id: int
    movie_id: int  # TMDB movie ID
    title: str
    poster_path: Optional[str] = None
    rating: Optional[str] = None
    created_at: datetime

    def __repr__(self):
        return f"<FavoriteMovie(user_id={self.user_id}, movie_id={self.movie_id})>"
