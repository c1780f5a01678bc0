"""
In-memory record types held by the stores
"""
from movieshelf.models.user import User
from movieshelf.models.favorite import FavoriteMovie

__all__ = [
    "User",
    "FavoriteMovie",
]
