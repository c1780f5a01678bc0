"""
In-process stores for accounts and favorites.
Nothing here survives a restart.
"""
from movieshelf.storage.credential_store import CredentialStore
from movieshelf.storage.favorite_store import FavoriteStore

__all__ = [
    "CredentialStore",
    "FavoriteStore",
]
