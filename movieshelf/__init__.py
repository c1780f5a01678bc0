"""MovieShelf API - accounts, favorites and a TMDb catalog proxy"""

__version__ = "1.0.0"
