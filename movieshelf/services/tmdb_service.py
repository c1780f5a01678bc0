import requests
from typing import Dict, Optional
import logging

from movieshelf.config import Settings
from movieshelf.errors import CatalogError, NotFoundError

logger = logging.getLogger(__name__)


# TMDB Service to interact with The Movie Database API
class TMDBService:
    """
    Pass-through client for the TMDB catalog.
    Responses are returned as-is; nothing is cached.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.base_url = settings.tmdb_base_url.rstrip("/")
        self.api_key = settings.tmdb_api_key
        self.timeout = settings.tmdb_timeout
        self.session = session or requests.Session()

    # Internal method to make GET requests to TMDB API
    def _make_request(self, endpoint: str, params: Dict = None) -> Dict:
        """
        Make HTTP request to TMDB API.

        Args:
            endpoint: API endpoint (e.g., "/movie/popular")
            params: Query parameters

        Returns:
            JSON response from TMDB

        Raises:
            NotFoundError: if TMDB has no such resource
            CatalogError: if the API key is missing or the request fails
        """
        if not self.api_key:
            raise CatalogError("TMDB API key not configured")
        params = dict(params or {})
        params['api_key'] = self.api_key
        url = f"{self.base_url}{endpoint}"

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            logger.debug(f"TMDB API request successful: {endpoint}")
            return response.json()
        except requests.exceptions.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                raise NotFoundError("Movie not found") from e
            logger.error(f"TMDB API error for {endpoint}: {str(e)}")
            raise CatalogError("Failed to fetch data from TMDB") from e
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"TMDB API error for {endpoint}: {str(e)}")
            raise CatalogError("Failed to fetch data from TMDB") from e

    def get_popular(self, page: int = 1) -> Dict:
        return self._make_request("/movie/popular", {'page': page})

    def get_top_rated(self, page: int = 1) -> Dict:
        return self._make_request("/movie/top_rated", {'page': page})

    def search_movies(self, query: str, page: int = 1) -> Dict:
        """Search movies by title."""
        return self._make_request("/search/movie", {'query': query, 'page': page})

    def get_movie_details(self, movie_id: int) -> Dict:
        """Get detailed movie information including credits and videos."""
        return self._make_request(f"/movie/{movie_id}", {'append_to_response': 'credits,videos'})

    def close(self) -> None:
        self.session.close()
