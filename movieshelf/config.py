from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv
import os
import logging

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEV_JWT_SECRET = "local_development_jwt_secret_key_change_in_production"

# CORS - local dev servers for the frontend
DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5000",
    "http://localhost:5173",
]


@dataclass
class Settings:
    """
    Runtime configuration for the API.

    Built once at startup (``Settings.from_env()``) and handed to
    ``create_app``; tests construct it directly with overrides.
    """
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    bcrypt_rounds: int = 10
    tmdb_api_key: Optional[str] = None
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_timeout: float = 10.0
    frontend_url: Optional[str] = None
    environment: str = "development"
    port: int = 5000
    allowed_origins: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))

    @classmethod
    def from_env(cls) -> "Settings":
        settings = cls(
            jwt_secret=os.getenv("JWT_SECRET", DEV_JWT_SECRET),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7)),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", 10)),
            tmdb_api_key=os.getenv("TMDB_API_KEY") or None,
            tmdb_base_url=os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3"),
            tmdb_timeout=float(os.getenv("TMDB_TIMEOUT", 10)),
            frontend_url=os.getenv("FRONTEND_URL") or None,
            environment=os.getenv("ENVIRONMENT", "development"),
            port=int(os.getenv("PORT", 5000)),
        )
        if settings.frontend_url:
            settings.allowed_origins.append(settings.frontend_url)

        if settings.jwt_secret == DEV_JWT_SECRET:
            logger.warning("JWT_SECRET is not set, using the development fallback secret")
        if not settings.tmdb_api_key:
            logger.warning("TMDB_API_KEY is not set. Movie catalog requests will fail.")
        return settings

    @property
    def access_token_expire_seconds(self) -> int:
        return self.access_token_expire_minutes * 60
