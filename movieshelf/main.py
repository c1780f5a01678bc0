from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import logging

from movieshelf import __version__
from movieshelf.config import Settings
from movieshelf.errors import MovieShelfError, ValidationError
from movieshelf.middleware.security import SecurityHeadersMiddleware, RequestLoggingMiddleware
from movieshelf.routes import auth, favorites, movies
from movieshelf.schemas.validation import to_validation_error
from movieshelf.services.auth_service import AuthService
from movieshelf.services.favorites_service import FavoritesService
from movieshelf.services.tmdb_service import TMDBService
from movieshelf.storage import CredentialStore, FavoriteStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


# ============================================
# Application Lifespan Management
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: log configuration
    Shutdown: close the TMDB HTTP session

    The stores are in-memory, so everything saved is lost on shutdown.
    """
    settings: Settings = app.state.settings
    logger.info("=" * 60)
    logger.info("🚀 MovieShelf API Starting...")
    logger.info(f"   Environment: {settings.environment}")
    logger.info(f"   CORS Origins: {len(settings.allowed_origins)} configured")
    logger.info(f"   TMDB: {'configured' if settings.tmdb_api_key else 'NOT configured'}")
    logger.info("=" * 60)

    yield

    logger.info("=" * 60)
    logger.info("🛑 MovieShelf API Shutting Down...")
    app.state.tmdb_service.close()
    logger.info("=" * 60)


# ============================================
# Exception Handlers
# ============================================

def _error_response(exc: MovieShelfError) -> JSONResponse:
    content = {"detail": exc.message}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def movieshelf_exception_handler(request: Request, exc: MovieShelfError):
    """Map domain errors to JSON responses"""
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies/params are 400s with per-field messages"""
    return _error_response(to_validation_error(exc.errors()))


async def general_exception_handler(request: Request, exc: Exception):
    """Catch-all handler, never leaks internals to the client"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ============================================
# Application Factory
# ============================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API with its own stores and services.

    Each call gets fresh, empty stores; routes reach them through the
    dependencies in ``movieshelf.utils.dependencies``.
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="MovieShelf API",
        description="Accounts, favorites and a TMDB catalog proxy for the MovieShelf frontend",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    credential_store = CredentialStore()
    favorite_store = FavoriteStore()
    app.state.settings = settings
    app.state.credential_store = credential_store
    app.state.favorite_store = favorite_store
    app.state.auth_service = AuthService(credential_store, settings)
    app.state.favorites_service = FavoritesService(favorite_store)
    app.state.tmdb_service = TMDBService(settings)

    # Middleware
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MovieShelfError, movieshelf_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # ============================================
    # Routes
    # ============================================

    @app.get("/", tags=["Health"])
    async def root():
        """Basic health check"""
        return {
            "message": "MovieShelf API",
            "version": __version__,
            "status": "healthy",
            "docs": "/docs"
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Detailed health check for monitoring"""
        return {
            "status": "healthy",
            "api_version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "users": len(credential_store),
            "favorites": len(favorite_store),
            "tmdb_configured": bool(settings.tmdb_api_key),
        }

    app.include_router(auth.router)
    app.include_router(favorites.router)
    app.include_router(movies.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=app.state.settings.port,
        log_level="info"
    )
