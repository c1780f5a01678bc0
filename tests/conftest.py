import pytest
from fastapi.testclient import TestClient

from movieshelf.config import Settings
from movieshelf.main import create_app
from movieshelf.services.auth_service import AuthService
from movieshelf.services.favorites_service import FavoritesService
from movieshelf.storage import CredentialStore, FavoriteStore

TEST_SECRET = "test-secret-key"


@pytest.fixture
def settings():
    """Settings with a fixed secret and a cheap bcrypt work factor."""
    return Settings(
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        tmdb_api_key="test-tmdb-key",
        tmdb_base_url="https://tmdb.test/3",
    )


@pytest.fixture
def credential_store():
    return CredentialStore()


@pytest.fixture
def favorite_store():
    return FavoriteStore()


@pytest.fixture
def auth_service(credential_store, settings):
    return AuthService(credential_store, settings)


@pytest.fixture
def favorites_service(favorite_store):
    return FavoritesService(favorite_store)


@pytest.fixture
def app(settings):
    """A fresh app (and fresh, empty stores) per test."""
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token(client):
    """Token of a freshly registered user 'alice'."""
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "a@x.com", "password": "secret1"},
    )
    assert response.status_code == 201
    return response.json()["token"]
