from datetime import timedelta
from typing import NamedTuple, Tuple
import logging

from movieshelf.config import Settings
from movieshelf.errors import AuthenticationError, ConflictError, NotFoundError
from movieshelf.models.user import User
from movieshelf.schemas.auth import UserRegister
from movieshelf.schemas.validation import validate_payload
from movieshelf.storage.credential_store import CredentialStore
from movieshelf.utils.security import (
    make_password_context,
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"
INVALID_TOKEN = "Invalid or expired token"


class TokenIdentity(NamedTuple):
    """Identity carried by a valid access token"""
    id: int
    username: str


class AuthService:
    """Registration, login and access token handling"""

    def __init__(self, credentials: CredentialStore, settings: Settings):
        self.credentials = credentials
        self.secret_key = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.token_ttl = timedelta(minutes=settings.access_token_expire_minutes)
        self.pwd_context = make_password_context(settings.bcrypt_rounds)
        # Checked on unknown usernames so every failed login runs one bcrypt verify
        self._dummy_hash = hash_password(self.pwd_context, "not-a-real-password")

    def register(self, username: str, email: str, password: str) -> Tuple[User, str]:
        data = validate_payload(UserRegister, {"username": username, "email": email, "password": password})

        # Check existing username / email (the store re-checks under its lock)
        if self.credentials.find_by_username(data.username):
            raise ConflictError("Username already exists", field="username")
        if self.credentials.find_by_email(data.email):
            raise ConflictError("Email already exists", field="email")

        # Slow on purpose; must not run while holding a store lock
        password_hash = hash_password(self.pwd_context, data.password)

        user = self.credentials.create(data.username, data.email, password_hash)
        logger.info(f"Registered user {user.id} ({user.username})")
        return user, self.issue_token(user)

    def login(self, username: str, password: str) -> Tuple[User, str]:
        # Find user
        user = self.credentials.find_by_username(username)

        if not user:
            verify_password(self.pwd_context, password, self._dummy_hash)
            logger.warning(f"Login failed: unknown username {username!r}")
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not verify_password(self.pwd_context, password, user.password_hash):
            logger.warning(f"Login failed: incorrect password for user {user.id}")
            raise AuthenticationError(INVALID_CREDENTIALS)

        return user, self.issue_token(user)

    def issue_token(self, user: User) -> str:
        return create_access_token(
            data={"id": user.id, "username": user.username},
            secret_key=self.secret_key,
            algorithm=self.algorithm,
            expires_delta=self.token_ttl,
        )

    def validate(self, token: str) -> TokenIdentity:
        """
        Check signature, expiry and claims of an access token.

        Raises:
            AuthenticationError: for malformed, tampered or expired tokens
        """
        payload = decode_token(token, self.secret_key, self.algorithm)
        if payload is None or payload.get("type") != "access":
            raise AuthenticationError(INVALID_TOKEN)

        user_id = payload.get("id")
        username = payload.get("username")
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(username, str):
            raise AuthenticationError(INVALID_TOKEN)

        return TokenIdentity(id=user_id, username=username)

    def get_user(self, user_id: int) -> User:
        user = self.credentials.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
