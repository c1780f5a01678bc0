"""
Credential Store
================
Keeps registered users in memory and enforces that usernames and emails
are unique.

Accounts are append-only: there is no update or delete.
"""
from datetime import datetime, timezone
from itertools import count
from typing import Dict, Optional
import threading
import logging

from movieshelf.errors import ConflictError
from movieshelf.models.user import User

logger = logging.getLogger(__name__)


class CredentialStore:
    """In-memory user records keyed by id, with username/email indexes"""

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._by_username: Dict[str, int] = {}
        self._by_email: Dict[str, int] = {}
        self._ids = count(1)
        self._lock = threading.Lock()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        user_id = self._by_username.get(username)
        return self._users.get(user_id) if user_id is not None else None

    def find_by_email(self, email: str) -> Optional[User]:
        user_id = self._by_email.get(email)
        return self._users.get(user_id) if user_id is not None else None

    def create(self, username: str, email: str, password_hash: str) -> User:
        """
        Store a new user.

        Raises:
            ConflictError: if the username or email is already taken, even
                when the caller checked beforehand.
        """
        with self._lock:
            if username in self._by_username:
                raise ConflictError("Username already exists", field="username")
            if email in self._by_email:
                raise ConflictError("Email already exists", field="email")

            user = User(
                id=next(self._ids),
                username=username,
                email=email,
                password_hash=password_hash,
                created_at=datetime.now(timezone.utc),
            )
            self._users[user.id] = user
            self._by_username[username] = user.id
            self._by_email[email] = user.id

        logger.debug(f"Created user {user.id}")
        return user

    def __len__(self) -> int:
        return len(self._users)
