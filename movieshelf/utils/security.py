from passlib.context import CryptContext
from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
from typing import Optional

# Bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _truncate(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


# Password hashing context
def make_password_context(rounds: int = 10) -> CryptContext:
    """Bcrypt context with the given work factor (log2 rounds)"""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


# Password hashing and verification
def hash_password(pwd_context: CryptContext, password: str) -> str:
    """Hash a password with automatic truncation for bcrypt"""
    return pwd_context.hash(_truncate(password))


def verify_password(pwd_context: CryptContext, plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    # Apply same truncation for consistency
    try:
        return pwd_context.verify(_truncate(plain_password), hashed_password)
    except ValueError:
        # Not a hash this context understands
        return False


# JWT token creation and decoding
def create_access_token(
    data: dict,
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: Optional[timedelta] = None,
) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=7))
    to_encode.update({"iat": now, "exp": expire, "type": "access"})
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_token(token: str, secret_key: str, algorithm: str = "HS256") -> Optional[dict]:
    """Return the claims of a valid token, or None if it is malformed, tampered or expired"""
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        return None
