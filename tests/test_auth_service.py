import pytest
from jose import jwt

from movieshelf.config import Settings
from movieshelf.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from movieshelf.services.auth_service import AuthService, TokenIdentity
from tests.helpers import tamper_signature

TEST_SECRET = "test-secret-key"


def test_register_returns_user_and_token(auth_service):
    user, token = auth_service.register("alice", "a@x.com", "secret1")

    assert user.id == 1
    assert user.username == "alice"
    assert user.email == "a@x.com"
    assert auth_service.validate(token) == TokenIdentity(id=1, username="alice")


def test_password_is_stored_hashed(auth_service, credential_store):
    auth_service.register("alice", "a@x.com", "secret1")

    stored = credential_store.find_by_username("alice")
    assert stored.password_hash != "secret1"
    assert "secret1" not in stored.password_hash
    assert stored.password_hash.startswith("$2")


def test_same_password_gets_different_salts(auth_service, credential_store):
    auth_service.register("alice", "a@x.com", "secret1")
    auth_service.register("bob", "b@x.com", "secret1")

    alice = credential_store.find_by_username("alice")
    bob = credential_store.find_by_username("bob")
    assert alice.password_hash != bob.password_hash


@pytest.mark.parametrize(
    "username, email, password, field",
    [
        ("al", "a@x.com", "secret1", "username"),
        ("alice", "not-an-email", "secret1", "email"),
        ("alice", "a@x.com", "short", "password"),
        ("alice", "a@x.com", "p" * 73, "password"),
    ],
)
def test_register_validation_names_field(auth_service, username, email, password, field):
    with pytest.raises(ValidationError) as exc_info:
        auth_service.register(username, email, password)

    assert field in exc_info.value.fields


def test_register_duplicate_username(auth_service):
    auth_service.register("alice", "a@x.com", "secret1")

    with pytest.raises(ConflictError) as exc_info:
        auth_service.register("alice", "other@x.com", "secret1")

    assert exc_info.value.message == "Username already exists"
    assert exc_info.value.field == "username"


def test_register_duplicate_email(auth_service):
    auth_service.register("alice", "a@x.com", "secret1")

    with pytest.raises(ConflictError) as exc_info:
        auth_service.register("bob", "a@x.com", "secret1")

    assert exc_info.value.message == "Email already exists"
    assert exc_info.value.field == "email"


def test_login_success(auth_service):
    registered, _ = auth_service.register("alice", "a@x.com", "secret1")

    user, token = auth_service.login("alice", "secret1")

    assert user == registered
    assert auth_service.validate(token).id == registered.id


def test_login_wrong_password_matches_unknown_user(auth_service):
    auth_service.register("alice", "a@x.com", "secret1")

    with pytest.raises(AuthenticationError) as wrong_password:
        auth_service.login("alice", "wrong-password")
    with pytest.raises(AuthenticationError) as unknown_user:
        auth_service.login("nobody", "whatever")

    assert wrong_password.value.message == unknown_user.value.message == "Invalid username or password"


def test_token_claims(auth_service, settings):
    user, token = auth_service.register("alice", "a@x.com", "secret1")

    claims = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
    assert claims["id"] == user.id
    assert claims["username"] == "alice"
    assert claims["type"] == "access"
    assert claims["exp"] - claims["iat"] == settings.access_token_expire_seconds


def test_validate_rejects_tampered_signature(auth_service):
    _, token = auth_service.register("alice", "a@x.com", "secret1")

    with pytest.raises(AuthenticationError) as exc_info:
        auth_service.validate(tamper_signature(token))

    assert exc_info.value.message == "Invalid or expired token"


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_validate_rejects_malformed(auth_service, token):
    with pytest.raises(AuthenticationError):
        auth_service.validate(token)


def test_validate_rejects_token_signed_with_other_secret(credential_store, auth_service):
    other = AuthService(credential_store, Settings(jwt_secret="another-secret", bcrypt_rounds=4))
    user, _ = auth_service.register("alice", "a@x.com", "secret1")

    with pytest.raises(AuthenticationError):
        auth_service.validate(other.issue_token(user))


def test_validate_rejects_expired(credential_store):
    expired = AuthService(credential_store, Settings(jwt_secret=TEST_SECRET, bcrypt_rounds=4, access_token_expire_minutes=-1))
    _, token = expired.register("alice", "a@x.com", "secret1")

    with pytest.raises(AuthenticationError) as exc_info:
        expired.validate(token)

    assert exc_info.value.message == "Invalid or expired token"


def test_validate_rejects_unsigned_token(auth_service):
    auth_service.register("alice", "a@x.com", "secret1")
    header = "eyJhbGciOiJub25lIiwidHlwIjoiSldUIn0"  # {"alg":"none","typ":"JWT"}
    payload = "eyJpZCI6MSwidXNlcm5hbWUiOiJhbGljZSIsInR5cGUiOiJhY2Nlc3MifQ"
    with pytest.raises(AuthenticationError):
        auth_service.validate(f"{header}.{payload}.")


def test_validate_rejects_token_without_identity(auth_service):
    token = jwt.encode({"type": "access", "sub": "alice"}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(AuthenticationError):
        auth_service.validate(token)


def test_get_user(auth_service):
    user, _ = auth_service.register("alice", "a@x.com", "secret1")

    assert auth_service.get_user(user.id) == user
    with pytest.raises(NotFoundError):
        auth_service.get_user(404)


def test_login_unknown_user_still_verifies_a_hash(auth_service, monkeypatch):
    from movieshelf.services import auth_service as auth_service_module

    auth_service.register("alice", "a@x.com", "secret1")
    calls = []
    real_verify = auth_service_module.verify_password

    def recording_verify(pwd_context, plain_password, hashed_password):
        calls.append(hashed_password)
        return real_verify(pwd_context, plain_password, hashed_password)

    monkeypatch.setattr(auth_service_module, "verify_password", recording_verify)

    with pytest.raises(AuthenticationError):
        auth_service.login("nobody", "wrong-password")
    with pytest.raises(AuthenticationError):
        auth_service.login("alice", "wrong-password")

    assert len(calls) == 2
    assert calls[0] == auth_service._dummy_hash
    assert calls[0].startswith("$2")
