from fastapi import APIRouter, Depends, status

from movieshelf.models.user import User
from movieshelf.schemas.auth import UserRegister, UserLogin, UserResponse, AuthResponse
from movieshelf.services.auth_service import AuthService, TokenIdentity
from movieshelf.utils.dependencies import get_auth_service, get_current_user

# Define router
router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _auth_response(auth_service: AuthService, user: User, token: str) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user),
        token=token,
        expires_in=int(auth_service.token_ttl.total_seconds()),
    )


# Register a new user
@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserRegister, auth_service: AuthService = Depends(get_auth_service)):
    """
    Register a new user

    - **username**: at least 3 characters, unique
    - **email**: valid email, unique
    - **password**: at least 6 characters
    """
    user, token = auth_service.register(user_data.username, user_data.email, user_data.password)
    return _auth_response(auth_service, user, token)


# Login endpoint
@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, auth_service: AuthService = Depends(get_auth_service)):
    """Login with username and password"""
    user, token = auth_service.login(credentials.username, credentials.password)
    return _auth_response(auth_service, user, token)


# Get current authenticated user
@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: TokenIdentity = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Get current authenticated user"""
    return auth_service.get_user(current_user.id)
