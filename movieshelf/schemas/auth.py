from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime

# Bcrypt only uses the first 72 bytes
MAX_PASSWORD_BYTES = 72


def ensure_password_length(password: str) -> str:
    """Validate that bcrypt can hash the whole password."""
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError('Password cannot be longer than 72 bytes')
    return password


# Schema for user registration
class UserRegister(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return ensure_password_length(v)


# Schema for user login
class UserLogin(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


# Schema for user response - never carries the password hash
class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class AuthResponse(BaseModel):
    user: UserResponse
    token: str
    token_type: str = "bearer"
    expires_in: int
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    message: str
