"""Authentication schemas."""

from pydantic import ConfigDict, EmailStr, Field

from src.schemas.base import CamelModel


class UserRegister(CamelModel):
    """User registration request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserLogin(CamelModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(CamelModel):
    """Public user information. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str


class RegisterResponse(CamelModel):
    """Registration response."""

    message: str = "User registered successfully. Please log in."
    user: UserResponse


class Token(CamelModel):
    """JWT access token response."""

    message: str
    access_token: str
    token_type: str = "bearer"  # noqa: S105


class AuthResponse(Token):
    """Login response with access token and user info."""

    message: str = "Login successful."
    user: UserResponse
