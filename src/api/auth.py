"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from src.api.dependencies import get_auth_service
from src.config import Settings, get_settings
from src.schemas.auth import (
    AuthResponse,
    RegisterResponse,
    Token,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user. Log in separately to obtain tokens."""
    user = auth.register(user_data.email, user_data.password)
    return RegisterResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Login with email and password.

    The access token is returned in the body, the refresh token only as an
    http-only cookie.
    """
    user, tokens = auth.login(credentials.email, credentials.password)

    response.set_cookie(
        settings.refresh_cookie_name,
        tokens.refresh_token,
        max_age=settings.refresh_token_max_age,
        httponly=True,
        secure=not settings.is_development,
        samesite="lax",
        path="/",
    )

    return AuthResponse(
        access_token=tokens.access_token,
        user=UserResponse.model_validate(user),
    )


@router.post("/refresh", response_model=Token)
def refresh(
    request: Request,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Issue a new access token from the refresh cookie."""
    access_token = auth.refresh(request.cookies.get(settings.refresh_cookie_name))
    return Token(message="Access token refreshed successfully.", access_token=access_token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    request: Request,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Logout. Always succeeds and always clears the refresh cookie."""
    auth.logout(request.cookies.get(settings.refresh_cookie_name))

    resp = Response(status_code=status.HTTP_204_NO_CONTENT)
    resp.delete_cookie(
        settings.refresh_cookie_name,
        path="/",
        httponly=True,
        secure=not settings.is_development,
        samesite="lax",
    )
    return resp
