"""FastAPI dependencies for authentication and database."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import get_db
from src.services.auth import AuthService
from src.services.exceptions import UnauthenticatedError
from src.services.security import InvalidTokenError, PasswordHasher, TokenService
from src.services.task_service import TaskService

# auto_error is off so a missing header gets the same error shape as a bad token
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller, established from a verified access token."""

    user_id: int


def get_token_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenService:
    """Get token service bound to the process settings."""
    return TokenService(settings)


def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthContext:
    """Verify the bearer access token.

    Stateless: access tokens are trusted on signature and expiry alone.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Unauthorized. No access token provided.")

    try:
        user_id = tokens.decode_access_token(credentials.credentials)
    except InvalidTokenError as e:
        raise UnauthenticatedError("Unauthorized. Access token invalid or expired.") from e

    return AuthContext(user_id=user_id)


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, settings, hasher=PasswordHasher(settings), tokens=tokens)


def get_task_service(
    db: Annotated[Session, Depends(get_db)],
) -> TaskService:
    """Get task service with dependencies."""
    return TaskService(db)
