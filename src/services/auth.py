"""Authentication flows: register, login, refresh and logout."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import Settings
from src.models.user import User
from src.services.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    UnauthenticatedError,
)
from src.services.security import (
    PASSWORD_REQUIREMENTS,
    InvalidTokenError,
    PasswordHasher,
    TokenPair,
    TokenService,
    is_strong_password,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."
EMAIL_TAKEN = "User with this email already exists."
NO_REFRESH_TOKEN = "Unauthorized. No refresh token provided."
REFRESH_TOKEN_EXPIRED = "Forbidden. Refresh token invalid or expired."  # noqa: S105
REFRESH_TOKEN_REVOKED = "Forbidden. Invalid refresh token."  # noqa: S105


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


class AuthService:
    """Orchestrates the refresh-token lifecycle of a user.

    A user with ``refresh_token`` set to NULL has no session. Login stores a
    new token, overwriting any previous one, and logout clears it again. Only
    the stored value is accepted by :meth:`refresh`, which is what makes a
    superseded or logged-out token unusable before it expires.
    """

    def __init__(
        self,
        db: Session,
        settings: Settings,
        hasher: PasswordHasher | None = None,
        tokens: TokenService | None = None,
    ):
        self.db = db
        self.hasher = hasher or PasswordHasher(settings)
        self.tokens = tokens or TokenService(settings)

    def register(self, email: str, password: str) -> User:
        """Create a new user without a session."""
        if get_user_by_email(self.db, email):
            raise ConflictError(EMAIL_TAKEN)

        if not is_strong_password(password):
            raise BadRequestError(PASSWORD_REQUIREMENTS)

        user = User(email=email, password_hash=self.hasher.hash(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError(EMAIL_TAKEN) from e
        self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials.

        Unknown email and wrong password raise the same error.
        """
        user = get_user_by_email(self.db, email)
        if not user or not self.hasher.verify(password, user.password_hash):
            raise UnauthenticatedError(INVALID_CREDENTIALS)
        return user

    def login(self, email: str, password: str) -> tuple[User, TokenPair]:
        """Authenticate and start a new session, replacing any previous one."""
        user = self.authenticate(email, password)

        pair = self.tokens.issue(user.id)
        user.refresh_token = pair.refresh_token
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"User {user.id} logged in")
        return user, pair

    def refresh(self, refresh_token: str | None) -> str:
        """Exchange the stored refresh token for a new access token."""
        if not refresh_token:
            raise UnauthenticatedError(NO_REFRESH_TOKEN)

        try:
            user_id = self.tokens.decode_refresh_token(refresh_token)
        except InvalidTokenError as e:
            logger.warning(f"Token refresh failed: {e}")
            raise ForbiddenError(REFRESH_TOKEN_EXPIRED) from e

        user = get_user_by_id(self.db, user_id)
        if user is None or user.refresh_token != refresh_token:
            logger.warning(f"Rejected superseded refresh token for user {user_id}")
            raise ForbiddenError(REFRESH_TOKEN_REVOKED)

        return self.tokens.create_access_token(user.id)

    def logout(self, refresh_token: str | None) -> None:
        """End the session bound to ``refresh_token``.

        Never raises: a missing, invalid or already cleared token is treated
        as logged out.
        """
        if not refresh_token:
            return

        try:
            user_id = self.tokens.decode_refresh_token(refresh_token)
        except InvalidTokenError as e:
            logger.info(f"Logout with unusable refresh token: {e}")
            return

        try:
            # Only clear the session the token belongs to, not a newer one
            cleared = (
                self.db.query(User)
                .filter(User.id == user_id, User.refresh_token == refresh_token)
                .update({User.refresh_token: None}, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to clear refresh token for user {user_id}")
            return

        if cleared:
            logger.info(f"User {user_id} logged out")
