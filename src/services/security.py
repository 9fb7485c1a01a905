"""Password hashing, password policy and JWT handling."""

import re
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from src.config import Settings

SPECIAL_CHARACTERS = "!@#$%^&*"

PASSWORD_REGEX = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[!@#$%^&*])[A-Za-z\d!@#$%^&*]{8,}$"
)
PASSWORD_REQUIREMENTS = (
    "Password must be at least 8 characters long and contain at least one uppercase "
    "letter, one lowercase letter, one number, and one special character (!@#$%^&*)."
)


def is_strong_password(password: str) -> bool:
    """Check a password against the complexity rules."""
    return PASSWORD_REGEX.fullmatch(password) is not None


class InvalidTokenError(Exception):
    """A token failed signature, expiry or claim validation."""


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh tokens issued together at login."""

    access_token: str
    refresh_token: str


class PasswordHasher:
    """Salted one-way password hashing."""

    def __init__(self, settings: Settings):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.bcrypt_rounds,
        )

    def hash(self, password: str) -> str:
        """Hash a password."""
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return self._context.verify(plain_password, hashed_password)


class TokenService:
    """Issue and decode access and refresh JWTs.

    The two token classes are signed with different secrets, so a refresh
    token is never accepted where an access token is expected and vice versa.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def _encode(self, user_id: int, secret: str, expires_delta: timedelta) -> str:
        now = datetime.now(UTC)
        to_encode = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + expires_delta,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(to_encode, secret, algorithm=self.settings.jwt_algorithm)

    def _decode(self, token: str, secret: str) -> int:
        try:
            payload = jwt.decode(token, secret, algorithms=[self.settings.jwt_algorithm])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        sub = payload.get("sub")
        if sub is None:
            raise InvalidTokenError("Token has no subject")
        try:
            return int(sub)
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("Token subject is not a user id") from e

    def create_access_token(self, user_id: int, expires_delta: timedelta | None = None) -> str:
        """Create a short-lived JWT access token."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.settings.access_token_expire_minutes)
        return self._encode(user_id, self.settings.jwt_access_secret, expires_delta)

    def create_refresh_token(self, user_id: int, expires_delta: timedelta | None = None) -> str:
        """Create a long-lived JWT refresh token."""
        if expires_delta is None:
            expires_delta = timedelta(days=self.settings.refresh_token_expire_days)
        return self._encode(user_id, self.settings.jwt_refresh_secret, expires_delta)

    def issue(self, user_id: int) -> TokenPair:
        """Issue a fresh access/refresh token pair."""
        return TokenPair(
            access_token=self.create_access_token(user_id),
            refresh_token=self.create_refresh_token(user_id),
        )

    def decode_access_token(self, token: str) -> int:
        """Validate an access token and return its user id."""
        return self._decode(token, self.settings.jwt_access_secret)

    def decode_refresh_token(self, token: str) -> int:
        """Validate a refresh token and return its user id."""
        return self._decode(token, self.settings.jwt_refresh_secret)
