"""Domain errors raised by services and rendered by the API layer."""

from fastapi import status


class AppError(Exception):
    """Base class for expected failures that map to an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: dict[str, str] | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """Missing or malformed input, including weak passwords."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    """The resource already exists."""

    status_code = status.HTTP_409_CONFLICT


class UnauthenticatedError(AppError):
    """Missing, invalid or expired credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(AppError):
    """Credential is well-formed but no longer honoured."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    """Resource is absent or owned by someone else."""

    status_code = status.HTTP_404_NOT_FOUND
