"""
Domain error taxonomy.

Services raise these at the point of detection; the handlers registered in
``jobtracker.main`` turn them into ``{"msg": ...}`` JSON responses.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or invalid input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    """Unique value already taken (e.g. a registered email)."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AppError):
    """Bad credentials or an unusable bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppError):
    """Caller does not own the resource."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
