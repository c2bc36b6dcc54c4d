"""
Service-layer errors.

Services raise these; the HTTP layer translates them to responses using
``status_code``.
"""
from fastapi import status


class ServiceError(Exception):
    """Base class for errors raised by feature services."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed input, e.g. a blank email."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    """Referenced entity is absent or soft-deleted."""
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """Uniqueness violation, e.g. duplicate email or permission assignment."""
    status_code = status.HTTP_409_CONFLICT
