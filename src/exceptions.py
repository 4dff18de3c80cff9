"""Application error taxonomy.

Services raise these; ``src.main`` renders them as ``{"message": ..., "details": ...}``
responses with the matching status code.
"""

from typing import Any

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: Any = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)


class Unauthorized(AppError):
    """No credential, or one that failed verification."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class Forbidden(AppError):
    """Valid credential without rights over the target resource."""

    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ValidationFailure(AppError):
    """Malformed input; ``details`` carries field-level errors."""

    status_code = 422
    message = "Validation failed"


class Conflict(AppError):
    """A unique field is already taken."""

    status_code = status.HTTP_409_CONFLICT
    message = "Conflict"


class InternalFailure(AppError):
    pass
