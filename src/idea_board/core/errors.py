"""Error taxonomy shared by the service layer and the HTTP API.

Every failure a service can report is one of the classes below. Each carries
the HTTP status the API answers with, so endpoints never have to translate
errors themselves.
"""

from __future__ import annotations

from fastapi import status


class IdeaBoardError(Exception):
    """Base class for all failures surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(IdeaBoardError):
    """Raised when the request carries no valid session."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(IdeaBoardError):
    """Raised when an authenticated caller does not own the target entity."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(IdeaBoardError):
    """Raised when a referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ValidationError(IdeaBoardError):
    """Raised for missing, blank or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(IdeaBoardError):
    """Raised when a uniqueness constraint rejects a concurrent write."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class UpstreamFailure(IdeaBoardError):
    """Raised when the external completion service fails or misbehaves."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to process AI request"


class InternalError(IdeaBoardError):
    """Raised when the store fails in a way the caller cannot fix."""


__all__ = [
    "IdeaBoardError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "UpstreamFailure",
    "InternalError",
]
