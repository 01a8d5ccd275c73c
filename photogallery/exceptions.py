"""
Error kinds raised by the gallery engine.
Each error carries the HTTP status the application maps it to, a message and optional detail.
"""
from typing import Any, Optional

from fastapi import status


class GalleryServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Gallery service error"

    def __init__(self, message: Optional[str] = None, detail: Any = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(GalleryServiceError):
    """Malformed input. Detail lists the violated fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation error"


class UnauthenticatedError(GalleryServiceError):
    """Missing or invalid credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class NotFoundError(GalleryServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(GalleryServiceError):
    """Uniqueness violation."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(GalleryServiceError):
    """Unexpected storage or infrastructure fault. Never carries internal detail."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
