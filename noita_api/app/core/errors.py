"""
Application error hierarchy.

Every error the API raises deliberately derives from ``AppError``,
which carries the HTTP status code it maps to and, for validation
failures, the list of offending fields.  Read operations raise these
errors directly; mutating service functions raise them inside their
transaction and turn them into a failed ``ServiceResult`` on the way
out, so callers of a mutation never see an exception.
"""

from typing import List, Optional

from fastapi import status

from ..schemas.common import FieldError


class AppError(Exception):
    """Base class for expected, user-facing failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[FieldError]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors or []


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: List[FieldError], message: str = "Validation failed") -> None:
        super().__init__(message, errors=errors)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource") -> None:
        super().__init__(f"{resource} not found")


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class CapacityError(AppError):
    """The carousel cannot take another picture."""

    status_code = status.HTTP_400_BAD_REQUEST


class MinimumCountError(AppError):
    """Removing a picture would leave the carousel too small."""

    status_code = status.HTTP_400_BAD_REQUEST


class PositionError(AppError):
    """No neighbouring picture exists in the requested direction."""

    status_code = status.HTTP_400_BAD_REQUEST


class ImageUploadError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
