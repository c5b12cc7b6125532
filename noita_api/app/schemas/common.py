"""
Shared schemas: the response envelope, validation results and the
tagged result returned by mutating service functions.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class FieldError(BaseModel):
    """A single validation problem attached to a payload field."""

    field: str
    message: str


class ValidationResult(BaseModel):
    is_valid: bool
    errors: List[FieldError] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[FieldError]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=errors)

    @property
    def messages(self) -> List[str]:
        return [error.message for error in self.errors]


class ServiceResult(BaseModel, Generic[T]):
    """Outcome of a mutation.

    Expected business failures (capacity, not found, upload problems)
    are reported with ``success=False`` and an ``error`` message rather
    than raised.  ``status_code`` tells the HTTP layer how to report a
    failure.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    status_code: int = 200

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "ServiceResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, status_code: int = 500) -> "ServiceResult[T]":
        return cls(success=False, error=error, status_code=status_code)


class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by every endpoint."""

    data: Optional[T] = None
    message: Optional[str] = None
    errors: Optional[List[str]] = None


class ImageUploadResult(BaseModel):
    success: bool
    filename: Optional[str] = None
    path: Optional[str] = None
    error: Optional[str] = None
