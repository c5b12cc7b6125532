"""
Helpers shared by the v1 endpoints.

Handlers parse the path id, validate the payload and call a service;
each of those steps can fail.  The helpers below raise ``AppError``
subclasses, which the application's exception handler renders in the
response envelope, so handlers only spell out the success path.
"""

from typing import Optional, TypeVar

from fastapi import status

from ...core.errors import AppError, ValidationError
from ...schemas.common import FieldError, ServiceResult, ValidationResult
from ...validation.common import parse_id

T = TypeVar("T")


def require_id(raw_id: str, entity: str) -> int:
    """Return the integer id from the path or fail with HTTP 400."""
    entity_id = parse_id(raw_id)
    if entity_id is None:
        raise AppError(
            f"Invalid {entity.lower()} ID",
            status_code=status.HTTP_400_BAD_REQUEST,
            errors=[FieldError(field="id", message=f"{entity} ID must be a valid number")],
        )
    return entity_id


def ensure_valid(validation: ValidationResult) -> None:
    if not validation.is_valid:
        raise ValidationError(validation.errors)


def unwrap(result: ServiceResult[T], default_error: str) -> Optional[T]:
    """Return the data of a successful result or raise its failure."""
    if not result.success:
        raise AppError(result.error or default_error, status_code=result.status_code)
    return result.data
