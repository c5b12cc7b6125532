"""Validation rules for blog posts."""

from typing import List, Optional

from ..schemas.common import FieldError, ValidationResult
from ..schemas.post import PostCreate, PostUpdate
from ..services.image_store import is_valid_image_data
from .common import MAX_FIELD_LENGTH, is_blank, is_too_long, strip_strings, validate_id

INVALID_IMAGE_MESSAGE = "Invalid image format. Only JPEG, PNG, GIF, and WebP are allowed"


def _check_title(errors: List[FieldError], field: str, value: Optional[str], label: str) -> None:
    if is_blank(value):
        errors.append(FieldError(field=field, message=f"{label} title is required"))
    elif is_too_long(value):
        errors.append(
            FieldError(field=field, message=f"{label} title must be less than {MAX_FIELD_LENGTH} characters")
        )


def _check_content(errors: List[FieldError], field: str, value: Optional[str], label: str) -> None:
    if is_blank(value):
        errors.append(FieldError(field=field, message=f"{label} content is required"))


def validate_create_post(data: PostCreate) -> ValidationResult:
    errors: List[FieldError] = []
    _check_title(errors, "title_fr", data.title_fr, "French")
    _check_title(errors, "title_de", data.title_de, "German")
    _check_content(errors, "content_fr", data.content_fr, "French")
    _check_content(errors, "content_de", data.content_de, "German")

    # The image is optional; an empty string counts as absent.
    if data.img64 and not is_valid_image_data(data.img64):
        errors.append(FieldError(field="img64", message=INVALID_IMAGE_MESSAGE))

    return ValidationResult.from_errors(errors)


def validate_update_post(data: PostUpdate) -> ValidationResult:
    errors = validate_id(data.id, "Post")
    errors.extend(validate_create_post(data).errors)
    return ValidationResult.from_errors(errors)


def sanitize_post(data: PostCreate) -> PostCreate:
    return strip_strings(data)
