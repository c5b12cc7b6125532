"""Validation rules for carousel pictures and moves."""

from typing import List

from ..schemas.carousel import CarouselCreate, CarouselUpdate, SwitchPosition
from ..schemas.common import FieldError, ValidationResult
from ..services.image_store import is_valid_image_data
from .common import is_blank, strip_strings, validate_id
from .post import INVALID_IMAGE_MESSAGE

DIRECTIONS = ("left", "right")


def validate_create_carousel(data: CarouselCreate) -> ValidationResult:
    errors: List[FieldError] = []
    if is_blank(data.picture64):
        errors.append(FieldError(field="picture64", message="Picture data is required"))
    elif not is_valid_image_data(data.picture64):
        errors.append(FieldError(field="picture64", message=INVALID_IMAGE_MESSAGE))
    return ValidationResult.from_errors(errors)


def validate_update_carousel(data: CarouselUpdate) -> ValidationResult:
    errors = validate_id(data.id, "Picture")
    errors.extend(validate_create_carousel(data).errors)
    return ValidationResult.from_errors(errors)


def validate_switch_position(data: SwitchPosition) -> ValidationResult:
    errors: List[FieldError] = []
    if not data.direction:
        errors.append(FieldError(field="direction", message="Direction is required"))
    elif data.direction not in DIRECTIONS:
        errors.append(FieldError(field="direction", message='Direction must be either "left" or "right"'))
    return ValidationResult.from_errors(errors)


def sanitize_carousel(data: CarouselCreate) -> CarouselCreate:
    return strip_strings(data)
