"""Validation rules for concerts.

A concert needs a city, a date and a link, and must be identifiable by
its venue, its event name or both.  When neither is given the error is
reported on both fields so a form can highlight either one.
"""

from typing import List

from ..schemas.common import FieldError, ValidationResult
from ..schemas.concert import ConcertCreate, ConcertUpdate
from .common import (
    MAX_FIELD_LENGTH,
    is_blank,
    is_too_long,
    is_valid_url,
    parse_date,
    strip_strings,
    validate_id,
)

VENUE_OR_NAME_MESSAGE = "Either venue or event name is required"


def validate_create_concert(data: ConcertCreate) -> ValidationResult:
    errors: List[FieldError] = []

    if is_blank(data.city):
        errors.append(FieldError(field="city", message="City is required"))
    elif is_too_long(data.city):
        errors.append(FieldError(field="city", message=f"City must be less than {MAX_FIELD_LENGTH} characters"))

    if is_blank(data.event_date):
        errors.append(FieldError(field="event_date", message="Event date is required"))
    elif parse_date(data.event_date) is None:
        errors.append(FieldError(field="event_date", message="Event date must be a valid date"))

    if is_blank(data.venue) and is_blank(data.event_name):
        errors.append(FieldError(field="venue", message=VENUE_OR_NAME_MESSAGE))
        errors.append(FieldError(field="event_name", message=VENUE_OR_NAME_MESSAGE))

    if is_too_long(data.venue):
        errors.append(FieldError(field="venue", message=f"Venue must be less than {MAX_FIELD_LENGTH} characters"))
    if is_too_long(data.event_name):
        errors.append(
            FieldError(field="event_name", message=f"Event name must be less than {MAX_FIELD_LENGTH} characters")
        )

    if is_blank(data.event_url):
        errors.append(FieldError(field="event_url", message="Event URL is required"))
    elif not is_valid_url(data.event_url):
        errors.append(FieldError(field="event_url", message="Event URL must be a valid URL"))

    return ValidationResult.from_errors(errors)


def validate_update_concert(data: ConcertUpdate) -> ValidationResult:
    errors = validate_id(data.id, "Concert")
    errors.extend(validate_create_concert(data).errors)
    return ValidationResult.from_errors(errors)


def sanitize_concert(data: ConcertCreate) -> ConcertCreate:
    return strip_strings(data)
