"""Helpers shared by the domain validators."""

import re
from datetime import datetime, timezone
from typing import List, Optional, TypeVar
from urllib.parse import urlparse

from pydantic import BaseModel

from ..schemas.common import FieldError

MAX_FIELD_LENGTH = 255

# Range of an SQLite INTEGER; larger ids cannot be bound as parameters.
SQLITE_INTEGER_MIN = -(2 ** 63)
SQLITE_INTEGER_MAX = 2 ** 63 - 1

# Calendar dates with an optional time of day and UTC offset.  Checked
# before fromisoformat, which accepts more forms on newer interpreters.
ISO_DATE_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{3}(?:\d{3})?)?)?(?:[+-]\d{2}:\d{2})?)?"
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_too_long(value: Optional[str], limit: int = MAX_FIELD_LENGTH) -> bool:
    return value is not None and len(value) > limit


def is_valid_url(value: str) -> bool:
    """Accept absolute http(s) URLs with a host."""
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def parse_date(value: str) -> Optional[datetime]:
    """Parse an ISO 8601 date or datetime; ``None`` if it is not one.

    Only ``YYYY-MM-DD`` optionally followed by a time
    (``HH:MM[:SS[.fff[fff]]]``, separated by ``T`` or a space) and a
    ``±HH:MM`` offset is accepted; a trailing ``Z`` means UTC.  Aware
    values are converted to UTC and returned naive so that stored dates
    compare consistently.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    if not ISO_DATE_PATTERN.fullmatch(text):
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def validate_id(value: Optional[str], entity: str) -> List[FieldError]:
    """Check the identifier of an update payload."""
    if is_blank(value):
        return [FieldError(field="id", message=f"{entity} ID is required")]
    if parse_id(value) is None:
        return [FieldError(field="id", message=f"{entity} ID must be a valid number")]
    return []


def parse_id(value: str) -> Optional[int]:
    """Convert an identifier to an int, ``None`` if it is malformed.

    Values that do not fit in an SQLite INTEGER are malformed too.
    """
    try:
        number = int(value.strip())
    except ValueError:
        return None
    if not SQLITE_INTEGER_MIN <= number <= SQLITE_INTEGER_MAX:
        return None
    return number


def strip_strings(data: ModelT) -> ModelT:
    """Return a copy of ``data`` with every string field trimmed."""
    trimmed = {
        name: value.strip()
        for name, value in data.model_dump().items()
        if isinstance(value, str)
    }
    return data.model_copy(update=trimmed)
