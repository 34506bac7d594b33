"""
Input validation rules for events and users.

Each check raises ValidationError naming the offending field. Event
fields are checked in a fixed order and the first violation wins.
"""

import re
from datetime import datetime

from .exceptions import ValidationError
from .models import EventCategory, as_aware

MIN_TITLE_LENGTH = 3
MIN_DESCRIPTION_LENGTH = 10
MIN_LOCATION_LENGTH = 3
MIN_CAPACITY = 1
MIN_NAME_LENGTH = 2

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Substrings that mark an address as belonging to an academic institution
INSTITUTIONAL_MARKERS = (".edu", ".ac.", ".univ-", ".universite", ".school", ".college")


def _require_text(field: str, value: object, min_length: int, message: str) -> str:
    if not isinstance(value, str) or len(value.strip()) < min_length:
        raise ValidationError(field, message)
    return value.strip()


def validate_title(title: object) -> str:
    return _require_text(
        "title", title, MIN_TITLE_LENGTH, "Title must contain at least 3 characters"
    )


def validate_description(description: object) -> str:
    return _require_text(
        "description",
        description,
        MIN_DESCRIPTION_LENGTH,
        "Description must contain at least 10 characters",
    )


def validate_date(date: object, now: datetime) -> datetime:
    if not isinstance(date, datetime):
        raise ValidationError("date", "Date must be a datetime")
    date = as_aware(date)
    if date <= now:
        raise ValidationError("date", "Date must be in the future")
    return date


def validate_location(location: object) -> str:
    return _require_text(
        "location", location, MIN_LOCATION_LENGTH, "Location must be specified"
    )


def validate_capacity(max_capacity: object) -> int:
    # bool is an int subclass and never a meaningful capacity
    if isinstance(max_capacity, bool) or not isinstance(max_capacity, int):
        raise ValidationError("max_capacity", "Capacity must be a whole number")
    if max_capacity < MIN_CAPACITY:
        raise ValidationError("max_capacity", "Capacity must be at least 1 person")
    return max_capacity


def validate_category(category: object) -> EventCategory:
    try:
        return EventCategory(category)
    except ValueError:
        allowed = ", ".join(c.value for c in EventCategory)
        raise ValidationError("category", f"Category must be one of: {allowed}") from None


def validate_event_fields(
    title: object,
    description: object,
    date: object,
    location: object,
    category: object,
    max_capacity: object,
    now: datetime,
) -> tuple[str, str, datetime, str, EventCategory, int]:
    """
    Validate and normalize event input.

    Order: title -> description -> date -> location -> capacity, then the
    category. Text fields are returned trimmed.

    Raises:
        ValidationError: On the first violated rule
    """
    clean_title = validate_title(title)
    clean_description = validate_description(description)
    clean_date = validate_date(date, now)
    clean_location = validate_location(location)
    clean_capacity = validate_capacity(max_capacity)
    clean_category = validate_category(category)
    return (
        clean_title,
        clean_description,
        clean_date,
        clean_location,
        clean_category,
        clean_capacity,
    )


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


def is_institutional_email(email: str) -> bool:
    """Generic email syntax plus one of the institutional markers."""
    if not EMAIL_PATTERN.match(email):
        return False
    lowered = email.lower()
    return any(marker in lowered for marker in INSTITUTIONAL_MARKERS)


def validate_email(email: object) -> str:
    if not isinstance(email, str):
        raise ValidationError("email", "Email must be a string")
    normalized = normalize_email(email)
    if not is_institutional_email(normalized):
        raise ValidationError(
            "email",
            "Please use an institutional email address (.edu, .ac., .univ-, etc.)",
        )
    return normalized


def validate_name(name: object) -> str:
    return _require_text(
        "name", name, MIN_NAME_LENGTH, "Name must contain at least 2 characters"
    )
