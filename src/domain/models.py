"""
Domain entities - Event, User and Registration.

Entities are immutable records. They hold no references to each other
beyond identifiers: the ledger counts registrations, the event only
answers questions about a count it is given.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class EventCategory(str, Enum):
    """Fixed set of event categories."""

    CONFERENCE = "conference"
    SPORT = "sport"
    WORKSHOP = "workshop"
    OTHER = "other"


class EventPeriod(str, Enum):
    """Date filter applied on top of the category filter."""

    UPCOMING = "upcoming"
    PAST = "past"


class RegistrationStatus(str, Enum):
    """
    Registration lifecycle states.

    State Transitions (forward-only):
    - ACTIVE -> CANCELLED (explicit cancellation or event deletion)

    Only ACTIVE registrations count against an event's capacity.
    """

    ACTIVE = "active"
    CANCELLED = "cancelled"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_aware(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class Event:
    """An academic event with a seating capacity."""

    id: int
    title: str
    description: str
    date: datetime
    location: str
    category: EventCategory
    max_capacity: int
    created_at: datetime

    def is_past(self, now: datetime | None = None) -> bool:
        return self.date < (now or utc_now())

    def available_spaces(self, active_count: int) -> int:
        return self.max_capacity - active_count

    def can_register(self, active_count: int, now: datetime | None = None) -> bool:
        return self.available_spaces(active_count) > 0 and not self.is_past(now)


@dataclass(frozen=True)
class User:
    """An attendee identified by an institutional email address."""

    id: int
    name: str
    email: str
    registered_at: datetime

    def initials(self) -> str:
        """
        Two-letter initials for avatars.

        Uses the first letters of the first two words of the name, or the
        first two letters when the name is a single word.
        """
        parts = self.name.split()
        if len(parts) >= 2:
            return (parts[0][0] + parts[1][0]).upper()
        return self.name[:2].upper()


@dataclass(frozen=True)
class Registration:
    """Link between a user and an event, referenced by id only."""

    id: int
    event_id: int
    user_id: int
    registered_at: datetime
    status: RegistrationStatus = RegistrationStatus.ACTIVE

    def is_active(self) -> bool:
        return self.status == RegistrationStatus.ACTIVE


@dataclass(frozen=True)
class CatalogSummary:
    """Dashboard counters over the whole catalog."""

    total_events: int
    upcoming_events: int
    active_registrations: int
