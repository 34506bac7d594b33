"""
Domain exceptions - Semantic error types for the event registry.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Services raise them and never catch them; callers translate them
into user-facing messages.
"""


class EventRegistryError(Exception):
    """Base class for event registry domain errors."""

    pass


class ValidationError(EventRegistryError):
    """Malformed or out-of-range input for an event, user or registration."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class EventClosedError(EventRegistryError):
    """Registration attempted on an event whose date has passed."""

    def __init__(self, event_id: int) -> None:
        super().__init__(f"Event {event_id} has already taken place")
        self.event_id = event_id


class CapacityExceededError(EventRegistryError):
    """Registration attempted on an event with no available space."""

    def __init__(self, event_id: int, max_capacity: int) -> None:
        super().__init__(f"Event {event_id} is full ({max_capacity} places)")
        self.event_id = event_id
        self.max_capacity = max_capacity


class DuplicateRegistrationError(EventRegistryError):
    """The user already holds an active registration for the event."""

    def __init__(self, event_id: int, email: str) -> None:
        super().__init__(f"{email} is already registered for event {event_id}")
        self.event_id = event_id
        self.email = email


class NotFoundError(EventRegistryError):
    """An operation referenced an event, user or registration that does not exist."""

    def __init__(self, kind: str, identifier: int) -> None:
        super().__init__(f"{kind} {identifier} not found")
        self.kind = kind
        self.identifier = identifier


class DeserializationError(EventRegistryError):
    """Stored data could not be decoded into domain entities."""

    pass


class StoreError(EventRegistryError):
    """The key-value store could not be read or written."""

    pass
