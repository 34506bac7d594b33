"""
Event catalog domain service.

The catalog exclusively owns the event collection. It validates new
events, assigns their identifiers, and answers listing, filtering and
search queries. Reads go through an explicit refresh so they reflect
the latest durable state, even if another session changed the store.

Mutations re-read the store, then follow a persist-then-commit rule:
the new collection is written through the gateway first and only
replaces the in-memory list once the write succeeded.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from .exceptions import EventRegistryError, NotFoundError, ValidationError
from .models import Event, EventCategory, EventPeriod, utc_now
from .ports import Clock, PersistenceGateway
from .sequence import SequenceGenerator
from .validation import validate_category, validate_event_fields

logger = logging.getLogger(__name__)

DeletionListener = Callable[[int], object]


@dataclass
class EventCatalog:
    """
    Domain service for the event collection.

    Loads the stored events on construction.
    """

    gateway: PersistenceGateway
    clock: Clock = utc_now
    _events: list[Event] = field(default_factory=list, init=False, repr=False)
    _sequence: SequenceGenerator = field(
        default_factory=SequenceGenerator, init=False, repr=False
    )
    _deletion_listeners: list[DeletionListener] = field(
        default_factory=list, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.refresh()

    def refresh(self) -> None:
        """
        Re-read events from the gateway.

        A collection that was never stored keeps the current state. A
        failed load propagates and leaves the current state untouched.
        """
        loaded = self.gateway.load_events()
        if loaded is None:
            return
        self._events = loaded
        self._sequence.advance_past(event.id for event in loaded)

    def create_event(
        self,
        title: str,
        description: str,
        date: datetime,
        location: str,
        category: EventCategory | str,
        max_capacity: int,
    ) -> Event:
        """
        Validate and store a new event.

        Args:
            title: At least 3 non-whitespace characters
            description: At least 10 non-whitespace characters
            date: Strictly in the future; naive values are read as UTC
            location: At least 3 characters
            category: EventCategory or its string value
            max_capacity: Whole number, at least 1

        Returns:
            The stored event

        Raises:
            ValidationError: On the first violated rule
        """
        self.refresh()
        now = self.clock()
        clean = validate_event_fields(
            title, description, date, location, category, max_capacity, now
        )
        clean_title, clean_description, clean_date, clean_location, clean_category, capacity = clean

        event = Event(
            id=self._sequence.peek(),
            title=clean_title,
            description=clean_description,
            date=clean_date,
            location=clean_location,
            category=clean_category,
            max_capacity=capacity,
            created_at=now,
        )
        updated = [*self._events, event]
        self.gateway.save_events(updated)
        self._events = updated
        self._sequence.advance_past([event.id])

        logger.info("Created event %s (%s) on %s", event.id, event.title, event.date.isoformat())
        return event

    def get_all_events(self) -> list[Event]:
        """Refresh from the store, then return every event by ascending date."""
        self.refresh()
        return sorted(self._events, key=lambda event: event.date)

    def get_event_by_id(self, event_id: int) -> Event | None:
        return next((event for event in self._events if event.id == event_id), None)

    def require_event(self, event_id: int) -> Event:
        """
        Return an event by ID.

        Raises:
            NotFoundError: If the event does not exist
        """
        event = self.get_event_by_id(event_id)
        if event is None:
            raise NotFoundError("Event", event_id)
        return event

    def filter_events(
        self,
        category: EventCategory | str | None = None,
        period: EventPeriod | str | None = None,
    ) -> list[Event]:
        """
        Return events matching a category and, optionally, a period.

        Omitting the category returns every category.

        Raises:
            ValidationError: If the category or period is not a known value
        """
        events = self.get_all_events()
        if category:
            wanted = validate_category(category)
            events = [event for event in events if event.category == wanted]
        if period:
            try:
                past = EventPeriod(period) == EventPeriod.PAST
            except ValueError:
                raise ValidationError("period", "Period must be 'upcoming' or 'past'") from None
            now = self.clock()
            events = [event for event in events if event.is_past(now) == past]
        return events

    def search_events(self, query: str) -> list[Event]:
        """Case-insensitive match on title, description or location."""
        events = self.get_all_events()
        needle = query.strip().lower()
        if not needle:
            return events
        return [
            event
            for event in events
            if needle in event.title.lower()
            or needle in event.description.lower()
            or needle in event.location.lower()
        ]

    def delete_event(self, event_id: int) -> bool:
        """
        Remove an event.

        Returns:
            True if the event existed and was removed, False otherwise.
            An unknown id neither mutates nor persists anything.

        Raises:
            EventRegistryError: If a deletion listener fails. The event is
                already deleted and persisted at that point; the error is
                logged and re-raised.
        """
        self.refresh()
        remaining = [event for event in self._events if event.id != event_id]
        if len(remaining) == len(self._events):
            logger.info("Delete ignored: event %s not found", event_id)
            return False

        self.gateway.save_events(remaining)
        self._events = remaining
        logger.info("Deleted event %s", event_id)

        for listener in self._deletion_listeners:
            try:
                listener(event_id)
            except EventRegistryError:
                logger.error("Event %s deleted but a deletion listener failed", event_id)
                raise
        return True

    def add_deletion_listener(self, listener: DeletionListener) -> None:
        """Register a callable invoked with the id of every deleted event."""
        self._deletion_listeners.append(listener)
