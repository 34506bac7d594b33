"""
Registration ledger domain service - registration transaction.

The ledger exclusively owns the registration collection and refers to
events and users by id only. It never mutates an event or a user.

Registration State Machine (per event and user)
===============================================

States:
- unregistered: No registration row, or only cancelled ones
- ACTIVE: Counts against the event's capacity
- CANCELLED: Terminal; kept for history, never counted

Valid Transitions:
    unregistered -> ACTIVE     (register_user)
    ACTIVE -> CANCELLED        (cancel, or deletion of the event)

At most one ACTIVE registration exists per (event, user) pair. Capacity
is always derived from the live ACTIVE count, never cached.

Registration Order
==================

0. Event no longer in catalog      -> NotFoundError
1. Past event                      -> EventClosedError
2. Known email already registered  -> DuplicateRegistrationError
3. No space left                   -> CapacityExceededError
4. Resolve or create the user      -> ValidationError on bad email/name
5. Active registration exists      -> DuplicateRegistrationError
6. Append, persist, return

All three collections are re-read first, so a registration never
lands on an event another session deleted and step 2 sees users
another session created.

Step 2 is a lookup only: it creates nothing and ignores the name, so a
returning attendee of a full event learns they are already registered.
Capacity is checked before the user is resolved so a malformed email
never gets as far as creating anything.
"""

import logging
from dataclasses import dataclass, field, replace

from .catalog import EventCatalog
from .directory import UserDirectory
from .exceptions import (
    CapacityExceededError,
    DuplicateRegistrationError,
    EventClosedError,
    NotFoundError,
)
from .models import CatalogSummary, Event, Registration, RegistrationStatus, utc_now
from .ports import Clock, PersistenceGateway
from .sequence import SequenceGenerator

logger = logging.getLogger(__name__)


@dataclass
class RegistrationLedger:
    """
    Domain service for event registrations.

    Coordinates the catalog and the directory to register attendees,
    and answers capacity questions from the live registration count.
    """

    catalog: EventCatalog
    directory: UserDirectory
    gateway: PersistenceGateway
    clock: Clock = utc_now
    _registrations: list[Registration] = field(default_factory=list, init=False, repr=False)
    _sequence: SequenceGenerator = field(
        default_factory=SequenceGenerator, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.refresh()

    def refresh(self) -> None:
        """Re-read registrations from the gateway; see EventCatalog.refresh."""
        loaded = self.gateway.load_registrations()
        if loaded is None:
            return
        self._registrations = loaded
        self._sequence.advance_past(registration.id for registration in loaded)

    def register_user(self, event: Event, user_name: str, user_email: str) -> Registration:
        """
        Register an attendee for an event.

        Args:
            event: Event to register for
            user_name: Attendee name, kept only if the email is new
            user_email: Institutional email address (will be normalized)

        Returns:
            The new ACTIVE registration

        Raises:
            EventClosedError: If the event date has passed
            CapacityExceededError: If the event has no space left
            ValidationError: If the email or a new user's name is invalid
            NotFoundError: If the event was deleted from the catalog
            DuplicateRegistrationError: If the user is already registered
        """
        self.refresh()
        self.directory.refresh()
        self.catalog.refresh()
        self.catalog.require_event(event.id)

        now = self.clock()
        if event.is_past(now):
            logger.info("Registration refused: event %s is closed", event.id)
            raise EventClosedError(event.id)

        known_user = (
            self.directory.find_by_email(user_email) if isinstance(user_email, str) else None
        )
        if known_user is not None and self._has_active(event.id, known_user.id):
            logger.info("Registration refused: %s already on event %s", known_user.email, event.id)
            raise DuplicateRegistrationError(event.id, known_user.email)

        if self.active_count(event.id) >= event.max_capacity:
            logger.info("Registration refused: event %s is full", event.id)
            raise CapacityExceededError(event.id, event.max_capacity)

        user = self.directory.find_or_create(user_name, user_email)

        if self._has_active(event.id, user.id):
            logger.info("Registration refused: %s already on event %s", user.email, event.id)
            raise DuplicateRegistrationError(event.id, user.email)

        registration = Registration(
            id=self._sequence.peek(),
            event_id=event.id,
            user_id=user.id,
            registered_at=now,
        )
        updated = [*self._registrations, registration]
        self.gateway.save_registrations(updated)
        self._registrations = updated
        self._sequence.advance_past([registration.id])

        logger.info(
            "Registered user %s for event %s (registration %s)",
            user.id,
            event.id,
            registration.id,
        )
        return registration

    def register_user_by_id(self, event_id: int, user_name: str, user_email: str) -> Registration:
        """
        Register an attendee for the event with the given id.

        Raises:
            NotFoundError: If the event does not exist
            (plus every error of register_user)
        """
        event = self.catalog.require_event(event_id)
        return self.register_user(event, user_name, user_email)

    def get_event_registrations(self, event_id: int) -> list[Registration]:
        """Return the ACTIVE registrations of an event."""
        return [
            registration
            for registration in self._registrations
            if registration.event_id == event_id and registration.is_active()
        ]

    def active_count(self, event_id: int) -> int:
        return len(self.get_event_registrations(event_id))

    def is_past(self, event: Event) -> bool:
        return event.is_past(self.clock())

    def available_spaces(self, event: Event) -> int:
        return event.available_spaces(self.active_count(event.id))

    def can_register(self, event: Event) -> bool:
        return event.can_register(self.active_count(event.id), self.clock())

    def cancel(self, registration_id: int) -> Registration:
        """
        Transition a registration from ACTIVE to CANCELLED.

        Cancelling an already cancelled registration returns it unchanged.

        Raises:
            NotFoundError: If the registration does not exist
        """
        self.refresh()
        current = next(
            (r for r in self._registrations if r.id == registration_id),
            None,
        )
        if current is None:
            raise NotFoundError("Registration", registration_id)
        if not current.is_active():
            return current

        cancelled = replace(current, status=RegistrationStatus.CANCELLED)
        updated = [cancelled if r.id == registration_id else r for r in self._registrations]
        self.gateway.save_registrations(updated)
        self._registrations = updated

        logger.info("Cancelled registration %s on event %s", registration_id, current.event_id)
        return cancelled

    def cancel_event_registrations(self, event_id: int) -> int:
        """
        Cancel every ACTIVE registration of an event.

        Wired as the catalog's deletion listener so a deleted event leaves
        no active registrations behind.

        Returns:
            Number of registrations cancelled
        """
        self.refresh()
        targets = {r.id for r in self.get_event_registrations(event_id)}
        if not targets:
            return 0

        updated = [
            replace(r, status=RegistrationStatus.CANCELLED) if r.id in targets else r
            for r in self._registrations
        ]
        self.gateway.save_registrations(updated)
        self._registrations = updated

        logger.info("Cancelled %d registration(s) of deleted event %s", len(targets), event_id)
        return len(targets)

    def summary(self) -> CatalogSummary:
        """Count events, upcoming events and active registrations."""
        events = self.catalog.get_all_events()
        now = self.clock()
        return CatalogSummary(
            total_events=len(events),
            upcoming_events=sum(1 for event in events if not event.is_past(now)),
            active_registrations=sum(self.active_count(event.id) for event in events),
        )

    def _has_active(self, event_id: int, user_id: int) -> bool:
        return any(
            r.event_id == event_id and r.user_id == user_id and r.is_active()
            for r in self._registrations
        )
