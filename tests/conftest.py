"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A controllable clock
- An in-memory key-value store and the JSON gateway over it
- Wired domain services (catalog, directory, ledger)
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.adapters.persistence import JsonPersistenceGateway
from src.adapters.store import InMemoryKeyValueStore
from src.domain.catalog import EventCatalog
from src.domain.directory import UserDirectory
from src.domain.ledger import RegistrationLedger
from src.domain.models import EventCategory

FIXED_NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock frozen at a given instant until advanced."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def gateway(store: InMemoryKeyValueStore) -> JsonPersistenceGateway:
    return JsonPersistenceGateway(store)


@pytest.fixture
def catalog(gateway: JsonPersistenceGateway, clock: FakeClock) -> EventCatalog:
    return EventCatalog(gateway=gateway, clock=clock)


@pytest.fixture
def directory(gateway: JsonPersistenceGateway, clock: FakeClock) -> UserDirectory:
    return UserDirectory(gateway=gateway, clock=clock)


@pytest.fixture
def ledger(
    catalog: EventCatalog,
    directory: UserDirectory,
    gateway: JsonPersistenceGateway,
    clock: FakeClock,
) -> RegistrationLedger:
    ledger = RegistrationLedger(catalog=catalog, directory=directory, gateway=gateway, clock=clock)
    catalog.add_deletion_listener(ledger.cancel_event_registrations)
    return ledger


@pytest.fixture
def make_event(catalog: EventCatalog):
    """Factory creating a valid event `days` after the clock's current time."""

    def _make(*, days: float = 1, capacity: int = 10, **overrides):
        fields = {
            "title": "Quantum Computing Seminar",
            "description": "An introduction to qubits and quantum gates.",
            "date": catalog.clock() + timedelta(days=days),
            "location": "Room B12",
            "category": EventCategory.CONFERENCE,
            "max_capacity": capacity,
        }
        fields.update(overrides)
        return catalog.create_event(**fields)

    return _make
