"""
Domain layer - Pure business logic with zero framework imports.

This package contains the entities, validation rules and services of the
campus event registry. It defines its own port interfaces for
infrastructure abstraction, so stores and codecs live in adapters.
"""

from .catalog import EventCatalog
from .directory import UserDirectory
from .exceptions import (
    CapacityExceededError,
    DeserializationError,
    DuplicateRegistrationError,
    EventClosedError,
    EventRegistryError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from .ledger import RegistrationLedger
from .models import (
    CatalogSummary,
    Event,
    EventCategory,
    EventPeriod,
    Registration,
    RegistrationStatus,
    User,
)
from .ports import KeyValueStore, PersistenceGateway

__all__ = [
    "CapacityExceededError",
    "CatalogSummary",
    "DeserializationError",
    "DuplicateRegistrationError",
    "Event",
    "EventCatalog",
    "EventCategory",
    "EventClosedError",
    "EventPeriod",
    "EventRegistryError",
    "KeyValueStore",
    "NotFoundError",
    "PersistenceGateway",
    "Registration",
    "RegistrationLedger",
    "RegistrationStatus",
    "StoreError",
    "User",
    "UserDirectory",
    "ValidationError",
]
