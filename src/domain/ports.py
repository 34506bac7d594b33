"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from .models import Event, Registration, User

Clock = Callable[[], datetime]


class KeyValueStore(Protocol):
    """Port interface for a flat, durable string key-value store."""

    def get(self, key: str) -> str | None:
        """
        Read the value stored under a key.

        Returns:
            Stored string, or None if the key was never written

        Raises:
            StoreError: If the store cannot be read
        """
        ...

    def set(self, key: str, value: str) -> None:
        """
        Replace the value stored under a key.

        Raises:
            StoreError: If the store cannot be written
        """
        ...

    def delete(self, key: str) -> None:
        """Remove a key. Removing a missing key is a no-op."""
        ...


class PersistenceGateway(Protocol):
    """
    Port interface for entity collection persistence.

    Every save writes the whole collection. Loads return None when the
    collection has never been stored, so callers can keep their current
    state instead of wiping it.
    """

    def load_events(self) -> list[Event] | None:
        """
        Raises:
            DeserializationError: If the stored collection is corrupt
            StoreError: If the store cannot be read
        """
        ...

    def save_events(self, events: list[Event]) -> None: ...

    def load_users(self) -> list[User] | None: ...

    def save_users(self, users: list[User]) -> None: ...

    def load_registrations(self) -> list[Registration] | None: ...

    def save_registrations(self, registrations: list[Registration]) -> None: ...
