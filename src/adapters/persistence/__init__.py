"""Persistence adapters - JSON gateway and stored record schemas."""

from .gateway import EVENTS_KEY, REGISTRATIONS_KEY, USERS_KEY, JsonPersistenceGateway

__all__ = ["EVENTS_KEY", "REGISTRATIONS_KEY", "USERS_KEY", "JsonPersistenceGateway"]
