"""
JSON persistence gateway - Implements PersistenceGateway protocol.

Serializes each entity collection to a JSON array stored under a fixed
key (``events``, ``users``, ``registrations``) of any KeyValueStore.
Decoding goes through the pydantic record schemas; corrupt data raises
DeserializationError instead of producing half-built entities.
"""

import logging
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.domain.exceptions import DeserializationError
from src.domain.models import Event, Registration, User
from src.domain.ports import KeyValueStore

from .records import EventRecord, RegistrationRecord, UserRecord

logger = logging.getLogger(__name__)

EVENTS_KEY = "events"
USERS_KEY = "users"
REGISTRATIONS_KEY = "registrations"

_EVENT_LIST = TypeAdapter(list[EventRecord])
_USER_LIST = TypeAdapter(list[UserRecord])
_REGISTRATION_LIST = TypeAdapter(list[RegistrationRecord])


class JsonPersistenceGateway:
    """
    Implements PersistenceGateway protocol over a KeyValueStore.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Holds no entity state of its own.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load_events(self) -> list[Event] | None:
        return self._load(EVENTS_KEY, _EVENT_LIST)

    def save_events(self, events: list[Event]) -> None:
        self._save(EVENTS_KEY, _EVENT_LIST, [EventRecord.from_domain(e) for e in events])

    def load_users(self) -> list[User] | None:
        return self._load(USERS_KEY, _USER_LIST)

    def save_users(self, users: list[User]) -> None:
        self._save(USERS_KEY, _USER_LIST, [UserRecord.from_domain(u) for u in users])

    def load_registrations(self) -> list[Registration] | None:
        return self._load(REGISTRATIONS_KEY, _REGISTRATION_LIST)

    def save_registrations(self, registrations: list[Registration]) -> None:
        self._save(
            REGISTRATIONS_KEY,
            _REGISTRATION_LIST,
            [RegistrationRecord.from_domain(r) for r in registrations],
        )

    def _load(self, key: str, adapter: TypeAdapter[list[Any]]) -> list[Any] | None:
        raw = self._store.get(key)
        if raw is None:
            return None

        try:
            records = adapter.validate_json(raw)
        except PydanticValidationError as e:
            logger.error(f"Stored '{key}' collection is corrupt: {e.error_count()} error(s)")
            raise DeserializationError(f"Stored '{key}' collection is corrupt") from e

        return [record.to_domain() for record in records]

    def _save(self, key: str, adapter: TypeAdapter[list[Any]], records: list[Any]) -> None:
        payload = adapter.dump_json(records, by_alias=True).decode()
        self._store.set(key, payload)
        logger.debug(f"Saved {len(records)} record(s) under '{key}'")
