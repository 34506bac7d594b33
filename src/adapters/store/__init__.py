"""Key-value store adapters - memory, JSON files and PostgreSQL."""

from .file import JsonFileKeyValueStore
from .memory import InMemoryKeyValueStore
from .postgres import PostgresKeyValueStore, pending_migrations, run_migrations

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "PostgresKeyValueStore",
    "pending_migrations",
    "run_migrations",
]
