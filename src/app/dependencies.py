"""
Application wiring - Explicit dependency construction.

This module builds the store adapter, the persistence gateway and the
domain services from settings. Services are constructed once by the
caller and passed to consumers; nothing here is a module-level
singleton, so tests build fresh instances at will.
"""

import logging
from dataclasses import dataclass

from psycopg_pool import ConnectionPool

from src.adapters.persistence import JsonPersistenceGateway
from src.adapters.store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    PostgresKeyValueStore,
    run_migrations,
)
from src.app.demo import seed_demo_events
from src.config.settings import Settings, get_settings
from src.domain.catalog import EventCatalog
from src.domain.directory import UserDirectory
from src.domain.ledger import RegistrationLedger
from src.domain.models import utc_now
from src.domain.ports import Clock, KeyValueStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Services:
    """The wired service layer handed to the presentation layer."""

    catalog: EventCatalog
    directory: UserDirectory
    ledger: RegistrationLedger
    store: KeyValueStore
    pool: ConnectionPool | None = None

    def close(self) -> None:
        """Release the database connection pool, if any."""
        if self.pool is not None:
            self.pool.close()
            logger.info("Database connection pool closed")


def configure_logging(settings: Settings) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)


def create_pool(settings: Settings) -> ConnectionPool:
    """Open a connection pool and apply migrations."""
    logger.info("Connecting to database...")
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=True,
    )
    logger.info("Running database migrations...")
    run_migrations(pool)
    return pool


def build_store(settings: Settings, pool: ConnectionPool | None = None) -> KeyValueStore:
    """Pick the key-value store adapter named by settings.store_backend."""
    if settings.store_backend == "memory":
        return InMemoryKeyValueStore()
    if settings.store_backend == "postgres":
        return PostgresKeyValueStore(pool or create_pool(settings))
    return JsonFileKeyValueStore(settings.data_dir)


def build_services(
    settings: Settings | None = None,
    store: KeyValueStore | None = None,
    clock: Clock = utc_now,
) -> Services:
    """
    Wire the service layer.

    Args:
        settings: Application settings (defaults to get_settings())
        store: Store to use instead of the one named by settings
        clock: Time source shared by every service

    Returns:
        Services with the ledger registered as the catalog's deletion
        listener, so deleting an event cancels its registrations
    """
    settings = settings or get_settings()

    pool = None
    if store is None:
        if settings.store_backend == "postgres":
            pool = create_pool(settings)
        store = build_store(settings, pool)

    gateway = JsonPersistenceGateway(store)
    catalog = EventCatalog(gateway=gateway, clock=clock)
    directory = UserDirectory(gateway=gateway, clock=clock)
    ledger = RegistrationLedger(
        catalog=catalog, directory=directory, gateway=gateway, clock=clock
    )
    catalog.add_deletion_listener(ledger.cancel_event_registrations)

    if settings.seed_demo_data:
        seed_demo_events(catalog, clock())

    logger.info("Services ready (%s store)", type(store).__name__)
    return Services(catalog=catalog, directory=directory, ledger=ledger, store=store, pool=pool)
