"""
Unit tests for settings, application wiring and demo data.

Tests verify:
- Settings defaults and environment overrides
- Store selection per backend
- Service wiring (shared clock, deletion cascade, demo seeding)
"""

import logging
from datetime import timedelta
from pathlib import Path

import pytest

from src.adapters.store import InMemoryKeyValueStore, JsonFileKeyValueStore
from src.app.demo import DEMO_EVENTS, seed_demo_events
from src.app.dependencies import build_services, build_store, configure_logging
from src.config.settings import Settings, get_settings
from src.domain.exceptions import (
    CapacityExceededError,
    DuplicateRegistrationError,
    NotFoundError,
)
from src.domain.models import EventCategory


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("STORE_BACKEND", "DATA_DIR", "LOG_LEVEL", "SEED_DEMO_DATA", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()


class TestSettings:
    """Tests for pydantic-settings configuration."""

    def test_defaults(self) -> None:
        """Defaults select the file store and keep demo data off."""
        settings = Settings(_env_file=None)

        assert settings.store_backend == "file"
        assert settings.data_dir == Path(".campus_events")
        assert settings.log_level == "INFO"
        assert settings.seed_demo_data is False

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables override defaults, case-insensitively."""
        monkeypatch.setenv("STORE_BACKEND", "memory")
        monkeypatch.setenv("seed_demo_data", "true")

        settings = Settings(_env_file=None)

        assert settings.store_backend == "memory"
        assert settings.seed_demo_data is True

    def test_unknown_backend_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An unsupported store backend fails validation."""
        monkeypatch.setenv("STORE_BACKEND", "redis")

        with pytest.raises(ValueError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self) -> None:
        """get_settings returns the same cached instance."""
        assert get_settings() is get_settings()


class TestBuildStore:
    """Tests for store selection."""

    def test_memory_backend(self) -> None:
        """The memory backend builds an InMemoryKeyValueStore."""
        store = build_store(Settings(_env_file=None, store_backend="memory"))
        assert isinstance(store, InMemoryKeyValueStore)

    def test_file_backend(self, tmp_path: Path) -> None:
        """The file backend builds a JsonFileKeyValueStore on data_dir."""
        store = build_store(Settings(_env_file=None, store_backend="file", data_dir=tmp_path))

        assert isinstance(store, JsonFileKeyValueStore)
        assert store.data_dir == tmp_path


class TestBuildServices:
    """Tests for service wiring."""

    def test_services_share_one_store(self, clock) -> None:
        """All services are wired over the injected store."""
        store = InMemoryKeyValueStore()
        services = build_services(Settings(_env_file=None), store=store, clock=clock)

        assert services.store is store
        assert services.pool is None
        assert services.ledger.catalog is services.catalog
        assert services.ledger.directory is services.directory

    def test_deleting_event_cancels_registrations(self, clock) -> None:
        """build_services wires the deletion cascade."""
        services = build_services(
            Settings(_env_file=None), store=InMemoryKeyValueStore(), clock=clock
        )
        event = services.catalog.create_event(
            "Choir Rehearsal", "Open rehearsal for the spring concert.",
            clock().replace(year=clock().year + 1), "Chapel", "other", 20,
        )
        services.ledger.register_user(event, "Alice", "alice@school.edu")

        services.catalog.delete_event(event.id)

        assert services.ledger.get_event_registrations(event.id) == []

    def test_file_backend_persists_across_sessions(self, tmp_path: Path, clock) -> None:
        """A second session over the same directory sees earlier state."""
        settings = Settings(_env_file=None, store_backend="file", data_dir=tmp_path)
        first = build_services(settings, clock=clock)
        event = first.catalog.create_event(
            "Choir Rehearsal", "Open rehearsal for the spring concert.",
            clock().replace(year=clock().year + 1), "Chapel", "other", 20,
        )
        first.ledger.register_user(event, "Alice", "alice@school.edu")

        second = build_services(settings, clock=clock)

        assert second.catalog.get_all_events() == [event]
        assert second.ledger.available_spaces(event) == 19
        assert second.directory.find_by_email("alice@school.edu").name == "Alice"

    def test_concurrent_sessions_see_each_others_registrations(
        self, tmp_path: Path, clock
    ) -> None:
        """Alice again through another open session is a duplicate, not a full event."""
        store = JsonFileKeyValueStore(tmp_path)
        first = build_services(Settings(_env_file=None), store=store, clock=clock)
        second = build_services(Settings(_env_file=None), store=store, clock=clock)
        event = first.catalog.create_event(
            "Thesis Defense", "Public defense on distributed consensus.",
            clock() + timedelta(days=2), "Hall A", "conference", 1,
        )
        first.ledger.register_user(event, "Alice", "alice@school.edu")

        with pytest.raises(DuplicateRegistrationError):
            second.ledger.register_user(event, "Alice", "alice@school.edu")

        with pytest.raises(CapacityExceededError):
            second.ledger.register_user(event, "Bob", "bob@school.edu")

    def test_registration_on_event_deleted_by_other_session(
        self, tmp_path: Path, clock
    ) -> None:
        """A session holding a stale Event cannot register on it after deletion."""
        store = JsonFileKeyValueStore(tmp_path)
        first = build_services(Settings(_env_file=None), store=store, clock=clock)
        second = build_services(Settings(_env_file=None), store=store, clock=clock)
        event = first.catalog.create_event(
            "Thesis Defense", "Public defense on distributed consensus.",
            clock() + timedelta(days=2), "Hall A", "conference", 5,
        )
        second.catalog.delete_event(event.id)

        with pytest.raises(NotFoundError):
            first.ledger.register_user(event, "Alice", "alice@school.edu")

    def test_seed_demo_data(self, clock) -> None:
        """seed_demo_data fills an empty catalog with the demo events."""
        settings = Settings(_env_file=None, seed_demo_data=True)
        services = build_services(settings, store=InMemoryKeyValueStore(), clock=clock)

        assert len(services.catalog.get_all_events()) == len(DEMO_EVENTS)

    def test_close_without_pool(self, clock) -> None:
        """close() is safe when no pool was created."""
        services = build_services(
            Settings(_env_file=None), store=InMemoryKeyValueStore(), clock=clock
        )
        services.close()


class TestDemoEvents:
    """Tests for demo catalog seeding."""

    def test_seeds_one_event_per_category(self, catalog, clock) -> None:
        """The demo catalog covers every category with upcoming events."""
        created = seed_demo_events(catalog, clock())

        assert {event.category for event in created} == set(EventCategory)
        assert all(not event.is_past(clock()) for event in created)

    def test_demo_dates_relative_to_start_of_day(self, catalog, clock) -> None:
        """Demo dates are day offsets at fixed times of day."""
        created = seed_demo_events(catalog, clock())

        workshop = next(e for e in created if e.category == EventCategory.WORKSHOP)
        assert workshop.date.day == (clock() + timedelta(days=14)).day
        assert (workshop.date.hour, workshop.date.minute) == (9, 30)

    def test_does_not_seed_non_empty_catalog(self, catalog, make_event, clock) -> None:
        """Seeding skips a catalog that already has events."""
        make_event()

        assert seed_demo_events(catalog, clock()) == []
        assert len(catalog.get_all_events()) == 1


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_service_logs_are_emitted(self, caplog: pytest.LogCaptureFixture, make_event) -> None:
        """Service log records reach the configured handlers."""
        configure_logging(Settings(_env_file=None, log_level="debug"))

        with caplog.at_level(logging.INFO, logger="src.domain.catalog"):
            event = make_event()

        assert f"Created event {event.id}" in caplog.text
