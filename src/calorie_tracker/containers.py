"""Dependency container wiring for the application."""

from dataclasses import dataclass
from pathlib import Path

from calorie_tracker.adapters.json_file_store import JsonFileKeyValueStore
from calorie_tracker.adapters.memory_store import InMemoryKeyValueStore
from calorie_tracker.config import Settings
from calorie_tracker.services.persistence import KeyValueStore, SnapshotStore
from calorie_tracker.services.session import TrackerSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    session: TrackerSession


def build_store(settings: Settings) -> KeyValueStore:
    """Create the key-value store selected by settings."""
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    if settings.storage_backend == "file":
        return JsonFileKeyValueStore(
            directory=Path(settings.storage_dir).expanduser(),
            quota_bytes=settings.storage_quota_bytes,
        )
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = build_store(resolved_settings)
    snapshots = SnapshotStore(store, key_prefix=resolved_settings.storage_key_prefix)
    session = TrackerSession.load(
        snapshots, default_portion_grams=resolved_settings.default_portion_grams
    )
    return AppContainer(settings=resolved_settings, store=store, session=session)
