"""Shared test fixtures."""

from dataclasses import dataclass, field
from uuid import UUID

import pytest

from calorie_tracker.adapters.memory_store import InMemoryKeyValueStore
from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.errors import StorageError
from calorie_tracker.services.persistence import KeyValueStore, SnapshotStore
from calorie_tracker.services.session import TrackerSession


@dataclass
class FailingKeyValueStore(KeyValueStore):
    """Store that simulates quota or I/O failures."""

    values: dict[str, str] = field(default_factory=dict)
    fail_reads: bool = False
    fail_writes: bool = True

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError("read failed")
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("quota exceeded")
        self.values[key] = value


@dataclass
class SequentialIds:
    """Deterministic UUID factory."""

    issued: int = 0

    def __call__(self) -> UUID:
        self.issued += 1
        return UUID(int=self.issued)


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory")


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def snapshots(store: InMemoryKeyValueStore) -> SnapshotStore:
    return SnapshotStore(store)


@pytest.fixture
def session(snapshots: SnapshotStore) -> TrackerSession:
    return TrackerSession.load(snapshots)


@pytest.fixture
def container(
    settings: Settings,
    store: InMemoryKeyValueStore,
    session: TrackerSession,
) -> AppContainer:
    return AppContainer(settings=settings, store=store, session=session)
