"""JSON snapshot persistence on top of a key-value store."""

import logging
import warnings
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

import pydantic
from pydantic import TypeAdapter

from calorie_tracker.domain.errors import StorageError, StorageWarning
from calorie_tracker.domain.foods import FoodRecord
from calorie_tracker.domain.goals import DEFAULT_GOAL, Goal
from calorie_tracker.domain.log import LogEntry
from calorie_tracker.domain.preferences import Preferences
from calorie_tracker.services.catalog import SEED_FOODS

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeyValueStore(Protocol):
    """String key-value storage for snapshots."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""

    def set(self, key: str, value: str) -> None:
        """Store a value under a key."""


@dataclass(frozen=True)
class SnapshotCodec(Generic[T]):
    """JSON encoding for one persisted entity, with a fallback default."""

    adapter: TypeAdapter[T]
    default: Callable[[], T]

    def dumps(self, value: T) -> str:
        return self.adapter.dump_json(value).decode("utf-8")

    def loads(self, raw: str | None) -> T:
        """Decode a snapshot, returning the default when absent or corrupt."""
        if raw is None:
            return self.default()
        try:
            return self.adapter.validate_json(raw)
        except pydantic.ValidationError as exc:
            _logger.debug("Discarding corrupt snapshot: %s", exc)
            return self.default()


CATALOG_CODEC: SnapshotCodec[list[FoodRecord]] = SnapshotCodec(
    TypeAdapter(list[FoodRecord]), lambda: list(SEED_FOODS)
)
LOG_CODEC: SnapshotCodec[list[LogEntry]] = SnapshotCodec(
    TypeAdapter(list[LogEntry]), list
)
GOAL_CODEC: SnapshotCodec[Goal] = SnapshotCodec(TypeAdapter(Goal), lambda: DEFAULT_GOAL)
PREFERENCES_CODEC: SnapshotCodec[Preferences] = SnapshotCodec(
    TypeAdapter(Preferences), Preferences
)


@dataclass
class SnapshotStore:
    """Loads and saves tracker state; store failures only warn."""

    store: KeyValueStore
    key_prefix: str = "cm_"

    @property
    def catalog_key(self) -> str:
        return f"{self.key_prefix}db"

    @property
    def log_key(self) -> str:
        return f"{self.key_prefix}items"

    @property
    def goal_key(self) -> str:
        return f"{self.key_prefix}goal"

    @property
    def preferences_key(self) -> str:
        return f"{self.key_prefix}prefs"

    def load_catalog(self) -> list[FoodRecord]:
        return CATALOG_CODEC.loads(self._read(self.catalog_key))

    def save_catalog(self, foods: list[FoodRecord]) -> bool:
        return self._write(self.catalog_key, CATALOG_CODEC.dumps(foods))

    def load_log(self) -> list[LogEntry]:
        return LOG_CODEC.loads(self._read(self.log_key))

    def save_log(self, entries: list[LogEntry]) -> bool:
        return self._write(self.log_key, LOG_CODEC.dumps(entries))

    def load_goal(self) -> Goal:
        return GOAL_CODEC.loads(self._read(self.goal_key))

    def save_goal(self, goal: Goal) -> bool:
        return self._write(self.goal_key, GOAL_CODEC.dumps(goal))

    def load_preferences(self) -> Preferences:
        return PREFERENCES_CODEC.loads(self._read(self.preferences_key))

    def save_preferences(self, preferences: Preferences) -> bool:
        return self._write(self.preferences_key, PREFERENCES_CODEC.dumps(preferences))

    def _read(self, key: str) -> str | None:
        try:
            return self.store.get(key)
        except (OSError, StorageError) as exc:
            _warn(f"Failed to read {key}: {exc}")
            return None

    def _write(self, key: str, value: str) -> bool:
        try:
            self.store.set(key, value)
        except (OSError, StorageError) as exc:
            _warn(f"Failed to save {key}: {exc}")
            return False
        return True


def _warn(message: str) -> None:
    _logger.warning(message)
    warnings.warn(message, StorageWarning, stacklevel=3)
