"""File-backed key-value store, one JSON file per key."""

import re
from dataclasses import dataclass
from pathlib import Path

from calorie_tracker.domain.errors import StorageError
from calorie_tracker.services.persistence import KeyValueStore

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Stores each value in ``<directory>/<key>.json``.

    When ``quota_bytes`` is set, a write that would push the directory's
    total size over it raises StorageError and leaves the old value in place.
    """

    directory: Path
    quota_bytes: int | None = None

    def get(self, key: str) -> str | None:
        """Return the stored text for a key."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise StorageError(f"Corrupt value for {key}") from exc

    def set(self, key: str, value: str) -> None:
        """Write a value atomically via a temporary file."""
        path = self._path(key)
        encoded = value.encode("utf-8")
        if self.quota_bytes is not None:
            used = self._used_bytes(exclude=path)
            if used + len(encoded) > self.quota_bytes:
                raise StorageError(
                    f"Quota exceeded: {used + len(encoded)} > {self.quota_bytes} bytes"
                )
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_bytes(encoded)
        tmp_path.replace(path)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def _used_bytes(self, exclude: Path) -> int:
        if not self.directory.exists():
            return 0
        return sum(
            item.stat().st_size
            for item in self.directory.glob("*.json")
            if item != exclude
        )
