"""In-memory key-value store."""

from dataclasses import dataclass, field

from calorie_tracker.services.persistence import KeyValueStore


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store; contents last for the process lifetime."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
