"""Key/value storage abstractions."""

from dataclasses import dataclass
from typing import Protocol


class KeyValueStore(Protocol):
    """String-keyed persistent storage for encoded records."""

    def get(self, key: str) -> str | None:
        """Return the stored text for a key, if present."""

    def set(self, key: str, value: str) -> None:
        """Store text under a key, replacing any previous value."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Volatile store used when no file path is configured."""

    _values: dict[str, str]

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def keys(self) -> list[str]:
        return sorted(self._values)
