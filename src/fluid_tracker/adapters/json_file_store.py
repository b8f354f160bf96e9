"""JSON-file implementation of the key/value store."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from fluid_tracker.domain.codec import to_code_units
from fluid_tracker.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Stores every key in one JSON object on disk.

    Values are written with every non-ASCII character escaped as ``\\uXXXX``.
    The JSON decoder joins escaped surrogate pairs into one character, so loaded
    values are split back into one character per 16-bit word.
    """

    path: Path
    _values: dict[str, str] | None = None

    @classmethod
    def create(cls, path: str | os.PathLike[str]) -> "JsonFileKeyValueStore":
        return cls(path=Path(path))

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        values = dict(self._load())
        values[key] = value
        self._write(values)
        self._values = values

    def _load(self) -> dict[str, str]:
        if self._values is None:
            if self.path.exists():
                with self.path.open(encoding="utf-8") as handle:
                    data = json.load(handle)
                if not isinstance(data, dict):
                    raise ValueError(f"{self.path} does not hold a JSON object")
                self._values = {
                    str(key): to_code_units(str(value)) for key, value in data.items()
                }
            else:
                self._values = {}
            logger.debug("Loaded %d keys from %s", len(self._values), self.path)
        return self._values

    def _write(self, values: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(values, handle, ensure_ascii=True, sort_keys=True)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            os.unlink(tmp_name)
            raise
