"""Durable key-value stores for local client state."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..errors import PersistenceError

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    Key-value store persisted as a single JSON object on disk.

    Writes go to a temp file that is renamed over the target, so a crash
    mid-write leaves the previous contents intact.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        if value is not None and not isinstance(value, str):
            raise PersistenceError(f"Value for '{key}' in {self.path} is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"{self.path} does not contain a JSON object")
        return data

    def _write(self, data: dict[str, object]) -> None:
        tmp_file = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_file.write_text(json.dumps(data, indent=2, sort_keys=True))
            tmp_file.replace(self.path)
        except OSError as e:
            raise PersistenceError(f"Cannot write {self.path}: {e}") from e
        logger.debug("Wrote %d keys to %s", len(data), self.path)


class MemoryStore:
    """Key-value store that lives only as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
