"""File-backed key/value store standing in for browser local storage."""

import json
import os
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()


class IKeyValueStore(Protocol):
    """String key/value persistence with local-storage semantics."""

    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class LocalStore:
    """JSON file of string keys to string values.

    Every call reads or rewrites the whole file. Writes go through a
    temporary file and ``os.replace`` so a crash never leaves half a file.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("local_store_corrupt", path=str(self._path))
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): str(value) for key, value in data.items()}

    def _save(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, sort_keys=True), encoding="utf-8")
        os.replace(tmp_path, self._path)

    def get_item(self, key: str) -> str | None:
        """Get a stored value."""
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        """Remove a key if present."""
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)
