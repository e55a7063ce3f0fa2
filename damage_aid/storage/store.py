"""
Key-Value Storage — Session Persistence Port

Values are stored as string-serialized JSON under a handful of keys, the
same shape a browser's local storage would hold:

    profile  -> {"name": ..., "address": ..., "budget": ..., "consent": ...}
    photos   -> ["data:image/jpeg;base64,...", ...]
    analysis -> {"type": ..., "severity": ..., "confidence": "92.4%"}

Usage:
    store = InMemoryStore()
    store.set_json(PROFILE_KEY, {"name": "Ada"})
    profile = store.get_json(PROFILE_KEY)
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Union


logger = logging.getLogger(__name__)


PROFILE_KEY = "profile"
PHOTOS_KEY = "photos"
ANALYSIS_KEY = "analysis"


class StorageError(Exception):
    """Custom exception for unreadable or corrupt storage contents."""
    pass


class KeyValueStore(ABC):
    """
    String key-value store with JSON helpers.

    Subclasses implement the raw string operations only.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the raw string for a key, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a raw string under a key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key if present."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""

    @abstractmethod
    def keys(self) -> list:
        """Currently stored keys."""

    def get_json(self, key: str) -> Any:
        """
        Read and decode a JSON value.

        Raises:
            StorageError: If the stored string is not valid JSON
        """
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt value under '{key}': {e}") from e

    def set_json(self, key: str, value: Any) -> None:
        """Encode a value as JSON and store it."""
        self.set(key, json.dumps(value))


class InMemoryStore(KeyValueStore):
    """Process-local store. Contents vanish with the process."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        logger.debug(f"[MEMORY WRITE] {key} ({len(value)} chars)")

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> list:
        return list(self._data)


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON object on disk.

    Every write rewrites the whole file through a temporary sibling and an
    atomic rename. Thread-safe.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = Lock()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read store at {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Store at {self.path} is not a JSON object")
        return data

    def _save(self, data: Dict[str, str]) -> None:
        # Readers never see a partially written store
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Cannot write store at {self.path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)
        logger.debug(f"[FILE WRITE] {key} -> {self.path}")

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._save(data)

    def clear(self) -> None:
        with self._lock:
            self._save({})
        logger.info(f"Store cleared: {self.path}")

    def keys(self) -> list:
        with self._lock:
            return list(self._load())


def build_store(backend: str = "memory", path: Optional[str] = None) -> KeyValueStore:
    """
    Create a store from configuration values.

    Raises:
        ValueError: Unknown backend name
    """
    if backend == "memory":
        return InMemoryStore()
    if backend == "file":
        if not path:
            raise ValueError("file storage backend requires a path")
        return JsonFileStore(path)
    raise ValueError(f"Unknown storage backend '{backend}' (expected 'memory' or 'file')")
