"""
Storage Module — Key-Value Session Persistence

Public API:
- KeyValueStore: get/set/delete/clear port with JSON helpers
- InMemoryStore: Process-local backend
- JsonFileStore: Single-file JSON backend
- StorageError: Corrupt or unreadable contents
- build_store: Backend factory
"""

from .store import (
    ANALYSIS_KEY,
    PHOTOS_KEY,
    PROFILE_KEY,
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    StorageError,
    build_store,
)

__all__ = [
    "ANALYSIS_KEY",
    "PHOTOS_KEY",
    "PROFILE_KEY",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "StorageError",
    "build_store",
]
