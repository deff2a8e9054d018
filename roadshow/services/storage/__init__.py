"""
Storage Services Package

Provides the abstract key-value interface, concrete backends, and the
adapter that persists the show list on top of them.
"""

from roadshow.services.storage.interface import (
    DeserializationError,
    KeyValueStoreInterface,
    PersistenceError,
    QuotaExceededError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from roadshow.services.storage.backends import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from roadshow.services.storage.persistence import ShowPersistenceAdapter

__all__ = [
    # Interfaces
    "KeyValueStoreInterface",
    # Exceptions
    "DeserializationError",
    "PersistenceError",
    "QuotaExceededError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Backends
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Adapter
    "ShowPersistenceAdapter",
]
