"""Services package."""

from roadshow.services.storage import (
    DeserializationError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
    PersistenceError,
    QuotaExceededError,
    ShowPersistenceAdapter,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    "DeserializationError",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStoreInterface",
    "PersistenceError",
    "QuotaExceededError",
    "ShowPersistenceAdapter",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
