"""
Abstract Storage Interface

DESIGN DECISION: Shows are stored as ONE string blob under ONE key.
The backend only has to get and set strings, which lets us:
1. Use a JSON file on disk for the real app
2. Use in-memory storage for testing
3. Read data exported from the browser version unchanged

The interface is intentionally tiny - every save overwrites the whole
dataset, so there is nothing to merge and nothing to lock.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStoreInterface(ABC):
    """
    Abstract interface for a local string key-value store.

    Any storage implementation (file, in-memory, embedded DB)
    must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value, replacing whatever was there.

        Args:
            key: Storage key
            value: String to store

        Raises:
            StorageWriteError: If the backend rejects the write
            QuotaExceededError: If the value does not fit
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """The backend could not be read."""
    pass


class StorageWriteError(StorageError):
    """The backend rejected a write."""
    pass


class QuotaExceededError(StorageWriteError):
    """The value is larger than the backend allows."""
    pass


class DeserializationError(StorageError):
    """Stored data is missing its structure or cannot be parsed."""
    pass


class PersistenceError(StorageError):
    """The show list could not be written to storage."""
    pass
