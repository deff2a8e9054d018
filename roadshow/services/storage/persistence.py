"""
Show Persistence Adapter

Loads and saves the whole show list as a single JSON array under one
key of a KeyValueStoreInterface.

The serialized shape matches what the browser version kept in
localStorage (camelCase keys, ISO timestamps), so an exported blob can
be dropped into the data directory and read as-is.
"""

from typing import Iterable, Optional

from pydantic import TypeAdapter, ValidationError

from roadshow.config import DEFAULT_STORAGE_KEY
from roadshow.models.show import Show
from roadshow.services.storage.interface import (
    DeserializationError,
    KeyValueStoreInterface,
    PersistenceError,
    StorageReadError,
    StorageWriteError,
)


_SHOW_LIST = TypeAdapter(list[Show])


class ShowPersistenceAdapter:
    """
    Reads and writes the show list.

    Every save replaces the stored list entirely; the most recent save
    always wins.
    """

    def __init__(
        self,
        store: KeyValueStoreInterface,
        key: str = DEFAULT_STORAGE_KEY,
    ):
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @property
    def backup_key(self) -> str:
        """Where unreadable data is copied before it can be overwritten."""
        return f"{self._key}.unreadable"

    def load(self) -> list[Show]:
        """
        Load the stored show list.

        Returns:
            The stored shows in stored order, or an empty list if
            nothing has been saved yet

        Raises:
            DeserializationError: If the stored blob is not a valid list
                of shows, or the backend could not be read
        """
        try:
            blob = self._store.get(self._key)
        except StorageReadError as e:
            raise DeserializationError(str(e)) from e

        if blob is None:
            return []

        try:
            return _SHOW_LIST.validate_json(blob)
        except ValidationError as e:
            raise DeserializationError(
                f"Stored data under '{self._key}' is not a valid show list: "
                f"{e.error_count()} problem(s), first: {e.errors()[0]['msg']}"
            ) from e

    def save(self, shows: Iterable[Show]) -> None:
        """
        Serialize and store the full show list.

        Raises:
            PersistenceError: If the backend rejects the write
        """
        blob = self.serialize(shows)
        try:
            self._store.set(self._key, blob)
        except StorageWriteError as e:
            raise PersistenceError(f"Could not save shows: {e}") from e

    @staticmethod
    def serialize(shows: Iterable[Show]) -> str:
        """Deterministic JSON form of a show list."""
        return _SHOW_LIST.dump_json(list(shows), by_alias=True).decode("utf-8")

    def back_up_raw(self) -> Optional[str]:
        """
        Copy the raw stored blob to backup_key.

        Called when load() fails, so the next save() does not destroy the
        only copy of the user's history.

        Returns:
            The backup key, or None if there was nothing readable to copy

        Raises:
            PersistenceError: If the backend rejects the copy
        """
        try:
            blob = self._store.get(self._key)
        except StorageReadError:
            return None
        if blob is None:
            return None
        try:
            self._store.set(self.backup_key, blob)
        except StorageWriteError as e:
            raise PersistenceError(f"Could not back up unreadable data: {e}") from e
        return self.backup_key
