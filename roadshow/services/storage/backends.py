"""
Key-Value Store Backends

Two implementations of KeyValueStoreInterface:

- InMemoryKeyValueStore: a dict, with an optional byte quota that mimics
  the browser's storage limit. Used by tests and throwaway sessions.
- JsonFileKeyValueStore: one file per key in a data directory. Writes go
  to a temp file that is renamed over the target, so a crash mid-write
  never leaves a half-written blob behind.

TRADEOFFS:
- No locking: there is exactly one writer (the current session)
- No history: the last save wins
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from roadshow.services.storage.interface import (
    KeyValueStoreInterface,
    QuotaExceededError,
    StorageReadError,
    StorageWriteError,
)


class InMemoryKeyValueStore(KeyValueStoreInterface):
    """
    Process-local key-value store.

    Args:
        initial: Optional starting contents
        quota_bytes: If set, the total UTF-8 size of all values may not
            exceed this many bytes
    """

    def __init__(
        self,
        initial: Optional[dict[str, str]] = None,
        quota_bytes: Optional[int] = None,
    ):
        self._data: dict[str, str] = dict(initial or {})
        self._quota_bytes = quota_bytes

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            used = sum(
                len(v.encode("utf-8"))
                for k, v in self._data.items()
                if k != key
            )
            needed = used + len(value.encode("utf-8"))
            if needed > self._quota_bytes:
                raise QuotaExceededError(
                    f"Storage quota exceeded: {needed} bytes needed, "
                    f"{self._quota_bytes} allowed"
                )
        self._data[key] = value


class JsonFileKeyValueStore(KeyValueStoreInterface):
    """
    File-backed key-value store.

    Each key maps to `<data_dir>/<key>.json`. The directory is created on
    first write.
    """

    def __init__(self, data_dir: Union[str, Path]):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """Get the file that holds a key."""
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._data_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Could not read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._write_atomic(path, value)
        except OSError as e:
            raise StorageWriteError(f"Could not write {path}: {e}") from e

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write_atomic(self, path: Path, value: str) -> None:
        """Write via temp file + rename so readers never see partial data."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.stem}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
