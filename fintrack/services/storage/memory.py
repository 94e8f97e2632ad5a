"""
In-Memory Blob Storage

Behaves like browser local storage: string values under string keys with
an optional total size quota. Contents vanish with the process, which
makes it the backend of choice for tests and throwaway sessions.
"""

from typing import Optional

from fintrack.services.storage.interface import (
    BlobStoreInterface,
    QuotaExceededError,
)


class InMemoryBlobStore(BlobStoreInterface):
    """
    Dictionary-backed blob store.

    Size accounting counts the UTF-8 bytes of every key and value, so a
    write that would push the total past quota_bytes is refused and the
    previous value stays in place.
    """

    def __init__(
        self,
        initial: Optional[dict[str, str]] = None,
        quota_bytes: Optional[int] = None,
    ):
        self._data: dict[str, str] = dict(initial or {})
        self._quota_bytes = quota_bytes

    @staticmethod
    def _entry_size(key: str, value: str) -> int:
        return len(key.encode("utf-8")) + len(value.encode("utf-8"))

    def used_bytes(self) -> int:
        """Total bytes held by all entries."""
        return sum(self._entry_size(k, v) for k, v in self._data.items())

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            used = self.used_bytes()
            if key in self._data:
                used -= self._entry_size(key, self._data[key])
            needed = used + self._entry_size(key, value)
            if needed > self._quota_bytes:
                raise QuotaExceededError(
                    f"Writing '{key}' needs {needed} bytes, quota is {self._quota_bytes}"
                )
        self._data[key] = value

    def remove(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return list(self._data)
