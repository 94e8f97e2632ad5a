"""
Persistence Adapter

Mirrors each entity collection to a blob store under a fixed key.

DESIGN DECISION: Storage is a write-behind mirror of the in-memory store.
It is read exactly once per collection, when a session starts, and written
after every mutation. Neither direction is allowed to take the session
down:
- A missing, unreadable or corrupt blob falls back to the baseline dataset
- A failed write is logged and reported as False; the in-memory state stays
  authoritative and the next successful save catches the mirror up
"""

from typing import Callable, Mapping, Optional, Sequence

from pydantic import BaseModel

from fintrack.activity import ActivityLogger
from fintrack.persistence.baseline import (
    baseline_goals,
    baseline_investments,
    baseline_transactions,
)
from fintrack.persistence.codec import (
    CollectionKey,
    Record,
    deserialize_collection,
    serialize_collection,
)
from fintrack.services.storage import BlobStoreInterface, PersistenceError


BaselineFactory = Callable[[], Sequence[Record]]

DEFAULT_BASELINE: dict[CollectionKey, BaselineFactory] = {
    CollectionKey.TRANSACTIONS: baseline_transactions,
    CollectionKey.INVESTMENTS: baseline_investments,
    CollectionKey.GOALS: baseline_goals,
}


class PersistenceAdapter:
    """
    Loads and saves entity collections through a blob store.

    Args:
        blob_store: Durable key-value backend
        baseline: Per-collection factories for fallback data.
                  Collections not listed fall back to the default seed.
        activity_logger: Structured logger. A default one is created if None.
    """

    def __init__(
        self,
        blob_store: BlobStoreInterface,
        baseline: Optional[Mapping[CollectionKey, BaselineFactory]] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._blob_store = blob_store
        self._baseline = {**DEFAULT_BASELINE, **(baseline or {})}
        self._logger = activity_logger or ActivityLogger()

    @property
    def blob_store(self) -> BlobStoreInterface:
        return self._blob_store

    def baseline(self, key: CollectionKey) -> tuple[Record, ...]:
        """Fresh copy of the fallback collection for key."""
        return tuple(self._baseline[CollectionKey(key)]())

    def load(self, key: CollectionKey) -> tuple[Record, ...]:
        """
        Load the collection stored under key.

        Returns the stored records, or the baseline dataset when the blob
        is absent or cannot be read or decoded. Never raises.
        """
        key = CollectionKey(key)
        try:
            blob = self._blob_store.get(key.value)
            if blob is None:
                return self.baseline(key)
            return deserialize_collection(key, blob)
        except PersistenceError as e:
            self._logger.log_load_fallback(key.value, str(e))
            return self.baseline(key)

    def save(self, key: CollectionKey, records: Sequence[BaseModel]) -> bool:
        """
        Write the collection under key.

        Returns True on success. Failures (quota, unavailable backend) are
        logged and reported as False; they are never raised.
        """
        key = CollectionKey(key)
        try:
            self._blob_store.set(key.value, serialize_collection(records))
        except PersistenceError as e:
            self._logger.log_save_failed(key.value, str(e))
            return False
        self._logger.log_collection_saved(key.value, len(records))
        return True

    def load_all(self) -> dict[CollectionKey, tuple[Record, ...]]:
        """Load every collection, each falling back independently."""
        return {key: self.load(key) for key in CollectionKey}

    def save_all(
        self,
        collections: Mapping[CollectionKey, Sequence[BaseModel]],
    ) -> dict[str, bool]:
        """Save several collections. Returns {key: saved} for each."""
        return {
            CollectionKey(key).value: self.save(key, records)
            for key, records in collections.items()
        }
