"""Record store package."""

from fintrack.store.record_store import (
    IdentifierSequence,
    RecordStore,
    RecordStoreClosedError,
)

__all__ = [
    "IdentifierSequence",
    "RecordStore",
    "RecordStoreClosedError",
]
