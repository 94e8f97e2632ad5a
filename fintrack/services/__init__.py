"""Services package."""

from fintrack.services.storage import (
    BlobStoreInterface,
    CorruptBlobError,
    InMemoryBlobStore,
    JsonFileBlobStore,
    PersistenceError,
    QuotaExceededError,
    StorageUnavailableError,
    create_blob_store,
)

__all__ = [
    # Storage services
    "BlobStoreInterface",
    "CorruptBlobError",
    "InMemoryBlobStore",
    "JsonFileBlobStore",
    "PersistenceError",
    "QuotaExceededError",
    "StorageUnavailableError",
    "create_blob_store",
]
