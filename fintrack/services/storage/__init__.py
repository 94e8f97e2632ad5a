"""
Storage Services Package

Provides the abstract blob store interface and concrete backends.
Collections are mirrored as string blobs under fixed keys, so any
backend that can hold strings by key will do.
"""

from fintrack.services.storage.interface import (
    BlobStoreInterface,
    CorruptBlobError,
    PersistenceError,
    QuotaExceededError,
    StorageUnavailableError,
)
from fintrack.services.storage.memory import InMemoryBlobStore
from fintrack.services.storage.json_file import JsonFileBlobStore
from fintrack.services.storage.factory import create_blob_store

__all__ = [
    # Interface
    "BlobStoreInterface",
    # Exceptions
    "CorruptBlobError",
    "PersistenceError",
    "QuotaExceededError",
    "StorageUnavailableError",
    # Backends
    "InMemoryBlobStore",
    "JsonFileBlobStore",
    "create_blob_store",
]
