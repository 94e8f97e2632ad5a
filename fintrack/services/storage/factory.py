"""Blob store selection from configuration."""

from typing import Optional

from fintrack.config import StorageSettings, get_settings
from fintrack.services.storage.interface import BlobStoreInterface
from fintrack.services.storage.json_file import JsonFileBlobStore
from fintrack.services.storage.memory import InMemoryBlobStore


def create_blob_store(settings: Optional[StorageSettings] = None) -> BlobStoreInterface:
    """
    Build the configured blob store.

    Args:
        settings: Storage settings. Loaded from the environment if None.
    """
    settings = settings or get_settings().storage
    if settings.backend == "memory":
        return InMemoryBlobStore(quota_bytes=settings.quota_bytes)
    return JsonFileBlobStore(settings.path)
