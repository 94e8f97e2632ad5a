"""
Abstract Blob Storage Interface

DESIGN DECISION: Durable storage is a plain key-value blob store, the same
shape as browser local storage. This allows us to:
1. Use an in-memory store for tests and throwaway sessions
2. Use a JSON file on disk for a desktop session
3. Keep serialization out of the backends entirely

The persistence adapter owns the encoding of collections; a backend only
moves strings in and out under a key.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BlobStoreInterface(ABC):
    """
    Abstract interface for key-value blob storage.

    Any backend must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the blob stored under a key.

        Returns:
            The blob, or None if the key is absent

        Raises:
            StorageUnavailableError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a blob under a key, replacing any previous value.

        Raises:
            QuotaExceededError: If the backend has no room for the value
            StorageUnavailableError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List the stored keys."""
        pass


class PersistenceError(Exception):
    """Base exception for durable storage operations."""
    pass


class StorageUnavailableError(PersistenceError):
    """Storage backend could not be read or written."""
    pass


class QuotaExceededError(PersistenceError):
    """Storage backend has no room for the value."""
    pass


class CorruptBlobError(PersistenceError):
    """A stored blob could not be decoded."""
    pass
