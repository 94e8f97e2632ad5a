"""
JSON File Blob Storage

DESIGN DECISION: All blobs live in a single JSON document on disk,
mirroring how browser local storage keeps one map per origin:
1. No database setup required
2. The file is human-readable
3. Easy to back up or delete to reset a session

TRADEOFFS:
- The whole document is rewritten on every save (fine for personal use)
- No locking across processes (one session writes at a time)

Writes go to a temporary sibling file that then replaces the original, so a
crash mid-write leaves the previous document intact.
"""

import json
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

from fintrack.services.storage.interface import (
    BlobStoreInterface,
    CorruptBlobError,
    StorageUnavailableError,
)


class JsonFileBlobStore(BlobStoreInterface):
    """
    Blob store backed by one JSON object of {key: blob} on disk.

    A missing file is an empty store. A file that is not a JSON object of
    strings raises CorruptBlobError on read.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict[str, str]:
        """Load the whole document from disk."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageUnavailableError(f"Failed to read {self._path}: {e}")

        if not text.strip():
            return {}

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptBlobError(f"Storage file {self._path} is not valid JSON: {e}")

        if not isinstance(document, dict) or not all(
            isinstance(v, str) for v in document.values()
        ):
            raise CorruptBlobError(
                f"Storage file {self._path} is not a map of string blobs"
            )
        return document

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write_document(self, document: dict[str, str]) -> None:
        """Atomically replace the document on disk."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _save(self, document: dict[str, str]) -> None:
        try:
            self._write_document(document)
        except OSError as e:
            raise StorageUnavailableError(f"Failed to write {self._path}: {e}")

    def get(self, key: str) -> Optional[str]:
        return self._read_document().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            document = self._read_document()
        except CorruptBlobError:
            # Unreadable document: the next write starts it over
            document = {}
        document[key] = value
        self._save(document)

    def remove(self, key: str) -> bool:
        document = self._read_document()
        if key not in document:
            return False
        del document[key]
        self._save(document)
        return True

    def keys(self) -> list[str]:
        return list(self._read_document())
