"""Tests for the blob store backends."""

import json
import pytest

from fintrack.config import StorageSettings
from fintrack.services.storage import (
    CorruptBlobError,
    InMemoryBlobStore,
    JsonFileBlobStore,
    QuotaExceededError,
    StorageUnavailableError,
    create_blob_store,
)


class TestInMemoryBlobStore:
    """Tests for the dictionary-backed store."""

    def test_get_set_remove(self):
        store = InMemoryBlobStore()
        assert store.get("goals") is None
        store.set("goals", "[]")
        assert store.get("goals") == "[]"
        assert store.keys() == ["goals"]
        assert store.remove("goals") is True
        assert store.remove("goals") is False

    def test_used_bytes_counts_utf8(self):
        """Accented characters take two bytes."""
        store = InMemoryBlobStore({"k": "ç"})
        assert store.used_bytes() == 3

    def test_quota_refuses_write(self):
        """An oversized write is refused and the old value kept."""
        store = InMemoryBlobStore({"goals": "[]"}, quota_bytes=10)
        with pytest.raises(QuotaExceededError):
            store.set("goals", "[" + "1," * 20 + "1]")
        assert store.get("goals") == "[]"

    def test_quota_replacing_value(self):
        """The replaced value's size does not count against the new one."""
        store = InMemoryBlobStore({"goals": "12345"}, quota_bytes=10)
        store.set("goals", "abcde")
        assert store.get("goals") == "abcde"


class TestJsonFileBlobStore:
    """Tests for the file-backed store."""

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonFileBlobStore(tmp_path / "storage.json")
        assert store.get("transactions") is None
        assert store.keys() == []

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "storage.json"
        JsonFileBlobStore(path).set("goals", '[{"id": 1}]')
        assert JsonFileBlobStore(path).get("goals") == '[{"id": 1}]'

    def test_document_is_readable_json(self, tmp_path):
        path = tmp_path / "storage.json"
        store = JsonFileBlobStore(path)
        store.set("transactions", "[]")
        store.set("goals", "[]")
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "transactions": "[]",
            "goals": "[]",
        }

    def test_blank_file_is_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("  \n", encoding="utf-8")
        assert JsonFileBlobStore(path).keys() == []

    @pytest.mark.parametrize("content", ["{not json", '["a", "b"]', '{"goals": []}'])
    def test_corrupt_document(self, tmp_path, content):
        path = tmp_path / "storage.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(CorruptBlobError):
            JsonFileBlobStore(path).get("goals")

    def test_write_replaces_corrupt_document(self, tmp_path):
        """The next write starts a corrupt document over."""
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonFileBlobStore(path)
        store.set("goals", "[]")
        assert store.get("goals") == "[]"

    def test_remove(self, tmp_path):
        store = JsonFileBlobStore(tmp_path / "storage.json")
        store.set("goals", "[]")
        assert store.remove("goals") is True
        assert store.remove("goals") is False
        assert store.keys() == []

    def test_unreadable_path(self, tmp_path):
        """A directory where the file should be is reported as unavailable."""
        with pytest.raises(StorageUnavailableError):
            JsonFileBlobStore(tmp_path).get("goals")

    def test_no_temp_files_left(self, tmp_path):
        store = JsonFileBlobStore(tmp_path / "storage.json")
        store.set("goals", "[]")
        assert [p.name for p in tmp_path.iterdir()] == ["storage.json"]


class TestFactory:
    """Tests for backend selection."""

    def test_memory_backend(self):
        store = create_blob_store(StorageSettings(backend="memory", quota_bytes=64))
        assert isinstance(store, InMemoryBlobStore)
        with pytest.raises(QuotaExceededError):
            store.set("goals", "x" * 100)

    def test_file_backend(self, tmp_path):
        path = tmp_path / "data.json"
        store = create_blob_store(StorageSettings(backend="file", path=str(path)))
        assert isinstance(store, JsonFileBlobStore)
        assert store.path == path


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
