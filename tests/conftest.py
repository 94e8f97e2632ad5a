"""Shared fixtures for the Fintrack test suite."""

import pytest

from fintrack.persistence import PersistenceAdapter
from fintrack.services.storage import InMemoryBlobStore
from fintrack.store import IdentifierSequence, RecordStore


class RecordingLogger:
    """Stands in for a structlog logger and remembers every call."""

    def __init__(self):
        self.calls: list[tuple[str, str, dict]] = []

    def _record(self, level, event, **kw):
        self.calls.append((level, event, kw))

    def debug(self, event, **kw):
        self._record("debug", event, **kw)

    def info(self, event, **kw):
        self._record("info", event, **kw)

    def warning(self, event, **kw):
        self._record("warning", event, **kw)

    def error(self, event, **kw):
        self._record("error", event, **kw)

    def event_types(self) -> list[str]:
        return [kw["event_type"] for _, _, kw in self.calls]


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def activity_logger(recording_logger):
    from fintrack.activity import ActivityLogger

    return ActivityLogger(logger=recording_logger)


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def adapter(blob_store, activity_logger):
    return PersistenceAdapter(blob_store, activity_logger=activity_logger)


@pytest.fixture
def store(adapter, activity_logger):
    """An empty store whose clock is frozen at 1000 ms."""
    return RecordStore(
        adapter,
        id_sequence=IdentifierSequence(clock=lambda: 1000),
        activity_logger=activity_logger,
    )
