"""Tests for the structured activity logger."""

import json
import logging

import pytest

from fintrack.activity import ActivityLogger, configure_logging
from fintrack.activity.logger import LOGGER_NAME
from fintrack.config import AppSettings, get_settings
from fintrack.models import ActivityEvent, ActivityEventType, ActivitySeverity


class BrokenLogger:
    """A logger that fails on every call."""

    def _fail(self, *args, **kwargs):
        raise RuntimeError("log sink unavailable")

    debug = info = warning = error = _fail


class TestActivityLogger:
    """Tests for event routing and failure handling."""

    @pytest.mark.parametrize("severity", list(ActivitySeverity))
    def test_routes_by_severity(self, activity_logger, recording_logger, severity):
        event = ActivityEvent(
            event_type=ActivityEventType.COLLECTION_SAVED,
            severity=severity,
            description="Collection saved: goals",
        )
        assert activity_logger.log(event) is True
        level, message, kw = recording_logger.calls[0]
        assert level == severity.value
        assert message == "activity_event"
        assert kw["event_type"] == "collection_saved"

    def test_logger_failure_is_swallowed(self):
        """A broken sink never breaks the caller."""
        logger = ActivityLogger(logger=BrokenLogger())
        event = ActivityEvent(
            event_type=ActivityEventType.GOAL_ADDED,
            description="Goal added",
        )
        assert logger.log(event) is False
        logger.log_record_added("goal", 1, "100")

    def test_helpers(self, activity_logger, recording_logger):
        activity_logger.log_store_opened({"transactions": 7, "investments": 5, "goals": 3})
        activity_logger.log_record_added("investment", 12, "3250")
        activity_logger.log_draft_rejected("goal", [{"field": "target"}])
        activity_logger.log_save_failed("goals", "quota exceeded")
        activity_logger.log_load_fallback("transactions", "corrupt blob")
        activity_logger.log_store_closed({"goals": False})

        assert recording_logger.event_types() == [
            "store_opened",
            "investment_added",
            "draft_rejected",
            "save_failed",
            "load_fallback",
            "store_closed",
        ]
        assert [level for level, _, _ in recording_logger.calls] == [
            "info", "info", "warning", "error", "warning", "warning",
        ]

    def test_default_logger(self):
        """The structlog-backed default accepts events."""
        event = ActivityEvent(
            event_type=ActivityEventType.STORE_OPENED,
            description="Record store opened",
        )
        assert ActivityLogger().log(event) is True


class TestConfigureLogging:
    """Tests for applying logging settings."""

    @pytest.fixture(autouse=True)
    def fresh_settings(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    @staticmethod
    def fintrack_messages(caplog) -> list[dict]:
        return [json.loads(r.getMessage()) for r in caplog.records if r.name == LOGGER_NAME]

    def test_info_events_written(self, monkeypatch, caplog):
        """At INFO, store events reach the log with the environment attached."""
        monkeypatch.setenv("FINTRACK_LOG_LEVEL", "INFO")
        monkeypatch.setenv("FINTRACK_APP_ENVIRONMENT", "test")
        logger = ActivityLogger()
        logger.log_store_opened({"transactions": 7, "investments": 5, "goals": 3})
        logger.log_collection_saved("goals", 3)

        messages = self.fintrack_messages(caplog)
        assert [m["event_type"] for m in messages] == ["store_opened"]
        assert messages[0]["environment"] == "test"
        assert logging.getLogger(LOGGER_NAME).level == logging.INFO

    def test_warning_level_drops_info(self, monkeypatch, caplog):
        monkeypatch.setenv("FINTRACK_LOG_LEVEL", "WARNING")
        logger = ActivityLogger()
        logger.log_store_opened({"goals": 3})
        logger.log_save_failed("goals", "quota exceeded")
        assert [m["event_type"] for m in self.fintrack_messages(caplog)] == ["save_failed"]

    def test_debug_mode_forces_debug(self, monkeypatch, caplog):
        monkeypatch.setenv("FINTRACK_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("FINTRACK_DEBUG_MODE", "true")
        ActivityLogger().log_collection_saved("goals", 3)
        assert [m["event_type"] for m in self.fintrack_messages(caplog)] == ["collection_saved"]

    def test_handler_attached_once_when_unconfigured(self, monkeypatch):
        """Without any logging setup, exactly one handler is added."""
        fintrack_logger = logging.getLogger(LOGGER_NAME)
        monkeypatch.setattr(logging.getLogger(), "handlers", [])
        monkeypatch.setattr(fintrack_logger, "handlers", [])
        configure_logging(AppSettings())
        configure_logging(AppSettings())
        assert len(fintrack_logger.handlers) == 1

    def test_existing_root_handler_is_used(self, monkeypatch):
        fintrack_logger = logging.getLogger(LOGGER_NAME)
        monkeypatch.setattr(logging.getLogger(), "handlers", [logging.NullHandler()])
        monkeypatch.setattr(fintrack_logger, "handlers", [])
        configure_logging(AppSettings())
        assert fintrack_logger.handlers == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
