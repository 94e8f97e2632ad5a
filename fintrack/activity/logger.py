"""
Activity Logger

Every significant action in the store and the persistence layer is
written to a structured local log.

The activity logger:
- Is synchronous, like the rest of the core
- Gracefully handles failures (a logging problem never breaks a mutation)
- Writes locally only; no history of changes is stored
"""

import logging
from typing import Optional

import structlog

from fintrack.config import AppSettings, get_settings
from fintrack.models.activity import ActivityEvent, ActivityEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


LOGGER_NAME = "fintrack"


def configure_logging(settings: Optional[AppSettings] = None) -> None:
    """
    Apply the configured level to the stdlib logger behind structlog.

    debug_mode forces DEBUG. When neither this logger nor the root logger
    has a handler, a stderr handler is attached so events are written even
    if the host application configures no logging.
    """
    settings = settings or get_settings().app
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel("DEBUG" if settings.debug_mode else settings.log_level)
    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


class ActivityLogger:
    """
    Central structured logging service for store and persistence events.

    Without an explicit logger, logging is configured from settings and
    every event carries the application environment.
    """

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        if logger is None:
            settings = get_settings().app
            configure_logging(settings)
            logger = structlog.get_logger(LOGGER_NAME).bind(
                environment=settings.app_environment
            )
        self._logger = logger

    def log(self, event: ActivityEvent) -> bool:
        """
        Log an activity event.

        Returns False if the underlying logger failed; never raises.
        """
        log_dict = event.to_log_dict()
        try:
            if event.severity.value == "error":
                self._logger.error("activity_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("activity_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("activity_event", **log_dict)
            else:
                self._logger.info("activity_event", **log_dict)
        except Exception:
            return False
        return True

    def log_store_opened(self, counts: dict[str, int]) -> None:
        """Log store hydration."""
        self.log(ActivityEventBuilder.store_opened(counts))

    def log_store_closed(self, flushed: dict[str, bool]) -> None:
        """Log store teardown and the result of the final flush."""
        self.log(ActivityEventBuilder.store_closed(flushed))

    def log_record_added(self, entity_type: str, entity_id: int, amount: str) -> None:
        self.log(ActivityEventBuilder.record_added(entity_type, entity_id, amount))

    def log_draft_rejected(self, entity_type: str, issues: list[dict]) -> None:
        self.log(ActivityEventBuilder.draft_rejected(entity_type, issues))

    def log_collection_saved(self, key: str, count: int) -> None:
        self.log(ActivityEventBuilder.collection_saved(key, count))

    def log_save_failed(self, key: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.save_failed(key, error_message))

    def log_load_fallback(self, key: str, reason: str) -> None:
        self.log(ActivityEventBuilder.load_fallback(key, reason))
