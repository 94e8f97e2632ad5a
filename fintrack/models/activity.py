"""
Activity Models for Fintrack

Significant actions (records added, drafts rejected, collections saved or
recovered) are emitted as structured events to the local log.

DESIGN DECISION: These events are NOT persisted. There is no stored
history of changes; the events exist for debugging and operational
visibility only.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityEventType(str, Enum):
    """Types of events we log."""
    # Record store
    STORE_OPENED = "store_opened"
    STORE_CLOSED = "store_closed"
    TRANSACTION_ADDED = "transaction_added"
    INVESTMENT_ADDED = "investment_added"
    GOAL_ADDED = "goal_added"
    DRAFT_REJECTED = "draft_rejected"

    # Persistence
    COLLECTION_SAVED = "collection_saved"
    SAVE_FAILED = "save_failed"
    LOAD_FALLBACK = "load_fallback"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single structured log event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # What entity or collection is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="e.g. 'transaction', 'investment', 'goal', 'collection'"
    )
    entity_id: Optional[int] = None

    description: str = Field(
        ...,
        max_length=500,
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.record_added("transaction", 17, "450.00")
        event = ActivityEventBuilder.save_failed("goals", "quota exceeded")
    """

    _ADDED_TYPES = {
        "transaction": ActivityEventType.TRANSACTION_ADDED,
        "investment": ActivityEventType.INVESTMENT_ADDED,
        "goal": ActivityEventType.GOAL_ADDED,
    }

    @staticmethod
    def store_opened(counts: dict[str, int]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORE_OPENED,
            entity_type="store",
            description="Record store opened",
            details={"counts": counts},
        )

    @staticmethod
    def store_closed(flushed: dict[str, bool]) -> ActivityEvent:
        all_flushed = all(flushed.values())
        return ActivityEvent(
            event_type=ActivityEventType.STORE_CLOSED,
            severity=ActivitySeverity.INFO if all_flushed else ActivitySeverity.WARNING,
            entity_type="store",
            description="Record store closed" if all_flushed
            else "Record store closed with unsaved collections",
            details={"flushed": flushed},
        )

    @classmethod
    def record_added(
        cls,
        entity_type: str,
        entity_id: int,
        amount: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=cls._ADDED_TYPES[entity_type],
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{entity_type.capitalize()} added: {amount}",
            details={"amount": amount},
        )

    @staticmethod
    def draft_rejected(
        entity_type: str,
        issues: list[dict],
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.DRAFT_REJECTED,
            severity=ActivitySeverity.WARNING,
            entity_type=entity_type,
            description=f"{entity_type.capitalize()} draft rejected with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def collection_saved(key: str, count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.COLLECTION_SAVED,
            severity=ActivitySeverity.DEBUG,
            entity_type="collection",
            description=f"Collection saved: {key}",
            details={"key": key, "count": count},
        )

    @staticmethod
    def save_failed(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SAVE_FAILED,
            severity=ActivitySeverity.ERROR,
            entity_type="collection",
            description=f"Failed to save collection: {key}",
            error_message=error_message,
            details={"key": key},
        )

    @staticmethod
    def load_fallback(key: str, reason: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LOAD_FALLBACK,
            severity=ActivitySeverity.WARNING,
            entity_type="collection",
            description=f"Using baseline data for collection: {key}",
            error_message=reason,
            details={"key": key},
        )
