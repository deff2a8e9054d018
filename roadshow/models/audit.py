"""
Audit Models for Roadshow Savings Tracker

Every change to the show list, and every storage problem, is recorded as
an audit event. This provides:
1. A readable activity history for the user
2. Debugging information when storage misbehaves
3. A record of failed saves that were never made durable

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from roadshow.models.show import utc_now


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Show lifecycle
    SHOW_CREATED = "show_created"
    SHOW_UPDATED = "show_updated"
    SHOW_DELETED = "show_deleted"

    # Persistence
    SHOWS_LOADED = "shows_loaded"
    LOAD_FAILED = "load_failed"
    SAVE_SUCCEEDED = "save_succeeded"
    SAVE_FAILED = "save_failed"

    # User acknowledgements
    ERROR_DISMISSED = "error_dismissed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the activity trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'show', 'storage')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    # User action tracking
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.show_created(show_id, "Chicago")
        event = AuditEventBuilder.save_failed(key, "quota exceeded", 3)
    """

    @staticmethod
    def show_created(show_id: UUID, destination: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SHOW_CREATED,
            entity_type="show",
            entity_id=show_id,
            description=f"Show added: {destination}",
            details={"destination": destination},
            is_user_action=True,
        )

    @staticmethod
    def show_updated(show_id: UUID, destination: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SHOW_UPDATED,
            entity_type="show",
            entity_id=show_id,
            description=f"Show updated: {destination}",
            details={"destination": destination},
            is_user_action=True,
        )

    @staticmethod
    def show_deleted(show_id: UUID, destination: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SHOW_DELETED,
            entity_type="show",
            entity_id=show_id,
            description=f"Show deleted: {destination}",
            details={"destination": destination},
            is_user_action=True,
        )

    @staticmethod
    def shows_loaded(key: str, show_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SHOWS_LOADED,
            entity_type="storage",
            description=f"Loaded {show_count} shows",
            details={"key": key, "show_count": show_count},
        )

    @staticmethod
    def load_failed(
        key: str,
        error_message: str,
        backup_key: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="storage",
            description="Stored shows could not be read; starting with an empty list",
            details={"key": key, "backup_key": backup_key},
            error_message=error_message,
        )

    @staticmethod
    def save_succeeded(key: str, show_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_SUCCEEDED,
            severity=AuditSeverity.DEBUG,
            entity_type="storage",
            description=f"Saved {show_count} shows",
            details={"key": key, "show_count": show_count},
        )

    @staticmethod
    def save_failed(key: str, error_message: str, show_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="storage",
            description="Shows could not be saved; changes are only in memory",
            details={"key": key, "show_count": show_count},
            error_message=error_message,
        )

    @staticmethod
    def error_dismissed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ERROR_DISMISSED,
            description="User dismissed an error message",
            error_message=error_message,
            is_user_action=True,
        )
