"""
Audit Logger

DESIGN DECISION: Every change to the show list is logged.
This provides:
1. Traceability of what the user did
2. Debugging capability when storage fails
3. An activity history the UI can show

The audit logger:
- Is synchronous, like everything else in the app
- Has no backend of its own: history lives in memory only
- Keeps a bounded in-memory history of recent events
"""

from collections import deque
from typing import Optional
from uuid import UUID

import structlog

from roadshow.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


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


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory history (for the activity page)
    """

    def __init__(self, history_size: int = 200):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep. 0 keeps none.
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger("roadshow.audit")

    def log(self, event: AuditEvent) -> AuditEvent:
        """
        Log an audit event.

        Always logs locally and records the event in the history.
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        self._history.append(event)
        return event

    def recent_events(self, limit: Optional[int] = None) -> list[AuditEvent]:
        """Most recent events, newest first."""
        events = list(reversed(self._history))
        if limit is not None:
            events = events[:limit]
        return events

    def log_show_created(self, show_id: UUID, destination: str) -> None:
        """Log a new show."""
        self.log(AuditEventBuilder.show_created(show_id, destination))

    def log_show_updated(self, show_id: UUID, destination: str) -> None:
        """Log an edit."""
        self.log(AuditEventBuilder.show_updated(show_id, destination))

    def log_show_deleted(self, show_id: UUID, destination: str) -> None:
        """Log a deletion."""
        self.log(AuditEventBuilder.show_deleted(show_id, destination))

    def log_shows_loaded(self, key: str, show_count: int) -> None:
        self.log(AuditEventBuilder.shows_loaded(key, show_count))

    def log_load_failed(
        self,
        key: str,
        error_message: str,
        backup_key: Optional[str] = None,
    ) -> None:
        """Log unreadable stored data. The app carries on with no shows."""
        self.log(AuditEventBuilder.load_failed(key, error_message, backup_key))

    def log_save_succeeded(self, key: str, show_count: int) -> None:
        self.log(AuditEventBuilder.save_succeeded(key, show_count))

    def log_save_failed(self, key: str, error_message: str, show_count: int) -> None:
        """Log a failed save. In-memory changes are kept."""
        self.log(AuditEventBuilder.save_failed(key, error_message, show_count))

    def log_error_dismissed(self, error_message: str) -> None:
        self.log(AuditEventBuilder.error_dismissed(error_message))
