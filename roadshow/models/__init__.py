"""
Data Models Package

This package contains all Pydantic models used in the Roadshow Savings Tracker.
All data flowing through the system must conform to these schemas.
"""

from roadshow.models.show import (
    AggregateTotals,
    Show,
    ShowFields,
    ShowInput,
    ShowMetrics,
    coerce_number,
)
from roadshow.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Show models
    "AggregateTotals",
    "Show",
    "ShowFields",
    "ShowInput",
    "ShowMetrics",
    "coerce_number",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
