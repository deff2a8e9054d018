"""Audit logging package."""

from roadshow.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
