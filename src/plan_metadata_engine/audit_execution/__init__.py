"""Audit execution domain exports."""

from .audit_contracts import AuditArtifacts, AuditOutcome, AuditRequest
from .metadata_audit_use_case import (
    AuditExecutionError,
    collect_legacy_entries,
    execute_metadata_audit,
)

__all__ = [
    "AuditArtifacts",
    "AuditOutcome",
    "AuditRequest",
    "AuditExecutionError",
    "collect_legacy_entries",
    "execute_metadata_audit",
]
