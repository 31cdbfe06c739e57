"""Results writing domain exports."""

from .audit_report_writer import write_audit_workbook
from .report_models import (
    AUDIT_INFO_SHEET_NAME,
    LEGACY_FIELDS_SHEET_NAME,
    VIOLATIONS_SHEET_NAME,
    AuditMetadata,
    LegacyFieldEntry,
)

__all__ = [
    "AUDIT_INFO_SHEET_NAME",
    "LEGACY_FIELDS_SHEET_NAME",
    "VIOLATIONS_SHEET_NAME",
    "AuditMetadata",
    "LegacyFieldEntry",
    "write_audit_workbook",
]
