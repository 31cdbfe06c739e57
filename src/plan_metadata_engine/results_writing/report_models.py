"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

LEGACY_FIELDS_SHEET_NAME = "LegacyFields"
VIOLATIONS_SHEET_NAME = "SchemaViolations"
AUDIT_INFO_SHEET_NAME = "AuditInfo"


@dataclass(frozen=True)
class AuditMetadata:
    """Metadata rendered into the AuditInfo sheet."""

    run_start: datetime
    plans_path: Path
    output_path: Path
    schema_source: str
    schema_hash: str


@dataclass(frozen=True)
class LegacyFieldEntry:
    """One legacy metadata entry found on a plan."""

    plan_id: str
    plan_name: str
    key: str
    value: str
