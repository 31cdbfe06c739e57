"""Audit workbook writer service."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from plan_metadata_engine.characteristic_validation import CharacteristicViolation

from .report_models import (
    AUDIT_INFO_SHEET_NAME,
    LEGACY_FIELDS_SHEET_NAME,
    VIOLATIONS_SHEET_NAME,
    AuditMetadata,
    LegacyFieldEntry,
)

_LEGACY_HEADERS = ("plan_id", "plan_name", "key", "value")
_VIOLATION_HEADERS = ("field_key", "kind", "facet", "message")


def write_audit_workbook(
    output_path: Path | str,
    legacy_entries: Sequence[LegacyFieldEntry],
    violations: Sequence[CharacteristicViolation],
    audit_metadata: AuditMetadata,
    plan_count: int,
) -> Path:
    """Write the audit workbook with legacy fields, schema violations and run info."""
    workbook = Workbook()
    legacy_sheet = workbook.active
    if legacy_sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(legacy_sheet, Worksheet)
    legacy_sheet.title = LEGACY_FIELDS_SHEET_NAME
    _write_table(
        legacy_sheet,
        _LEGACY_HEADERS,
        [(entry.plan_id, entry.plan_name, entry.key, entry.value) for entry in legacy_entries],
    )

    violations_sheet = workbook.create_sheet(VIOLATIONS_SHEET_NAME)
    _write_table(
        violations_sheet,
        _VIOLATION_HEADERS,
        [
            (violation.field_key, violation.kind.value, violation.facet, violation.message)
            for violation in violations
        ],
    )

    _write_audit_info_sheet(
        workbook,
        audit_metadata,
        plan_count=plan_count,
        plans_with_legacy=len({entry.plan_id for entry in legacy_entries}),
        legacy_count=len(legacy_entries),
        violation_count=len(violations),
    )

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_table(sheet, headers: Sequence[str], rows: Sequence[Sequence[object]]) -> None:
    for column_index, header in enumerate(headers, start=1):
        sheet.cell(row=1, column=column_index, value=header)
        sheet.cell(row=1, column=column_index).style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = 30
    for row_index, row in enumerate(rows, start=2):
        for column_index, value in enumerate(row, start=1):
            sheet.cell(row=row_index, column=column_index, value=value)


# pylint: disable=too-many-arguments
def _write_audit_info_sheet(
    workbook,
    audit_metadata: AuditMetadata,
    *,
    plan_count: int,
    plans_with_legacy: int,
    legacy_count: int,
    violation_count: int,
) -> None:
    sheet = workbook.create_sheet(AUDIT_INFO_SHEET_NAME)
    entries = (
        ("run_start", audit_metadata.run_start.isoformat()),
        ("plans_path", str(audit_metadata.plans_path)),
        ("output_path", str(audit_metadata.output_path)),
        ("schema_source", audit_metadata.schema_source),
        ("schema_hash", audit_metadata.schema_hash),
        ("plans", plan_count),
        ("plans_with_legacy_fields", plans_with_legacy),
        ("legacy_fields", legacy_count),
        ("schema_violations", violation_count),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)


# pylint: enable=too-many-arguments
