"""Excel plan template generation service."""

from __future__ import annotations

import logging
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from plan_metadata_engine.schema_management import (
    ParsedSchema,
    SchemaDocument,
    compute_schema_hash,
)

from .constants import (
    METADATA_GROUP_LABEL,
    PLAN_GROUP_LABEL,
    SCHEMA_SHEET_NAME,
    TEMPLATE_PLAN_COLUMNS,
    TEMPLATE_SHEET_NAME,
)

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())


def generate_plan_template(
    schema: ParsedSchema,
    schema_document: SchemaDocument,
    output_path: Path | str,
) -> Path:
    """Create the Excel workbook used to bulk-enter plans and their metadata."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = TEMPLATE_SHEET_NAME

    field_columns = [field.key for field in schema.fields]
    all_columns = list(TEMPLATE_PLAN_COLUMNS + tuple(field_columns))

    _write_group_headers(sheet, len(TEMPLATE_PLAN_COLUMNS), len(field_columns))
    for column_index, name in enumerate(all_columns, start=1):
        sheet.cell(row=2, column=column_index, value=name)
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )
    sheet.freeze_panes = "B3"

    _write_schema_sheet(workbook, schema_document, len(field_columns))

    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(destination)
    _LOGGER.info(
        "Wrote plan template with %d metadata columns to %s", len(field_columns), destination
    )
    return destination.resolve()


def _write_group_headers(sheet, plan_count: int, metadata_count: int) -> None:
    groups = [
        (PLAN_GROUP_LABEL, 1, plan_count),
        (METADATA_GROUP_LABEL, plan_count + 1, metadata_count),
    ]
    for label, start_column, count in groups:
        if count <= 0:
            continue
        end_column = start_column + count - 1
        start_letter = get_column_letter(start_column)
        end_letter = get_column_letter(end_column)
        sheet.merge_cells(f"{start_letter}1:{end_letter}1")
        sheet[f"{start_letter}1"].value = label
        sheet[f"{start_letter}1"].style = "Headline 1"


def _write_schema_sheet(
    workbook: Workbook, schema_document: SchemaDocument, field_count: int
) -> None:
    sheet = workbook.create_sheet(SCHEMA_SHEET_NAME)
    entries = [
        ("schema_hash", compute_schema_hash(schema_document)),
        ("field_count", field_count),
    ]
    for row_index, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row_index, column=1, value=key)
        sheet.cell(row=row_index, column=2, value=value)
