"""Plan workbook ingestion and validation service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from plan_metadata_engine.notification_log import MessageLog, MessageType
from plan_metadata_engine.plan_records import PlanRecord, PlanRecordError, plan_from_mapping
from plan_metadata_engine.schema_management import (
    FieldDefinition,
    FieldType,
    ParsedSchema,
    normalize_date_value,
    validate_field_value,
)
from plan_metadata_engine.template_generation import (
    FIRST_DATA_ROW,
    METADATA_GROUP_LABEL,
    PLAN_GROUP_LABEL,
    TEMPLATE_PLAN_COLUMNS,
    TEMPLATE_SHEET_NAME,
)

from .plan_workbook_models import PlanWorkbookReadResult

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())

_EMPTY_MARKERS = ("", "-")


class TemplateValidationError(Exception):
    """Raised when a plan workbook is invalid."""


def read_plan_workbook(
    workbook_path: Path | str,
    schema: ParsedSchema,
    message_log: MessageLog | None = None,
) -> PlanWorkbookReadResult:
    """Read a filled plan workbook and return normalized plans."""
    path = Path(workbook_path)
    if not path.exists():
        raise TemplateValidationError(f"Plan workbook not found: {path}")

    workbook = load_workbook(path, data_only=True)
    sheet = (
        workbook[TEMPLATE_SHEET_NAME]
        if TEMPLATE_SHEET_NAME in workbook.sheetnames
        else workbook.active
    )
    if sheet is None:
        raise TemplateValidationError("Plan workbook has no active sheet.")
    assert isinstance(sheet, Worksheet)

    _validate_group_headers(sheet)
    plan_headers = [
        sheet.cell(row=2, column=index + 1).value for index in range(len(TEMPLATE_PLAN_COLUMNS))
    ]
    if plan_headers != list(TEMPLATE_PLAN_COLUMNS):
        raise TemplateValidationError("Plan columns do not match the plan template.")
    metadata_columns = _read_metadata_columns(sheet)

    legacy_columns = tuple(key for key in metadata_columns if schema.get_field(key) is None)
    if legacy_columns and message_log is not None:
        message_log.add_message(
            f"Importing {len(legacy_columns)} columns not declared in the schema as legacy fields",
            MessageType.WARNING,
            "plan_import",
            {"columns": list(legacy_columns)},
        )

    plans = _parse_rows(sheet, metadata_columns, schema)
    _LOGGER.info("Read %d plans from %s", len(plans), path)
    if message_log is not None:
        message_log.add_message(
            f"Read {len(plans)} plans from {path.name}",
            MessageType.SUCCESS,
            "plan_import",
            {"plans": len(plans)},
        )
    return PlanWorkbookReadResult(plans=tuple(plans), legacy_columns=legacy_columns)


def _validate_group_headers(sheet) -> None:
    plan_label = sheet.cell(row=1, column=1).value
    metadata_label = sheet.cell(row=1, column=len(TEMPLATE_PLAN_COLUMNS) + 1).value
    if plan_label != PLAN_GROUP_LABEL or metadata_label != METADATA_GROUP_LABEL:
        raise TemplateValidationError("Plan workbook missing required group headers.")


def _read_metadata_columns(sheet) -> dict[str, int]:
    columns: dict[str, int] = {}
    for column in range(len(TEMPLATE_PLAN_COLUMNS) + 1, sheet.max_column + 1):
        header = _optional_string(sheet.cell(row=2, column=column).value)
        if not header:
            continue
        if header in columns:
            raise TemplateValidationError(f"Duplicate metadata column '{header}'.")
        columns[header] = column
    return columns


def _parse_rows(
    sheet, metadata_columns: Mapping[str, int], schema: ParsedSchema
) -> list[PlanRecord]:
    plans: list[PlanRecord] = []
    seen_ids: dict[str, int] = {}
    for row_idx in range(FIRST_DATA_ROW, sheet.max_row + 1):
        plan_values = {
            name: sheet.cell(row=row_idx, column=index).value
            for index, name in enumerate(TEMPLATE_PLAN_COLUMNS, start=1)
        }
        metadata_values = {
            key: sheet.cell(row=row_idx, column=column).value
            for key, column in metadata_columns.items()
        }
        if _row_is_empty(plan_values) and _row_is_empty(metadata_values):
            continue
        plan = _build_plan(row_idx, plan_values, metadata_values, schema)
        previous = seen_ids.get(plan.plan_id)
        if previous:
            raise TemplateValidationError(
                f"Duplicate plan id '{plan.plan_id}' detected for rows {previous} and {row_idx}."
            )
        seen_ids[plan.plan_id] = row_idx
        plans.append(plan)
    if not plans:
        raise TemplateValidationError("Plan workbook does not contain any plan rows.")
    return plans


def _build_plan(
    row_number: int,
    plan_values: Mapping[str, object],
    metadata_values: Mapping[str, object],
    schema: ParsedSchema,
) -> PlanRecord:
    if _is_empty(plan_values.get("plan_id")):
        raise TemplateValidationError(f"Row {row_number}: column 'plan_id' is required.")
    imported: dict[str, Any] = {}
    for key, raw in metadata_values.items():
        field = schema.get_field(key)
        value = _cell_value(field, raw, row_number, key)
        if value is not None:
            imported[key] = value
    raw_plan: dict[str, Any] = {name: _cell_text(value) for name, value in plan_values.items()}
    raw_plan["metadata"] = imported
    try:
        return plan_from_mapping(raw_plan, row_number)
    except PlanRecordError as exc:
        raise TemplateValidationError(f"Row {row_number}: {exc}") from exc


def _cell_value(field: FieldDefinition | None, raw: object, row_number: int, key: str) -> Any:
    if _is_empty(raw):
        if field is not None:
            _check(field, "", row_number)
        return None
    if field is None:
        return raw.strip() if isinstance(raw, str) else _plain_cell(raw)
    if field.type in (FieldType.NUMBER, FieldType.INTEGER):
        value: Any = _parse_number_cell(raw, row_number, key)
    elif field.type == FieldType.DATE:
        value = normalize_date_value(raw)
        if not value:
            raise TemplateValidationError(
                f"Row {row_number}: column '{key}' must be a date, got {raw!r}."
            )
    else:
        value = _cell_text(raw)
    _check(field, value, row_number)
    return value


def _check(field: FieldDefinition, value: object, row_number: int) -> None:
    message = validate_field_value(field, value)
    if message:
        raise TemplateValidationError(f"Row {row_number}: {message}.")


def _parse_number_cell(raw: object, row_number: int, key: str) -> int | float:
    if isinstance(raw, bool):
        raise TemplateValidationError(f"Row {row_number}: column '{key}' must be a number.")
    if isinstance(raw, int | float):
        number = float(raw)
    else:
        cleaned = str(raw).replace("$", "").replace(",", "").strip()
        try:
            number = float(cleaned)
        except ValueError as exc:
            raise TemplateValidationError(
                f"Row {row_number}: column '{key}' must be a number, got {raw!r}."
            ) from exc
    return int(number) if number.is_integer() else number


def _plain_cell(value: object) -> object:
    if isinstance(value, datetime | date):
        return normalize_date_value(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _row_is_empty(row_data: Mapping[str, object]) -> bool:
    return all(_is_empty(value) for value in row_data.values())


def _cell_text(value: object) -> str:
    plain = _plain_cell(value)
    return _optional_string(plain)


def _optional_string(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _is_empty(value: object) -> bool:
    return _optional_string(value) in _EMPTY_MARKERS

