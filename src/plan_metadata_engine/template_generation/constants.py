"""Shared plan workbook constants."""

from __future__ import annotations

from plan_metadata_engine.plan_records import PLAN_COLUMNS

TEMPLATE_SHEET_NAME = "Plans"
SCHEMA_SHEET_NAME = "Schema"

PLAN_GROUP_LABEL = "Plan"
METADATA_GROUP_LABEL = "Metadata"

TEMPLATE_PLAN_COLUMNS: tuple[str, ...] = PLAN_COLUMNS
FIRST_DATA_ROW = 3
