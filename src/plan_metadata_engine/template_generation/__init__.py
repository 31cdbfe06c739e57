"""Template generation exports."""

from .constants import (
    FIRST_DATA_ROW,
    METADATA_GROUP_LABEL,
    PLAN_GROUP_LABEL,
    SCHEMA_SHEET_NAME,
    TEMPLATE_PLAN_COLUMNS,
    TEMPLATE_SHEET_NAME,
)
from .plan_template_builder import generate_plan_template

__all__ = [
    "FIRST_DATA_ROW",
    "METADATA_GROUP_LABEL",
    "PLAN_GROUP_LABEL",
    "SCHEMA_SHEET_NAME",
    "TEMPLATE_PLAN_COLUMNS",
    "TEMPLATE_SHEET_NAME",
    "generate_plan_template",
]
