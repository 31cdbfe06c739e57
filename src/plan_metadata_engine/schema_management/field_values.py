"""Per-field value rules: validation, display formatting, date normalization."""

from __future__ import annotations

import math
import re
from datetime import date, datetime

from .schema_models import FieldDefinition, FieldType

_ISO_DATE_PREFIX = re.compile(r"^\s*(\d{4}-\d{2}-\d{2})(?:[T ].*)?\s*$")


def validate_field_value(field: FieldDefinition, value: object) -> str | None:
    """Return an error message when `value` violates the field's rules."""
    validation = field.validation
    if _is_blank(value):
        if validation and validation.required:
            return f"{field.label} is required"
        return None

    if field.type in (FieldType.NUMBER, FieldType.INTEGER):
        number = parse_number(value)
        if number is None:
            return f"{field.label} must be a valid number"
        if field.type == FieldType.INTEGER and not float(number).is_integer():
            return f"{field.label} must be a whole number"
        if validation and validation.minimum is not None and number < validation.minimum:
            return f"{field.label} must be at least {_display_number(validation.minimum)}"
        if validation and validation.maximum is not None and number > validation.maximum:
            return f"{field.label} must be at most {_display_number(validation.maximum)}"

    if field.type == FieldType.DATE and not normalize_date_value(value):
        return f"{field.label} must be a date in YYYY-MM-DD format"

    if validation and validation.enum and value not in validation.enum:
        return f"{field.label} must be one of: {', '.join(validation.enum)}"
    return None


def format_field_value(field: FieldDefinition, value: object) -> str:
    """Format a stored value for display."""
    if value is None:
        return ""
    if field.type in (FieldType.NUMBER, FieldType.INTEGER) and isinstance(value, int | float):
        if isinstance(value, bool):
            return str(value)
        return _display_number(value)
    if field.type == FieldType.DATE:
        return normalize_date_value(value) or str(value)
    return str(value)


def normalize_date_value(value: object) -> str:
    """Return `value` as a `YYYY-MM-DD` string, or an empty string."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        return ""
    match = _ISO_DATE_PREFIX.match(value)
    if not match:
        return ""
    try:
        return date.fromisoformat(match.group(1)).isoformat()
    except ValueError:
        return ""


def parse_number(value: object) -> float | None:
    """Parse numbers and numeric strings; booleans are not numbers."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return None if isinstance(value, float) and math.isnan(value) else value
    if not isinstance(value, str):
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return None if math.isnan(number) else number


def _display_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
