"""Selection of the input widget used for a field."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from plan_metadata_engine.schema_management.schema_models import FieldDefinition, FieldType

LONG_TEXT_KEYWORDS: tuple[str, ...] = (
    "notes",
    "summary",
    "description",
    "rx_cost_share",
    "service_area",
)


class WidgetKind(str, Enum):
    """Input widgets available to plan forms."""

    TEXT = "text"
    TEXTAREA = "textarea"
    SELECT = "select"
    NUMBER = "number"
    DATE = "date"


def select_widget(
    field: FieldDefinition, long_text_keywords: Sequence[str] = LONG_TEXT_KEYWORDS
) -> WidgetKind:
    """Return the widget kind for a field."""
    if field.type in (FieldType.NUMBER, FieldType.INTEGER):
        return WidgetKind.NUMBER
    if field.type == FieldType.DATE:
        return WidgetKind.DATE
    if field.validation and field.validation.enum:
        return WidgetKind.SELECT
    if is_long_text_field(field, long_text_keywords):
        return WidgetKind.TEXTAREA
    return WidgetKind.TEXT


def is_long_text_field(
    field: FieldDefinition, long_text_keywords: Sequence[str] = LONG_TEXT_KEYWORDS
) -> bool:
    """Return True when the key or label names long free text."""
    key = field.key.lower()
    label = field.label.lower()
    return any(keyword in key or keyword in label for keyword in long_text_keywords)
