"""Form rendering exports."""

from .field_grouping import FieldGroups, group_fields
from .form_layout import (
    FieldControl,
    FormLayout,
    FormMode,
    SectionLayout,
    build_form_layout,
    layout_to_dict,
    legacy_text,
)
from .form_state import PlanFormState, ReadOnlyFormError
from .widget_selection import LONG_TEXT_KEYWORDS, WidgetKind, is_long_text_field, select_widget

__all__ = [
    "FieldControl",
    "FieldGroups",
    "FormLayout",
    "FormMode",
    "LONG_TEXT_KEYWORDS",
    "PlanFormState",
    "ReadOnlyFormError",
    "SectionLayout",
    "WidgetKind",
    "build_form_layout",
    "group_fields",
    "is_long_text_field",
    "layout_to_dict",
    "legacy_text",
    "select_widget",
]
