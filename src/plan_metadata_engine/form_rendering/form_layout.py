"""Presentation-neutral layout of the plan metadata form."""

from __future__ import annotations

import json
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from plan_metadata_engine.metadata_access import PlanMetadata, get_legacy_fields
from plan_metadata_engine.schema_management.field_values import normalize_date_value
from plan_metadata_engine.schema_management.schema_models import (
    UNCATEGORIZED_SECTION,
    FieldDefinition,
    FieldType,
    ParsedSchema,
    SectionDefinition,
)

from .field_grouping import group_fields
from .widget_selection import LONG_TEXT_KEYWORDS, WidgetKind, select_widget

UNCATEGORIZED_TITLE = "Uncategorized"
LEGACY_GROUP_TITLE = "Legacy Fields"


class FormMode(str, Enum):
    """Form rendering modes; `compare` is read-only."""

    CREATE = "create"
    EDIT = "edit"
    COMPARE = "compare"

    @property
    def read_only(self) -> bool:
        """Return True when fields cannot be edited."""
        return self is FormMode.COMPARE


@dataclass(frozen=True)
class FieldControl:  # pylint: disable=too-many-instance-attributes
    """One rendered input."""

    key: str
    label: str
    widget: WidgetKind
    value: Any
    read_only: bool
    description: str = ""
    options: tuple[str, ...] = ()
    minimum: float | None = None
    maximum: float | None = None
    variants: tuple[FieldControl, ...] = ()


@dataclass(frozen=True)
class SectionLayout:
    """Controls of one section; variants are nested under their base control."""

    key: str
    title: str
    description: str
    controls: tuple[FieldControl, ...]
    orphan_variants: tuple[FieldControl, ...]


@dataclass(frozen=True)
class FormLayout:
    """Complete form: schema sections plus the legacy field group."""

    mode: FormMode
    sections: tuple[SectionLayout, ...]
    legacy_fields: tuple[FieldControl, ...]


# pylint: disable=too-many-arguments
def build_form_layout(
    schema: ParsedSchema,
    metadata: PlanMetadata | Mapping[str, Any] | None,
    mode: FormMode | str = FormMode.EDIT,
    *,
    sections: Collection[str] | None = None,
    fields: Collection[str] | None = None,
    long_text_keywords: Sequence[str] = LONG_TEXT_KEYWORDS,
) -> FormLayout:
    """Lay out the metadata form for one plan.

    `sections` and `fields` restrict the rendered working set by key, the way a
    partial form would; variants whose base is filtered out become orphans.
    """
    form_mode = FormMode(mode)
    record = PlanMetadata.from_raw(metadata)
    read_only = form_mode.read_only

    section_layouts: list[SectionLayout] = []
    for section in _sections_in_order(schema):
        if sections is not None and section.key not in sections:
            continue
        working_set = [
            field
            for field in schema.fields_by_section.get(section.key, ())
            if fields is None or field.key in fields
        ]
        if not working_set:
            continue
        groups = group_fields(working_set)

        def control(field: FieldDefinition, nested: Sequence[FieldDefinition] = ()) -> FieldControl:
            return _field_control(field, record, read_only, long_text_keywords, nested)

        section_layouts.append(
            SectionLayout(
                key=section.key,
                title=section.title,
                description=section.description,
                controls=tuple(
                    control(field, groups.variants_by_base.get(field.key, ()))
                    for field in groups.base_fields
                ),
                orphan_variants=tuple(control(field) for field in groups.orphan_variants),
            )
        )

    legacy_controls = tuple(
        FieldControl(
            key=key,
            label=key,
            widget=WidgetKind.TEXT,
            value=legacy_text(value),
            read_only=read_only,
        )
        for key, value in get_legacy_fields(record, schema).items()
    )
    return FormLayout(
        mode=form_mode,
        sections=tuple(section_layouts),
        legacy_fields=legacy_controls,
    )


# pylint: enable=too-many-arguments


def control_value(field: FieldDefinition, value: Any) -> Any:
    """Return the value an input shows for a stored value."""
    if value is None:
        return ""
    if field.type == FieldType.DATE:
        return normalize_date_value(value)
    return value


def legacy_text(value: Any) -> str:
    """Render any stored value as editable plain text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping | list | tuple):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def layout_to_dict(layout: FormLayout) -> dict[str, Any]:
    """Return a JSON-serializable view of a form layout."""
    return {
        "mode": layout.mode.value,
        "sections": [
            {
                "key": section.key,
                "title": section.title,
                "description": section.description,
                "controls": [_control_to_dict(control) for control in section.controls],
                "orphan_variants": [
                    _control_to_dict(control) for control in section.orphan_variants
                ],
            }
            for section in layout.sections
        ],
        "legacy_fields": {
            "title": LEGACY_GROUP_TITLE,
            "controls": [_control_to_dict(control) for control in layout.legacy_fields],
        },
    }


def _sections_in_order(schema: ParsedSchema) -> list[SectionDefinition]:
    ordered = list(schema.sections)
    declared = {section.key for section in ordered}
    if UNCATEGORIZED_SECTION in schema.fields_by_section and UNCATEGORIZED_SECTION not in declared:
        ordered.append(
            SectionDefinition(
                key=UNCATEGORIZED_SECTION,
                title=UNCATEGORIZED_TITLE,
                description="",
                order=float("inf"),
            )
        )
    return ordered


def _field_control(
    field: FieldDefinition,
    record: PlanMetadata,
    read_only: bool,
    long_text_keywords: Sequence[str],
    variants: Sequence[FieldDefinition] = (),
) -> FieldControl:
    validation = field.validation
    widget = select_widget(field, long_text_keywords)
    return FieldControl(
        key=field.key,
        label=field.label,
        widget=widget,
        value=control_value(field, record.value(field.key)),
        read_only=read_only,
        description=field.description,
        options=validation.enum if validation and validation.enum else (),
        minimum=validation.minimum if validation and widget == WidgetKind.NUMBER else None,
        maximum=validation.maximum if validation and widget == WidgetKind.NUMBER else None,
        variants=tuple(
            _field_control(variant, record, read_only, long_text_keywords) for variant in variants
        ),
    )


def _control_to_dict(control: FieldControl) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "key": control.key,
        "label": control.label,
        "widget": control.widget.value,
        "value": control.value,
        "read_only": control.read_only,
    }
    if control.description:
        payload["description"] = control.description
    if control.options:
        payload["options"] = list(control.options)
    if control.minimum is not None:
        payload["minimum"] = control.minimum
    if control.maximum is not None:
        payload["maximum"] = control.maximum
    if control.variants:
        payload["variants"] = [_control_to_dict(variant) for variant in control.variants]
    return payload
