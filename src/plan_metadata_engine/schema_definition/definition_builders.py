"""Helpers for authoring plan metadata schema documents.

Fields are declared per section in display order, with alternate versions
of a field ("variants") nested under it. `build_schema_document` flattens
that hierarchy into the section/property mappings the parser consumes:
sections are keyed and ordered by position, and every variant becomes a
property of its own carrying `baseKey`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from .characteristic_options import (
    DIRECTION_OPTIONS,
    ELIGIBILITY_OPTIONS,
    FREQUENCY_OPTIONS,
    UNIT_OPTIONS,
)

_SECTION_KEYS_BY_TITLE = {
    "Plan Dates": "dates",
    "Financials": "financials",
    "Deductibles": "deductibles",
    "Annual Limits": "annual_limits",
    "Quarterly Benefits": "quarterly_benefits",
    "Yearly Benefits": "yearly_benefits",
    "Medical Copays": "medical_copays",
    "Additional Benefits": "additional_benefits",
    "Plan Information": "plan_information",
}
_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")
_VALIDATION_KEYS = ("minimum", "maximum", "enum", "required")
_INHERITED_PROPERTY_KEYS = ("type", "format", "section", "validation")


class SchemaDefinitionError(Exception):
    """Raised when a schema declaration uses unsupported values."""


def generate_section_key(title: str) -> str:
    """Return the stable section key for a section title."""
    if title in _SECTION_KEYS_BY_TITLE:
        return _SECTION_KEYS_BY_TITLE[title]
    return _NON_ALPHANUMERIC.sub("_", title.lower()).strip("_")


def build_characteristics(characteristics: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Validate characteristic tokens and drop empty facets."""
    if not characteristics:
        return None
    if not isinstance(characteristics, Mapping):
        raise SchemaDefinitionError(f"Characteristics must be a mapping: {characteristics!r}")
    built: dict[str, Any] = {}
    for name in ("concept", "type", "modifier"):
        if characteristics.get(name):
            built[name] = characteristics[name]

    direction = characteristics.get("direction")
    if direction:
        _require_option(direction, DIRECTION_OPTIONS, "direction")
        built["direction"] = direction
    frequency = characteristics.get("frequency")
    if frequency:
        _require_option(frequency, FREQUENCY_OPTIONS, "frequency")
        built["frequency"] = frequency
    unit = characteristics.get("unit")
    if unit:
        _require_option(unit, UNIT_OPTIONS, "unit")
        built["unit"] = unit

    eligibility = _normalize_eligibility(characteristics.get("eligibility"))
    if eligibility:
        built["eligibility"] = eligibility
    return built or None


def define_variant(
    key: str,
    label: str,
    *,
    description: str | None = None,
    tags: Sequence[str] = (),
    characteristics: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Declare an alternate version of a field."""
    variant: dict[str, Any] = {"key": key, "label": label}
    if description:
        variant["description"] = description
    if tags:
        variant["tags"] = list(tags)
    built = build_characteristics(characteristics)
    if built:
        variant["characteristics"] = built
    return variant


# pylint: disable=too-many-arguments
def define_field(
    key: str,
    field_type: str,
    label: str,
    *,
    description: str | None = None,
    tags: Sequence[str] = (),
    characteristics: Mapping[str, Any] | None = None,
    variants: Sequence[Mapping[str, Any]] = (),
    validation: Mapping[str, Any] | None = None,
    field_format: str | None = None,
) -> dict[str, Any]:
    """Declare a base field and its variants."""
    field: dict[str, Any] = {
        "key": key,
        "type": field_type,
        "label": label,
        "description": description or "",
    }
    if field_format:
        field["format"] = field_format
    if tags:
        field["tags"] = list(tags)
    built = build_characteristics(characteristics)
    if built:
        field["characteristics"] = built
    if variants:
        field["variants"] = [dict(variant) for variant in variants]
    built_validation = _build_validation(validation)
    if built_validation:
        field["validation"] = built_validation
    return field


# pylint: enable=too-many-arguments


def define_section(
    title: str, description: str, properties: Iterable[Mapping[str, Any]]
) -> dict[str, Any]:
    """Declare a section holding fields in display order."""
    return {"title": title, "description": description, "properties": list(properties)}


def build_schema_document(
    sections: Sequence[Mapping[str, Any]], **document_attributes: Any
) -> Mapping[str, Any]:
    """Flatten declared sections into an immutable schema document."""
    flat_sections: dict[str, Any] = {}
    properties: dict[str, Any] = {}
    for order, section in enumerate(sections):
        title = str(section.get("title", ""))
        section_key = generate_section_key(title)
        if section_key in flat_sections:
            raise SchemaDefinitionError(f"Duplicate section key: {section_key}")
        flat_sections[section_key] = {
            "title": title,
            "description": section.get("description") or "",
            "order": order,
        }
        for field in section.get("properties") or ():
            _add_field_properties(field, section_key, properties)

    document = dict(document_attributes)
    document["sections"] = flat_sections
    document["properties"] = properties
    return freeze_document(document)


def compile_authoring_document(root: Mapping[str, Any]) -> Mapping[str, Any]:
    """Compile a hierarchical document (section list with nested variants)."""
    sections = []
    for section in root.get("sections") or ():
        if not isinstance(section, Mapping):
            raise SchemaDefinitionError("Schema sections must be mappings.")
        fields = [_define_authored_field(field) for field in section.get("properties") or ()]
        sections.append(
            define_section(
                str(section.get("title", "")), str(section.get("description") or ""), fields
            )
        )
    attributes = {
        key: value for key, value in root.items() if key not in {"sections", "properties"}
    }
    return build_schema_document(sections, **attributes)


def freeze_document(value: Any) -> Any:
    """Return a deeply read-only copy of a schema document."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze_document(item) for key, item in value.items()})
    if isinstance(value, list | tuple):
        return tuple(freeze_document(item) for item in value)
    return value


def _define_authored_field(field: Any) -> dict[str, Any]:
    if not isinstance(field, Mapping) or not field.get("key"):
        raise SchemaDefinitionError("Schema properties must be mappings with a key.")
    validation = {key: field[key] for key in _VALIDATION_KEYS if key in field}
    if isinstance(field.get("validation"), Mapping):
        validation.update(field["validation"])
    variants = []
    for variant in field.get("variants") or ():
        if not isinstance(variant, Mapping) or not variant.get("key"):
            raise SchemaDefinitionError(f"Variants of {field['key']} must be mappings with a key.")
        variants.append(
            define_variant(
                variant["key"],
                variant.get("label") or variant["key"],
                description=variant.get("description"),
                tags=variant.get("tags") or (),
                characteristics=variant.get("characteristics"),
            )
        )
    return define_field(
        field["key"],
        field.get("type") or "string",
        field.get("label") or field["key"],
        description=field.get("description"),
        tags=field.get("tags") or (),
        characteristics=field.get("characteristics"),
        variants=variants,
        validation=validation,
        field_format=field.get("format"),
    )


def _add_field_properties(
    field: Mapping[str, Any], section_key: str, properties: dict[str, Any]
) -> None:
    base = {
        "type": field.get("type") or "string",
        "label": field.get("label") or field["key"],
        "section": section_key,
        "description": field.get("description") or "",
    }
    for name in ("format", "tags", "characteristics", "validation"):
        if field.get(name):
            base[name] = field[name]
    _register_property(field["key"], base, properties)

    for variant in field.get("variants") or ():
        entry = {name: base[name] for name in _INHERITED_PROPERTY_KEYS if name in base}
        entry["label"] = variant.get("label") or variant["key"]
        entry["description"] = variant.get("description") or ""
        entry["baseKey"] = field["key"]
        for name in ("tags", "characteristics"):
            if variant.get(name):
                entry[name] = variant[name]
        _register_property(variant["key"], entry, properties)


def _register_property(key: str, entry: dict[str, Any], properties: dict[str, Any]) -> None:
    if key in properties:
        raise SchemaDefinitionError(f"Duplicate field key: {key}")
    properties[key] = entry


def _build_validation(validation: Mapping[str, Any] | None) -> dict[str, Any] | None:
    if not validation:
        return None
    built: dict[str, Any] = {}
    for name in ("minimum", "maximum", "required"):
        if validation.get(name) is not None:
            built[name] = validation[name]
    if validation.get("enum"):
        built["enum"] = list(validation["enum"])
    return built or None


def _normalize_eligibility(eligibility: Any) -> str | list[str] | None:
    if not eligibility:
        return None
    if isinstance(eligibility, str):
        _require_option(eligibility, ELIGIBILITY_OPTIONS, "eligibility")
        return eligibility
    if not isinstance(eligibility, Sequence):
        raise SchemaDefinitionError(f"Unsupported eligibility token: {eligibility!r}")
    tokens = list(eligibility)
    for token in tokens:
        _require_option(token, ELIGIBILITY_OPTIONS, "eligibility")
    return tokens or None


def _require_option(value: Any, options: Sequence[str], facet: str) -> None:
    if value not in options:
        raise SchemaDefinitionError(f"Unsupported {facet} token: {value}")
