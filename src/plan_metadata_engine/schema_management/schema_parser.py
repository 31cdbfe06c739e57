"""Schema loading and parsing service."""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from plan_metadata_engine.schema_definition.definition_builders import (
    SchemaDefinitionError,
    compile_authoring_document,
)

from .schema_models import (
    UNCATEGORIZED_SECTION,
    FieldCharacteristics,
    FieldDefinition,
    FieldType,
    FieldValidation,
    ParsedSchema,
    SchemaDocument,
    SectionDefinition,
)

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())

_VALIDATION_KEYS = ("minimum", "maximum", "enum", "required")
_CHARACTERISTIC_KEYS = (
    "concept",
    "direction",
    "frequency",
    "type",
    "eligibility",
    "modifier",
    "unit",
)

PARSE_CACHE_SIZE = 16

_PARSE_CACHE: dict[int, tuple[SchemaDocument, ParsedSchema]] = {}
_PARSE_CACHE_LOCK = threading.Lock()


class SchemaError(Exception):
    """Raised when a schema document cannot be loaded."""


def load_schema_document(schema_path: Path | str) -> SchemaDocument:
    """Read a JSON or YAML schema file into a schema document."""
    path = Path(schema_path)
    if not path.exists():
        raise SchemaError(f"Schema file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaError(f"Unable to read schema file {path}: {exc}") from exc
    return parse_schema_text(text)


def parse_schema_text(text: str) -> SchemaDocument:
    """Parse schema text; hierarchical authoring documents are compiled to flat form."""
    try:
        root = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaError(f"Invalid schema document: {exc}") from exc
    if not isinstance(root, Mapping):
        raise SchemaError("Schema document root must be a mapping.")
    if isinstance(root.get("sections"), list):
        try:
            return compile_authoring_document(root)
        except SchemaDefinitionError as exc:
            raise SchemaError(str(exc)) from exc
    return root


def get_parsed_schema(document: SchemaDocument) -> ParsedSchema:
    """Return the parsed schema, memoized by the identity of `document`.

    At most `PARSE_CACHE_SIZE` documents are retained; the oldest entry is
    evicted first.
    """
    cached = _PARSE_CACHE.get(id(document))
    if cached is not None and cached[0] is document:
        return cached[1]
    parsed = parse_schema(document)
    with _PARSE_CACHE_LOCK:
        cached = _PARSE_CACHE.get(id(document))
        if cached is not None and cached[0] is document:
            return cached[1]
        while len(_PARSE_CACHE) >= PARSE_CACHE_SIZE:
            del _PARSE_CACHE[next(iter(_PARSE_CACHE))]
        # The document is kept alive alongside its result so its id stays unique.
        _PARSE_CACHE[id(document)] = (document, parsed)
    _LOGGER.debug("Parsed schema with %d fields", len(parsed.fields))
    return parsed


def parse_schema(document: SchemaDocument) -> ParsedSchema:
    """Convert a schema document into its indexed representation."""
    sections = _parse_sections(document.get("sections"))
    declared_keys = {section.key for section in sections}

    grouped: dict[str, list[FieldDefinition]] = {section.key: [] for section in sections}
    variants_by_base: dict[str, list[FieldDefinition]] = {}
    properties = document.get("properties")
    if isinstance(properties, Mapping):
        for key, descriptor in properties.items():
            definition = _parse_field(str(key), descriptor, declared_keys)
            grouped.setdefault(definition.section, []).append(definition)
            if definition.base_key:
                variants_by_base.setdefault(definition.base_key, []).append(definition)

    fields_by_section: dict[str, tuple[FieldDefinition, ...]] = {}
    ordered_keys = [section.key for section in sections]
    if UNCATEGORIZED_SECTION in grouped and UNCATEGORIZED_SECTION not in declared_keys:
        ordered_keys.append(UNCATEGORIZED_SECTION)
    for section_key in ordered_keys:
        fields_by_section[section_key] = tuple(sorted(grouped[section_key], key=_label_sort_key))

    fields = tuple(
        definition for section_key in ordered_keys for definition in fields_by_section[section_key]
    )
    return ParsedSchema(
        sections=tuple(sections),
        fields=fields,
        fields_by_section=fields_by_section,
        variants_by_base={key: tuple(variants) for key, variants in variants_by_base.items()},
    )


def compute_schema_hash(document: SchemaDocument) -> str:
    """Return the SHA-256 of the canonical JSON form of a schema document."""
    canonical = json.dumps(
        _to_plain(document), ensure_ascii=False, sort_keys=True, separators=(",", ":")
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def get_fields_for_section(schema: ParsedSchema, section_key: str) -> tuple[FieldDefinition, ...]:
    """Return the fields grouped under `section_key`."""
    return schema.fields_by_section.get(section_key, ())


def get_field_definition(schema: ParsedSchema, field_key: str) -> FieldDefinition | None:
    """Return a field definition by key."""
    return schema.get_field(field_key)


def _parse_sections(value: Any) -> list[SectionDefinition]:
    if not isinstance(value, Mapping):
        return []
    sections: list[SectionDefinition] = []
    for position, (key, descriptor) in enumerate(value.items()):
        descriptor = descriptor if isinstance(descriptor, Mapping) else {}
        order = descriptor.get("order")
        if isinstance(order, bool) or not isinstance(order, int | float):
            order = position
        sections.append(
            SectionDefinition(
                key=str(key),
                title=_text(descriptor.get("title")) or str(key),
                description=_text(descriptor.get("description")),
                order=order,
            )
        )
    # sorted() is stable, so equal orders keep enumeration order.
    return sorted(sections, key=lambda section: section.order)


def _parse_field(key: str, descriptor: Any, declared_sections: set[str]) -> FieldDefinition:
    descriptor = descriptor if isinstance(descriptor, Mapping) else {}
    field_format = descriptor.get("format") if isinstance(descriptor.get("format"), str) else None
    section = descriptor.get("section")
    if not isinstance(section, str) or section not in declared_sections:
        section = UNCATEGORIZED_SECTION
    base_key = descriptor.get("baseKey")
    return FieldDefinition(
        key=key,
        type=_resolve_field_type(descriptor.get("type"), field_format),
        label=_text(descriptor.get("label")) or key,
        section=section,
        description=_text(descriptor.get("description")),
        validation=_extract_validation(descriptor),
        format=field_format,
        characteristics=_extract_characteristics(descriptor.get("characteristics")),
        base_key=base_key if isinstance(base_key, str) and base_key else None,
        tags=_string_tuple(descriptor.get("tags")) or (),
    )


def _resolve_field_type(declared_type: Any, field_format: str | None) -> FieldType:
    if field_format == "date":
        return FieldType.DATE
    if declared_type == "integer":
        return FieldType.INTEGER
    if declared_type == "number":
        return FieldType.NUMBER
    return FieldType.STRING


def _extract_validation(descriptor: Mapping[str, Any]) -> FieldValidation | None:
    values: dict[str, Any] = {key: descriptor[key] for key in _VALIDATION_KEYS if key in descriptor}
    nested = descriptor.get("validation")
    if isinstance(nested, Mapping):
        values.update({key: nested[key] for key in _VALIDATION_KEYS if key in nested})

    minimum = _number(values.get("minimum"))
    maximum = _number(values.get("maximum"))
    enum = _string_tuple(values.get("enum"))
    required = values.get("required")
    required = required if isinstance(required, bool) else None
    if minimum is None and maximum is None and not enum and required is None:
        return None
    return FieldValidation(minimum=minimum, maximum=maximum, enum=enum or None, required=required)


def _extract_characteristics(value: Any) -> FieldCharacteristics | None:
    if not isinstance(value, Mapping):
        return None
    facets: dict[str, Any] = {}
    for name in _CHARACTERISTIC_KEYS:
        raw = value.get(name)
        if name == "eligibility" and isinstance(raw, Sequence) and not isinstance(raw, str):
            tokens = _string_tuple(raw)
            if tokens:
                facets[name] = tokens
        elif isinstance(raw, str) and raw:
            facets[name] = raw
    if not facets:
        return None
    return FieldCharacteristics(**facets)


def _label_sort_key(definition: FieldDefinition) -> tuple[str, str]:
    return definition.label.casefold(), definition.label


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


def _string_tuple(value: Any) -> tuple[str, ...] | None:
    if not isinstance(value, Sequence) or isinstance(value, str):
        return None
    return tuple(str(item) for item in value)


def _to_plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _to_plain(item) for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        return [_to_plain(item) for item in value]
    return value


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""
