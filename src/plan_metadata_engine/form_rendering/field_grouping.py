"""Grouping of variant fields under their base fields."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from plan_metadata_engine.schema_management.schema_models import FieldDefinition


@dataclass(frozen=True)
class FieldGroups:
    """Fields of one working set, organized for presentation."""

    base_fields: tuple[FieldDefinition, ...]
    variants_by_base: Mapping[str, tuple[FieldDefinition, ...]]
    orphan_variants: tuple[FieldDefinition, ...]


def group_fields(section_fields: Sequence[FieldDefinition]) -> FieldGroups:
    """Split a working set into base fields, their variants, and orphaned variants."""
    base_fields = tuple(field for field in section_fields if field.base_key is None)
    variants_by_base: dict[str, list[FieldDefinition]] = {field.key: [] for field in base_fields}
    orphan_variants: list[FieldDefinition] = []
    for field in section_fields:
        if field.base_key is None:
            continue
        if field.base_key in variants_by_base:
            variants_by_base[field.base_key].append(field)
        else:
            orphan_variants.append(field)
    return FieldGroups(
        base_fields=base_fields,
        variants_by_base={key: tuple(variants) for key, variants in variants_by_base.items()},
        orphan_variants=tuple(orphan_variants),
    )
