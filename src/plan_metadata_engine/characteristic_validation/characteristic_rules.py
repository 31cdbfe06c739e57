"""Consistency rules for field characteristics.

These checks guard schema authors, not requests: they run over the static
schema (typically from the test suite or `validate-schema`) and report every
finding instead of stopping at the first one.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence

from plan_metadata_engine.schema_management.schema_models import FieldDefinition, ParsedSchema

from .violations import CharacteristicViolation, ViolationKind

CONCEPT_KEY_EXCEPTIONS: frozenset[str] = frozenset({"coverage_limit"})
CHECKED_VARIANT_FACETS: tuple[str, ...] = ("concept", "direction", "frequency", "type")
ALLOWED_VARIANT_DIFFERENCES: frozenset[str] = frozenset(
    {"eligibility", "modifier", "unit", "frequency"}
)


def validate_concept_naming(
    fields: Iterable[FieldDefinition],
    exceptions: Collection[str] = CONCEPT_KEY_EXCEPTIONS,
) -> tuple[CharacteristicViolation, ...]:
    """Check that every base field's concept appears in its key."""
    violations: list[CharacteristicViolation] = []
    for field in fields:
        if field.base_key is not None or field.characteristics is None:
            continue
        concept = field.characteristics.concept
        if not concept:
            violations.append(
                CharacteristicViolation(
                    field_key=field.key,
                    kind=ViolationKind.MISSING_CONCEPT,
                    message=f"{field.key} is missing a concept",
                    facet="concept",
                )
            )
            continue
        if concept in exceptions:
            continue
        if concept.lower() not in field.key.lower():
            violations.append(
                CharacteristicViolation(
                    field_key=field.key,
                    kind=ViolationKind.CONCEPT_NOT_IN_KEY,
                    message=f"{field.key} should include concept '{concept}'",
                    facet="concept",
                )
            )
    return tuple(violations)


def validate_variant_consistency(
    fields: Sequence[FieldDefinition],
) -> tuple[CharacteristicViolation, ...]:
    """Check that variants reference a base, declare eligibility and keep shared facets."""
    fields_by_key = {field.key: field for field in fields}
    violations: list[CharacteristicViolation] = []
    for variant in fields:
        if variant.base_key is None:
            continue
        base = fields_by_key.get(variant.base_key)
        if base is None:
            violations.append(
                CharacteristicViolation(
                    field_key=variant.key,
                    kind=ViolationKind.MISSING_BASE_FIELD,
                    message=f"Base field {variant.base_key} missing for variant {variant.key}",
                )
            )
        if variant.characteristics is None or not variant.characteristics.declares("eligibility"):
            violations.append(
                CharacteristicViolation(
                    field_key=variant.key,
                    kind=ViolationKind.MISSING_ELIGIBILITY,
                    message=f"Variant {variant.key} must declare eligibility",
                    facet="eligibility",
                )
            )
        if base is not None:
            violations.extend(_facet_mismatches(variant, base))
    return tuple(violations)


def validate_schema_characteristics(
    schema: ParsedSchema,
    concept_key_exceptions: Collection[str] = CONCEPT_KEY_EXCEPTIONS,
) -> tuple[CharacteristicViolation, ...]:
    """Run every characteristic rule over a parsed schema."""
    return validate_concept_naming(
        schema.fields, concept_key_exceptions
    ) + validate_variant_consistency(schema.fields)


def _facet_mismatches(
    variant: FieldDefinition, base: FieldDefinition
) -> list[CharacteristicViolation]:
    if variant.characteristics is None or base.characteristics is None:
        return []
    mismatches: list[CharacteristicViolation] = []
    for facet in CHECKED_VARIANT_FACETS:
        # frequency is both checked and allowed to differ, so it never reports.
        if facet in ALLOWED_VARIANT_DIFFERENCES:
            continue
        if not (variant.characteristics.declares(facet) and base.characteristics.declares(facet)):
            continue
        variant_value = variant.characteristics.facet(facet)
        base_value = base.characteristics.facet(facet)
        if variant_value != base_value:
            mismatches.append(
                CharacteristicViolation(
                    field_key=variant.key,
                    kind=ViolationKind.FACET_MISMATCH,
                    message=(
                        f"Variant {variant.key} should not override '{facet}' "
                        f"({variant_value!r} differs from base {base_value!r})"
                    ),
                    facet=facet,
                )
            )
    return mismatches
