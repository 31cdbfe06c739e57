"""Field characteristic rule tests."""

from __future__ import annotations

from plan_metadata_engine.characteristic_validation import (
    ViolationKind,
    validate_concept_naming,
    validate_schema_characteristics,
    validate_variant_consistency,
)
from plan_metadata_engine.schema_management import ParsedSchema, parse_schema


def _schema(properties: dict) -> ParsedSchema:
    return parse_schema({"sections": {"s": {"title": "S"}}, "properties": properties})


def _field(characteristics: dict | None = None, **extra) -> dict:
    descriptor = {"type": "number", "section": "s", **extra}
    if characteristics is not None:
        descriptor["characteristics"] = characteristics
    return descriptor


def test_concept_missing_from_key_is_reported() -> None:
    parsed = _schema({"monthly_cost": _field({"concept": "premium"})})

    violations = validate_concept_naming(parsed.fields)

    assert [(item.field_key, item.kind) for item in violations] == [
        ("monthly_cost", ViolationKind.CONCEPT_NOT_IN_KEY)
    ]


def test_concept_match_is_case_insensitive() -> None:
    parsed = _schema({"Premium_Monthly": _field({"concept": "PREMIUM"})})

    assert validate_concept_naming(parsed.fields) == ()


def test_concept_exceptions_and_missing_concepts() -> None:
    parsed = _schema(
        {
            "hospital_inpatient_days": _field({"concept": "coverage_limit"}),
            "giveback_monthly": _field({"direction": "credit"}),
            "notes": _field(),
        }
    )

    violations = validate_concept_naming(parsed.fields)

    assert [(item.field_key, item.kind) for item in violations] == [
        ("giveback_monthly", ViolationKind.MISSING_CONCEPT)
    ]
    assert validate_concept_naming(parsed.fields, exceptions=()) != violations


def test_variant_differing_on_direction_is_reported() -> None:
    parsed = _schema(
        {
            "copay": _field({"concept": "copay", "direction": "outflow", "type": "fixed"}),
            "copay_dual": _field(
                {
                    "concept": "copay",
                    "direction": "inflow",
                    "type": "fixed",
                    "eligibility": "dual-eligible",
                },
                baseKey="copay",
            ),
        }
    )

    violations = validate_variant_consistency(parsed.fields)

    assert len(violations) == 1
    assert violations[0].kind == ViolationKind.FACET_MISMATCH
    assert violations[0].facet == "direction"
    assert violations[0].field_key == "copay_dual"


def test_variant_may_differ_on_eligibility_modifier_unit_and_frequency() -> None:
    parsed = _schema(
        {
            "copay": _field(
                {
                    "concept": "copay",
                    "frequency": "daily",
                    "eligibility": "medicare",
                    "unit": "$",
                }
            ),
            "copay_per_stay": _field(
                {
                    "concept": "copay",
                    "frequency": "per_stay",
                    "eligibility": "qmb",
                    "modifier": "with_assistance",
                    "unit": "%",
                },
                baseKey="copay",
            ),
        }
    )

    assert validate_variant_consistency(parsed.fields) == ()


def test_facets_declared_on_only_one_side_are_not_compared() -> None:
    parsed = _schema(
        {
            "copay": _field({"concept": "copay", "type": "specialist"}),
            "copay_lis": _field({"eligibility": "lis"}, baseKey="copay"),
        }
    )

    assert validate_variant_consistency(parsed.fields) == ()


def test_variant_without_base_or_eligibility_is_reported() -> None:
    parsed = _schema({"copay_lis": _field({"concept": "copay"}, baseKey="copay")})

    kinds = [item.kind for item in validate_variant_consistency(parsed.fields)]

    assert kinds == [ViolationKind.MISSING_BASE_FIELD, ViolationKind.MISSING_ELIGIBILITY]


def test_schema_validation_collects_every_rule() -> None:
    parsed = _schema(
        {
            "monthly_cost": _field({"concept": "premium"}),
            "monthly_cost_lis": _field({"concept": "premium"}, baseKey="monthly_cost"),
        }
    )

    kinds = {item.kind for item in validate_schema_characteristics(parsed)}

    assert kinds == {ViolationKind.CONCEPT_NOT_IN_KEY, ViolationKind.MISSING_ELIGIBILITY}
    assert validate_schema_characteristics(parsed, concept_key_exceptions={"premium"}) != ()
