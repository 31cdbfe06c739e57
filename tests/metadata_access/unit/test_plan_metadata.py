"""Plan metadata accessor tests."""

from __future__ import annotations

from plan_metadata_engine.metadata_access import PlanMetadata, build_metadata, get_legacy_fields
from plan_metadata_engine.schema_management import ParsedSchema, parse_schema


def _schema() -> ParsedSchema:
    return parse_schema(
        {
            "sections": {"financials": {"title": "Financials"}},
            "properties": {
                "premium_monthly": {"type": "number", "section": "financials"},
                "dental_benefit_yearly": {"type": "number", "section": "financials"},
            },
        }
    )


def test_legacy_fields_are_exactly_the_undeclared_keys() -> None:
    metadata = {"premium_monthly": 42, "custom_note": "x"}

    assert get_legacy_fields(metadata, _schema()) == {"custom_note": "x"}


def test_legacy_fields_keep_every_undeclared_key_and_value() -> None:
    metadata = PlanMetadata(
        {
            "old_rate": 1.5,
            "premium_monthly": 10,
            "nested": {"a": [1, 2]},
            "dental_benefit_yearly": None,
            "flag": False,
        }
    )

    legacy = get_legacy_fields(metadata, _schema())

    assert legacy == {"old_rate": 1.5, "nested": {"a": [1, 2]}, "flag": False}
    assert list(legacy) == ["old_rate", "nested", "flag"]


def test_legacy_fields_of_missing_or_invalid_metadata_are_empty() -> None:
    assert get_legacy_fields(None, _schema()) == {}
    assert get_legacy_fields(["not", "a", "mapping"], _schema()) == {}


def test_typed_getters() -> None:
    metadata = PlanMetadata(
        {"premium_monthly": "12.50", "notes": "hello", "effective_start": "2026-01-01T00:00:00"}
    )

    assert metadata.number("premium_monthly") == 12.5
    assert metadata.string("notes") == "hello"
    assert metadata.string("premium_monthly") == "12.50"
    assert metadata.number("notes") is None
    assert metadata.date("effective_start") == "2026-01-01"
    assert metadata.date("notes") is None
    assert metadata.value("missing") is None


def test_metadata_is_not_mutated_through_copies() -> None:
    source = {"premium_monthly": 10}
    metadata = PlanMetadata(source)

    copy = metadata.to_dict()
    copy["premium_monthly"] = 99
    source["premium_monthly"] = 50

    assert metadata.value("premium_monthly") == 10


def test_from_raw_accepts_accessor_and_rejects_non_mappings() -> None:
    metadata = PlanMetadata({"a": 1})

    assert PlanMetadata.from_raw(metadata) is metadata
    assert len(PlanMetadata.from_raw("text")) == 0
    assert PlanMetadata.from_raw({"a": 1}) == metadata


def test_build_metadata_keeps_declared_non_empty_values() -> None:
    metadata = build_metadata(
        {"premium_monthly": 0, "dental_benefit_yearly": "", "undeclared": 5},
        _schema(),
    )

    assert metadata.to_dict() == {"premium_monthly": 0}
