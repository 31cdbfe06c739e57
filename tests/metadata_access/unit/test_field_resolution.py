"""Eligibility-aware value resolution tests."""

from __future__ import annotations

from plan_metadata_engine.metadata_access import (
    EligibilityContext,
    ResolutionSource,
    resolve_metadata_value,
    resolve_value_range,
)
from plan_metadata_engine.schema_definition import PLANS_METADATA_SCHEMA
from plan_metadata_engine.schema_management import ParsedSchema, get_parsed_schema


def _schema() -> ParsedSchema:
    return get_parsed_schema(PLANS_METADATA_SCHEMA)


def test_base_value_is_used_without_eligibility() -> None:
    metadata = {"premium_monthly": 30, "premium_monthly_with_extra_help": 0}

    result = resolve_metadata_value(metadata, "premium_monthly", _schema())

    assert result.source == ResolutionSource.BASE
    assert result.key == "premium_monthly"
    assert result.value == 30


def test_matching_variant_wins_over_base() -> None:
    metadata = {"premium_monthly": 30, "premium_monthly_with_extra_help": 0}

    result = resolve_metadata_value(
        metadata, "premium_monthly", _schema(), EligibilityContext("LIS")
    )

    assert result.source == ResolutionSource.VARIANT
    assert result.key == "premium_monthly_with_extra_help"
    assert result.value == 0


def test_first_matching_variant_in_declaration_order_wins() -> None:
    metadata = {
        "premium_monthly": 30,
        "premium_monthly_with_extra_help": 5,
        "premium_monthly_medicaid_qmb": 1,
    }

    result = resolve_metadata_value(
        metadata, "premium_monthly", _schema(), EligibilityContext(["qmb", "lis"])
    )

    assert result.key == "premium_monthly_with_extra_help"


def test_variant_eligibility_lists_match_any_token() -> None:
    metadata = {"ambulance_copay": 250, "ambulance_with_assistance_copay": 0}

    result = resolve_metadata_value(
        metadata, "ambulance_copay", _schema(), EligibilityContext("qdwi")
    )

    assert result.key == "ambulance_with_assistance_copay"


def test_empty_variant_falls_back_to_base() -> None:
    metadata = {"premium_monthly": 30, "premium_monthly_with_extra_help": " "}

    result = resolve_metadata_value(
        metadata, "premium_monthly", _schema(), EligibilityContext("lis")
    )

    assert result.source == ResolutionSource.BASE
    assert result.value == 30


def test_variant_key_falls_back_to_its_base() -> None:
    result = resolve_metadata_value(
        {"premium_monthly": 30}, "premium_monthly_with_extra_help", _schema()
    )

    assert result.source == ResolutionSource.BASE
    assert result.key == "premium_monthly"


def test_missing_and_unknown_keys_resolve_to_missing() -> None:
    assert (
        resolve_metadata_value({}, "premium_monthly", _schema()).source
        == ResolutionSource.MISSING
    )
    unknown = resolve_metadata_value({"custom": 1}, "custom", _schema())
    assert unknown.source == ResolutionSource.MISSING
    assert unknown.value is None


def test_value_range_uses_lowest_variant_and_base() -> None:
    metadata = {
        "premium_monthly": 30,
        "premium_monthly_with_extra_help": "12",
        "premium_monthly_medicaid_qmb": 4,
    }

    value_range = resolve_value_range(metadata, "premium_monthly", _schema())

    assert value_range.minimum == 4
    assert value_range.maximum == 30


def test_value_range_minimum_defaults_to_zero() -> None:
    value_range = resolve_value_range({"moop_annual": 5000}, "moop_annual", _schema())

    assert value_range.minimum == 0
    assert value_range.maximum == 5000
