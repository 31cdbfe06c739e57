"""Field value rule tests."""

from __future__ import annotations

from datetime import date, datetime

import pytest
from plan_metadata_engine.schema_management import (
    FieldDefinition,
    FieldType,
    FieldValidation,
    format_field_value,
    normalize_date_value,
    parse_number,
    validate_field_value,
)


def _field(field_type: FieldType = FieldType.NUMBER, **validation) -> FieldDefinition:
    return FieldDefinition(
        key="premium_monthly",
        type=field_type,
        label="Premium",
        section="financials",
        validation=FieldValidation(**validation) if validation else None,
    )


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (date(2026, 1, 15), "2026-01-15"),
        (datetime(2026, 1, 15, 13, 45), "2026-01-15"),
        ("2026-01-15", "2026-01-15"),
        ("2026-01-15T08:30:00Z", "2026-01-15"),
        ("2026-02-30", ""),
        ("15/01/2026", ""),
        ("", ""),
        (None, ""),
        (20260115, ""),
    ],
)
def test_normalize_date_value(value: object, expected: str) -> None:
    assert normalize_date_value(value) == expected


def test_validate_accepts_values_within_bounds() -> None:
    field = _field(minimum=0, maximum=100)

    assert validate_field_value(field, 50) is None
    assert validate_field_value(field, "12.5") is None
    assert validate_field_value(field, "") is None


def test_validate_reports_bounds_and_number_parsing() -> None:
    field = _field(minimum=0, maximum=100)

    assert validate_field_value(field, -1) == "Premium must be at least 0"
    assert validate_field_value(field, 101) == "Premium must be at most 100"
    assert validate_field_value(field, "abc") == "Premium must be a valid number"
    assert validate_field_value(field, True) == "Premium must be a valid number"


def test_validate_required_and_enum() -> None:
    required = _field(FieldType.STRING, required=True)
    choice = _field(FieldType.STRING, enum=("HMO", "PPO"))

    assert validate_field_value(required, " ") == "Premium is required"
    assert validate_field_value(choice, "PPO") is None
    assert validate_field_value(choice, "PFFS") == "Premium must be one of: HMO, PPO"


def test_validate_integer_and_date_fields() -> None:
    assert validate_field_value(_field(FieldType.INTEGER), 3.5) == "Premium must be a whole number"
    assert validate_field_value(_field(FieldType.INTEGER), 3.0) is None
    assert validate_field_value(_field(FieldType.DATE), "2026-13-01") is not None
    assert validate_field_value(_field(FieldType.DATE), "2026-12-01") is None


def test_format_field_value() -> None:
    assert format_field_value(_field(), 25.0) == "25"
    assert format_field_value(_field(), 12.5) == "12.5"
    assert format_field_value(_field(FieldType.DATE), datetime(2026, 3, 1, 9)) == "2026-03-01"
    assert format_field_value(_field(FieldType.STRING), None) == ""


def test_parse_number() -> None:
    assert parse_number(" 42 ") == 42.0
    assert parse_number(7) == 7
    assert parse_number(False) is None
    assert parse_number("nan") is None
    assert parse_number(None) is None
