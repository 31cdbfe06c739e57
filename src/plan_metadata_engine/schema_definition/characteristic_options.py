"""Vocabularies accepted for field characteristics."""

from __future__ import annotations

FIELD_TYPES: tuple[str, ...] = ("string", "number")
UNIT_OPTIONS: tuple[str, ...] = ("$", "%")
FREQUENCY_OPTIONS: tuple[str, ...] = ("daily", "monthly", "quarterly", "yearly", "per_stay")
BASE_ELIGIBILITY_OPTIONS: tuple[str, ...] = ("medicare", "lis", "medicaid")
MEDICAID_LEVEL_OPTIONS: tuple[str, ...] = ("qdwi", "qi", "slmb", "slmb+", "qmb", "qmb+", "fbde")
ELIGIBILITY_OPTIONS: tuple[str, ...] = BASE_ELIGIBILITY_OPTIONS + MEDICAID_LEVEL_OPTIONS
DIRECTION_OPTIONS: tuple[str, ...] = ("credit", "debit")

PLAN_METADATA_CHARACTERISTIC_OPTIONS = {
    "field_types": FIELD_TYPES,
    "units": UNIT_OPTIONS,
    "frequency": FREQUENCY_OPTIONS,
    "eligibility": ELIGIBILITY_OPTIONS,
    "medicaid_levels": MEDICAID_LEVEL_OPTIONS,
}
