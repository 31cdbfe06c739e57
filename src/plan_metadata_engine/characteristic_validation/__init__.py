"""Characteristic validation exports."""

from .characteristic_rules import (
    ALLOWED_VARIANT_DIFFERENCES,
    CHECKED_VARIANT_FACETS,
    CONCEPT_KEY_EXCEPTIONS,
    validate_concept_naming,
    validate_schema_characteristics,
    validate_variant_consistency,
)
from .violations import CharacteristicViolation, ViolationKind

__all__ = [
    "ALLOWED_VARIANT_DIFFERENCES",
    "CHECKED_VARIANT_FACETS",
    "CONCEPT_KEY_EXCEPTIONS",
    "CharacteristicViolation",
    "ViolationKind",
    "validate_concept_naming",
    "validate_schema_characteristics",
    "validate_variant_consistency",
]
