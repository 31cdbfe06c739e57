"""Metadata access exports."""

from .field_resolution import (
    EligibilityContext,
    ResolutionResult,
    ResolutionSource,
    ValueRange,
    resolve_metadata_value,
    resolve_value_range,
)
from .plan_metadata import PlanMetadata, build_metadata, get_legacy_fields

__all__ = [
    "EligibilityContext",
    "PlanMetadata",
    "ResolutionResult",
    "ResolutionSource",
    "ValueRange",
    "build_metadata",
    "get_legacy_fields",
    "resolve_metadata_value",
    "resolve_value_range",
]
