"""Characteristic validation entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ViolationKind(str, Enum):
    """Schema authoring rule that a field breaks."""

    MISSING_CONCEPT = "missing_concept"
    CONCEPT_NOT_IN_KEY = "concept_not_in_key"
    MISSING_BASE_FIELD = "missing_base_field"
    MISSING_ELIGIBILITY = "missing_eligibility"
    FACET_MISMATCH = "facet_mismatch"


@dataclass(frozen=True)
class CharacteristicViolation:
    """One schema authoring finding."""

    field_key: str
    kind: ViolationKind
    message: str
    facet: str | None = None
