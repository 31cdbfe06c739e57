"""Eligibility-aware resolution of metadata values."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from plan_metadata_engine.schema_management.schema_models import FieldDefinition, ParsedSchema

from .plan_metadata import PlanMetadata


class ResolutionSource(str, Enum):
    """Where a resolved value came from."""

    VARIANT = "variant"
    BASE = "base"
    MISSING = "missing"


@dataclass(frozen=True)
class EligibilityContext:
    """Eligibility tokens describing a beneficiary, e.g. `lis` or `qmb`."""

    eligibility: str | Sequence[str] | None = None

    def tokens(self) -> tuple[str, ...]:
        """Return lower-cased eligibility tokens."""
        if not self.eligibility:
            return ()
        if isinstance(self.eligibility, str):
            return (self.eligibility.lower(),)
        return tuple(token.lower() for token in self.eligibility)


@dataclass(frozen=True)
class ResolutionResult:
    """Value picked for a field key."""

    source: ResolutionSource
    key: str | None
    value: Any
    definition: FieldDefinition | None = None


@dataclass(frozen=True)
class ValueRange:
    """Lowest variant value and base value of one field."""

    minimum: float | None
    maximum: float | None


_MISSING = ResolutionResult(source=ResolutionSource.MISSING, key=None, value=None)


def resolve_metadata_value(
    metadata: object,
    field_key: str,
    schema: ParsedSchema,
    context: EligibilityContext | None = None,
) -> ResolutionResult:
    """Resolve `field_key` to the best stored value for the eligibility context."""
    definition = schema.get_field(field_key)
    if definition is None:
        return _MISSING
    record = PlanMetadata.from_raw(metadata)

    if definition.base_key is not None:
        if _has_value(record.value(definition.key)):
            return _result(ResolutionSource.VARIANT, definition, record)
        base = schema.get_field(definition.base_key)
        if base is not None and _has_value(record.value(base.key)):
            return _result(ResolutionSource.BASE, base, record)
        return _MISSING

    eligibility = context.tokens() if context else ()
    if eligibility:
        for variant in schema.variants_of(definition.key):
            variant_tokens = (
                variant.characteristics.eligibility_tokens() if variant.characteristics else ()
            )
            if not any(token in eligibility for token in variant_tokens):
                continue
            if _has_value(record.value(variant.key)):
                return _result(ResolutionSource.VARIANT, variant, record)

    if _has_value(record.value(definition.key)):
        return _result(ResolutionSource.BASE, definition, record)
    return _MISSING


def resolve_value_range(metadata: object, field_key: str, schema: ParsedSchema) -> ValueRange:
    """Return the lowest variant value (0 when none is stored) and the base value."""
    record = PlanMetadata.from_raw(metadata)
    variant_values = [
        number
        for variant in schema.variants_of(field_key)
        if (number := record.number(variant.key)) is not None
    ]
    return ValueRange(
        minimum=min(variant_values) if variant_values else 0,
        maximum=record.number(field_key),
    )


def _result(
    source: ResolutionSource, definition: FieldDefinition, record: PlanMetadata
) -> ResolutionResult:
    return ResolutionResult(
        source=source,
        key=definition.key,
        value=record.value(definition.key),
        definition=definition,
    )


def _has_value(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True
