"""Schema management entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

SchemaDocument = Mapping[str, Any]

UNCATEGORIZED_SECTION = "uncategorized"


class FieldType(str, Enum):
    """Resolved field types used by forms and value rules."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    DATE = "date"


@dataclass(frozen=True)
class SectionDefinition:
    """Declared schema section."""

    key: str
    title: str
    description: str
    order: float


@dataclass(frozen=True)
class FieldValidation:
    """Recognized validation rules of one field."""

    minimum: float | None = None
    maximum: float | None = None
    enum: tuple[str, ...] | None = None
    required: bool | None = None


@dataclass(frozen=True)
class FieldCharacteristics:  # pylint: disable=too-many-instance-attributes
    """Semantic facets describing a field independent of its storage key."""

    concept: str | None = None
    direction: str | None = None
    frequency: str | None = None
    type: str | None = None
    eligibility: str | tuple[str, ...] | None = None
    modifier: str | None = None
    unit: str | None = None

    def facet(self, name: str) -> Any:
        """Return the value of one facet by name."""
        return getattr(self, name, None)

    def declares(self, name: str) -> bool:
        """Return True when the facet carries a value."""
        return self.facet(name) not in (None, "", ())

    def eligibility_tokens(self) -> tuple[str, ...]:
        """Return lower-cased eligibility tokens."""
        if not self.eligibility:
            return ()
        if isinstance(self.eligibility, str):
            return (self.eligibility.lower(),)
        return tuple(token.lower() for token in self.eligibility)


@dataclass(frozen=True)
class FieldDefinition:  # pylint: disable=too-many-instance-attributes
    """Parsed schema field."""

    key: str
    type: FieldType
    label: str
    section: str
    description: str = ""
    validation: FieldValidation | None = None
    format: str | None = None
    characteristics: FieldCharacteristics | None = None
    base_key: str | None = None
    tags: tuple[str, ...] = ()

    @property
    def is_variant(self) -> bool:
        """Return True for fields declaring a base field."""
        return self.base_key is not None


@dataclass(frozen=True)
class ParsedSchema:
    """Indexed in-memory representation of a schema document."""

    sections: tuple[SectionDefinition, ...]
    fields: tuple[FieldDefinition, ...]
    fields_by_section: Mapping[str, tuple[FieldDefinition, ...]]
    variants_by_base: Mapping[str, tuple[FieldDefinition, ...]] = field(default_factory=dict)
    _fields_by_key: Mapping[str, FieldDefinition] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "fields_by_section", MappingProxyType(dict(self.fields_by_section))
        )
        object.__setattr__(self, "variants_by_base", MappingProxyType(dict(self.variants_by_base)))
        object.__setattr__(
            self,
            "_fields_by_key",
            MappingProxyType({definition.key: definition for definition in self.fields}),
        )

    @property
    def field_keys(self) -> frozenset[str]:
        """Return every declared field key."""
        return frozenset(self._fields_by_key)

    def get_field(self, key: str) -> FieldDefinition | None:
        """Return the field declared under `key`, if any."""
        return self._fields_by_key.get(key)

    def variants_of(self, base_key: str) -> tuple[FieldDefinition, ...]:
        """Return variant fields of `base_key` in declaration order."""
        return self.variants_by_base.get(base_key, ())
