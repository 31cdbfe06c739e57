"""Accessor owning a plan's raw metadata mapping."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from plan_metadata_engine.schema_management.field_values import normalize_date_value, parse_number
from plan_metadata_engine.schema_management.schema_models import ParsedSchema


class PlanMetadata:
    """Read-only view of the metadata stored on one plan.

    Every other package reads metadata through this type (or the resolver
    functions beside it); the mapping itself never leaves this package
    except as a copy from `to_dict`.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Any] | None = None) -> None:
        self._entries: dict[str, Any] = dict(entries) if isinstance(entries, Mapping) else {}

    @classmethod
    def from_raw(cls, raw: object) -> PlanMetadata:
        """Wrap stored metadata; anything that is not a mapping counts as empty."""
        if isinstance(raw, PlanMetadata):
            return raw
        return cls(raw if isinstance(raw, Mapping) else None)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlanMetadata):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"PlanMetadata({self._entries!r})"

    def keys(self) -> Iterator[str]:
        """Iterate stored keys in insertion order."""
        return iter(self._entries)

    def value(self, key: str) -> Any:
        """Return the stored value, or None."""
        return self._entries.get(key)

    def number(self, key: str) -> float | None:
        """Return the value as a number; numeric strings are parsed."""
        return parse_number(self.value(key))

    def string(self, key: str) -> str | None:
        """Return the value when it is a string."""
        value = self.value(key)
        return value if isinstance(value, str) else None

    def date(self, key: str) -> str | None:
        """Return the value as a `YYYY-MM-DD` string."""
        return normalize_date_value(self.value(key)) or None

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of the stored mapping for persistence."""
        return dict(self._entries)


def get_legacy_fields(metadata: object, schema: ParsedSchema) -> dict[str, Any]:
    """Return metadata entries whose keys the schema no longer declares."""
    record = PlanMetadata.from_raw(metadata)
    declared = schema.field_keys
    return {key: record.value(key) for key in record.keys() if key not in declared}


def build_metadata(form_values: Mapping[str, Any], schema: ParsedSchema) -> PlanMetadata:
    """Collect declared, non-empty form values into plan metadata."""
    entries = {
        field.key: form_values[field.key]
        for field in schema.fields
        if field.key in form_values and form_values[field.key] not in (None, "")
    }
    return PlanMetadata(entries)
