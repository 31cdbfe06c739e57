"""In-memory editing state of one plan's metadata form."""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping, Sequence
from typing import Any

from plan_metadata_engine.metadata_access import PlanMetadata, build_metadata, get_legacy_fields
from plan_metadata_engine.schema_management.field_values import normalize_date_value
from plan_metadata_engine.schema_management.schema_models import FieldType, ParsedSchema

from .form_layout import FormLayout, FormMode, build_form_layout, control_value
from .widget_selection import LONG_TEXT_KEYWORDS

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())


class ReadOnlyFormError(Exception):
    """Raised when a read-only form is asked to change a value."""


class PlanFormState:
    """Current values of a plan form.

    Declared fields start from the stored metadata; legacy entries keep their
    stored value until edited, after which they hold the edited text.
    """

    def __init__(
        self,
        schema: ParsedSchema,
        metadata: PlanMetadata | Mapping[str, Any] | None = None,
        mode: FormMode | str = FormMode.EDIT,
        long_text_keywords: Sequence[str] = LONG_TEXT_KEYWORDS,
    ) -> None:
        self._schema = schema
        self._mode = FormMode(mode)
        self._long_text_keywords = tuple(long_text_keywords)
        record = PlanMetadata.from_raw(metadata)
        self._values: dict[str, Any] = {
            field.key: control_value(field, record.value(field.key))
            for field in schema.fields
            if field.key in record
        }
        self._legacy: dict[str, Any] = get_legacy_fields(record, schema)

    @property
    def mode(self) -> FormMode:
        return self._mode

    def value(self, key: str) -> Any:
        """Return the current value of a declared or legacy field."""
        if key in self._legacy:
            return self._legacy[key]
        return self._values.get(key, "")

    def set_value(self, key: str, value: Any) -> None:
        """Apply a change immediately."""
        if self._mode.read_only:
            raise ReadOnlyFormError(
                f"Form is read-only in {self._mode.value} mode; cannot set {key}."
            )
        if key in self._legacy:
            self._legacy[key] = "" if value is None else str(value)
            return
        field = self._schema.get_field(key)
        if field is None:
            raise KeyError(key)
        if field.type == FieldType.DATE:
            value = normalize_date_value(value)
        self._values[key] = value
        _LOGGER.debug("Form value changed: %s", key)

    def to_metadata(self) -> PlanMetadata:
        """Return declared non-empty values plus the legacy entries."""
        declared = build_metadata(self._values, self._schema)
        # Legacy entries are kept even when stored as None.
        return PlanMetadata({**declared.to_dict(), **self._legacy})

    def layout(
        self,
        *,
        sections: Collection[str] | None = None,
        fields: Collection[str] | None = None,
    ) -> FormLayout:
        """Lay out the form with the current values."""
        return build_form_layout(
            self._schema,
            self.to_metadata(),
            self._mode,
            sections=sections,
            fields=fields,
            long_text_keywords=self._long_text_keywords,
        )
