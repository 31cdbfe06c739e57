"""Configuration loader service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from plan_metadata_engine.schema_management.schema_parser import (
    SchemaError,
    get_parsed_schema,
    load_schema_document,
)

from .runtime_settings import (
    AuditSettings,
    Configuration,
    NotificationSettings,
    RenderingSettings,
    SchemaSettings,
)

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str | None = None) -> Configuration:
    """Load and validate the configuration file; without a path, return the defaults."""
    if config_path is None:
        return Configuration()
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    configuration = Configuration(
        path=path,
        schema=_parse_schema_section(parsed.get("schema"), path.parent),
        rendering=_parse_rendering_section(parsed.get("rendering")),
        audit=_parse_audit_section(parsed.get("audit")),
        notifications=_parse_notifications_section(parsed.get("notifications")),
    )
    _LOGGER.debug("Loaded configuration from %s", path)
    return configuration


def _parse_schema_section(value: Any, base_path: Path) -> SchemaSettings:
    section = _optional_mapping(value, "schema")
    path_value = _optional_string(section.get("path"), "schema.path")
    if path_value is None:
        return SchemaSettings()
    schema_path = _resolve_path(base_path, path_value)
    if not schema_path.exists():
        raise ConfigurationError(f"Schema file not found: {schema_path}")
    try:
        document = load_schema_document(schema_path)
        parsed = get_parsed_schema(document)
    except SchemaError as exc:
        raise ConfigurationError(str(exc)) from exc
    if not parsed.fields:
        raise ConfigurationError(f"Schema file declares no properties: {schema_path}")
    return SchemaSettings(document=document, source_path=schema_path)


def _parse_rendering_section(value: Any) -> RenderingSettings:
    section = _optional_mapping(value, "rendering")
    if section.get("long_text_keywords") is None:
        return RenderingSettings()
    keywords = _normalize_string_sequence(
        section.get("long_text_keywords"), "rendering.long_text_keywords"
    )
    return RenderingSettings(long_text_keywords=tuple(keyword.lower() for keyword in keywords))


def _parse_audit_section(value: Any) -> AuditSettings:
    section = _optional_mapping(value, "audit")
    if section.get("concept_key_exceptions") is None:
        return AuditSettings()
    exceptions = _normalize_string_sequence(
        section.get("concept_key_exceptions"), "audit.concept_key_exceptions"
    )
    return AuditSettings(concept_key_exceptions=frozenset(exceptions))


def _parse_notifications_section(value: Any) -> NotificationSettings:
    section = _optional_mapping(value, "notifications")
    if section.get("capacity") is None:
        return NotificationSettings()
    capacity = _require_positive_int(section.get("capacity"), "notifications.capacity")
    return NotificationSettings(capacity=capacity)


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
