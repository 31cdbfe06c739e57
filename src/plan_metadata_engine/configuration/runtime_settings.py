"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from plan_metadata_engine.characteristic_validation import CONCEPT_KEY_EXCEPTIONS
from plan_metadata_engine.form_rendering import LONG_TEXT_KEYWORDS
from plan_metadata_engine.schema_definition import PLANS_METADATA_SCHEMA
from plan_metadata_engine.schema_management import SchemaDocument

DEFAULT_NOTIFICATION_CAPACITY = 100


@dataclass(frozen=True)
class SchemaSettings:
    """Schema document in effect; `source_path` is None for the built-in schema."""

    document: SchemaDocument = field(default_factory=lambda: PLANS_METADATA_SCHEMA)
    source_path: Path | None = None


@dataclass(frozen=True)
class RenderingSettings:
    """Form rendering options."""

    long_text_keywords: tuple[str, ...] = LONG_TEXT_KEYWORDS


@dataclass(frozen=True)
class AuditSettings:
    """Characteristic audit options."""

    concept_key_exceptions: frozenset[str] = frozenset(CONCEPT_KEY_EXCEPTIONS)


@dataclass(frozen=True)
class NotificationSettings:
    """Notification log retention."""

    capacity: int = DEFAULT_NOTIFICATION_CAPACITY


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None = None
    schema: SchemaSettings = field(default_factory=SchemaSettings)
    rendering: RenderingSettings = field(default_factory=RenderingSettings)
    audit: AuditSettings = field(default_factory=AuditSettings)
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
