"""Audit execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from plan_metadata_engine.characteristic_validation import CharacteristicViolation
from plan_metadata_engine.configuration.runtime_settings import Configuration
from plan_metadata_engine.plan_records import PlanRecord
from plan_metadata_engine.schema_management import ParsedSchema


@dataclass(frozen=True)
class AuditRequest:
    """Input contract for one metadata audit."""

    plans_path: str
    config_path: str | None = None
    output_dir: str | None = None


@dataclass(frozen=True)
class AuditOutcome:
    """Output contract for one completed audit."""

    output_path: Path
    plan_count: int
    legacy_field_count: int
    violations: tuple[CharacteristicViolation, ...]


@dataclass(frozen=True)
class AuditArtifacts:
    """Loaded domain artifacts required during an audit."""

    configuration: Configuration
    schema: ParsedSchema
    plans: tuple[PlanRecord, ...]
