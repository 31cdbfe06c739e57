"""Metadata audit use-case service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from plan_metadata_engine.characteristic_validation import validate_schema_characteristics
from plan_metadata_engine.configuration import ConfigurationError, load_configuration
from plan_metadata_engine.form_rendering import legacy_text
from plan_metadata_engine.metadata_access import get_legacy_fields
from plan_metadata_engine.plan_records import PlanRecord, PlanRecordError, read_plan_records
from plan_metadata_engine.results_writing import (
    AuditMetadata,
    LegacyFieldEntry,
    write_audit_workbook,
)
from plan_metadata_engine.schema_management import (
    ParsedSchema,
    SchemaError,
    compute_schema_hash,
    get_parsed_schema,
)

from .audit_contracts import AuditArtifacts, AuditOutcome, AuditRequest

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())

BUILT_IN_SCHEMA_SOURCE = "built-in"


class AuditExecutionError(Exception):
    """Raised when an audit use case cannot be completed."""


def execute_metadata_audit(request: AuditRequest) -> AuditOutcome:
    """Audit plan metadata against the schema and write the audit workbook."""
    artifacts = _load_audit_artifacts(request)
    run_start = datetime.now(UTC)

    violations = validate_schema_characteristics(
        artifacts.schema, artifacts.configuration.audit.concept_key_exceptions
    )
    legacy_entries = collect_legacy_entries(artifacts.plans, artifacts.schema)

    output_path = _resolve_output_path(request.plans_path, request.output_dir)
    schema_settings = artifacts.configuration.schema
    audit_metadata = AuditMetadata(
        run_start=run_start,
        plans_path=Path(request.plans_path).resolve(),
        output_path=output_path.resolve(),
        schema_source=(
            str(schema_settings.source_path)
            if schema_settings.source_path
            else BUILT_IN_SCHEMA_SOURCE
        ),
        schema_hash=compute_schema_hash(schema_settings.document),
    )
    try:
        write_audit_workbook(
            output_path,
            legacy_entries,
            violations,
            audit_metadata,
            plan_count=len(artifacts.plans),
        )
    except OSError as exc:
        raise AuditExecutionError(f"Unable to write audit workbook: {exc}") from exc
    _LOGGER.info(
        "Audited %d plans: %d legacy fields, %d schema violations",
        len(artifacts.plans),
        len(legacy_entries),
        len(violations),
    )
    return AuditOutcome(
        output_path=output_path.resolve(),
        plan_count=len(artifacts.plans),
        legacy_field_count=len(legacy_entries),
        violations=violations,
    )


def collect_legacy_entries(
    plans: Sequence[PlanRecord], schema: ParsedSchema
) -> tuple[LegacyFieldEntry, ...]:
    """List every legacy metadata entry across plans, in plan order."""
    return tuple(
        LegacyFieldEntry(
            plan_id=plan.plan_id, plan_name=plan.name, key=key, value=legacy_text(value)
        )
        for plan in plans
        for key, value in get_legacy_fields(plan.metadata, schema).items()
    )


def _resolve_output_path(plans_path: str, output_dir: str | None) -> Path:
    plans_file = Path(plans_path)
    destination = Path(output_dir) if output_dir else plans_file.parent
    timestamp = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    return destination / f"{plans_file.stem}-audit-{timestamp}.xlsx"


def _load_audit_artifacts(request: AuditRequest) -> AuditArtifacts:
    try:
        configuration = load_configuration(request.config_path)
        schema = get_parsed_schema(configuration.schema.document)
        plans = read_plan_records(request.plans_path)
    except (ConfigurationError, SchemaError, PlanRecordError, OSError) as exc:
        raise AuditExecutionError(str(exc)) from exc
    return AuditArtifacts(configuration=configuration, schema=schema, plans=plans)
