"""Command line interface entry point."""

from __future__ import annotations

import json
import sys

import click

from plan_metadata_engine.audit_execution import (
    AuditExecutionError,
    AuditRequest,
    execute_metadata_audit,
)
from plan_metadata_engine.characteristic_validation import validate_schema_characteristics
from plan_metadata_engine.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from plan_metadata_engine.form_rendering import FormMode, build_form_layout, layout_to_dict
from plan_metadata_engine.metadata_access import get_legacy_fields
from plan_metadata_engine.notification_log import LogMessage, MessageLog, MessageType
from plan_metadata_engine.plan_records import (
    PlanRecordError,
    format_plan_display_name,
    read_plan_records,
    write_plan_records,
)
from plan_metadata_engine.schema_management import ParsedSchema, SchemaError, get_parsed_schema
from plan_metadata_engine.template_generation import generate_plan_template
from plan_metadata_engine.template_ingestion import TemplateValidationError, read_plan_workbook

_CONFIG_OPTION_HELP = "Path to YAML/JSON configuration file (defaults apply when omitted)"


class CliError(Exception):
    """Custom CLI error."""


def _config_option(command):
    return click.option(
        "--config",
        "config_path",
        required=False,
        type=click.Path(path_type=str),
        help=_CONFIG_OPTION_HELP,
    )(command)


def _load(config_path: str | None) -> tuple[Configuration, ParsedSchema]:
    try:
        configuration = load_configuration(config_path)
        schema = get_parsed_schema(configuration.schema.document)
    except (ConfigurationError, SchemaError) as exc:
        raise CliError(str(exc)) from exc
    return configuration, schema


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="plan-metadata-engine")
def cli() -> None:
    """Schema-driven plan metadata utility."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="validate-schema")
@_config_option
def validate_schema(config_path: str | None) -> None:
    """Check field characteristics of the configured schema."""
    configuration, schema = _load(config_path)
    violations = validate_schema_characteristics(
        schema, configuration.audit.concept_key_exceptions
    )
    for violation in violations:
        click.echo(f"{violation.field_key}: {violation.message}")
    if violations:
        raise CliError(f"{len(violations)} schema violations found.")
    click.echo(f"Schema OK: {len(schema.fields)} fields checked.")


@cli.command(name="legacy-fields")
@click.option(
    "--plans",
    "plans_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON/YAML plans file",
)
@_config_option
def legacy_fields(plans_path: str, config_path: str | None) -> None:
    """List metadata keys the schema no longer declares, per plan."""
    _, schema = _load(config_path)
    try:
        plans = read_plan_records(plans_path)
    except PlanRecordError as exc:
        raise CliError(str(exc)) from exc
    found = 0
    for plan in plans:
        legacy = get_legacy_fields(plan.metadata, schema)
        if not legacy:
            continue
        found += 1
        click.echo(f"{plan.plan_id} {format_plan_display_name(plan)}: {', '.join(legacy)}")
    if not found:
        click.echo("No legacy fields found.")


# pylint: disable=too-many-arguments
@cli.command(name="show-form")
@click.option(
    "--plans",
    "plans_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON/YAML plans file",
)
@click.option("--plan-id", "plan_id", required=True, help="Plan to render")
@click.option(
    "--mode",
    type=click.Choice([mode.value for mode in FormMode]),
    default=FormMode.EDIT.value,
    show_default=True,
    help="Form mode; compare renders every field read-only",
)
@click.option(
    "--section",
    "sections",
    multiple=True,
    help="Restrict the form to a section key (repeatable)",
)
@_config_option
def show_form(
    plans_path: str,
    plan_id: str,
    mode: str,
    sections: tuple[str, ...],
    config_path: str | None,
) -> None:
    """Print the metadata form layout of one plan as JSON."""
    configuration, schema = _load(config_path)
    try:
        plans = read_plan_records(plans_path)
    except PlanRecordError as exc:
        raise CliError(str(exc)) from exc
    plan = next((candidate for candidate in plans if candidate.plan_id == plan_id), None)
    if plan is None:
        raise CliError(f"Plan not found: {plan_id}")
    layout = build_form_layout(
        schema,
        plan.metadata,
        mode,
        sections=sections or None,
        long_text_keywords=configuration.rendering.long_text_keywords,
    )
    click.echo(json.dumps(layout_to_dict(layout), indent=2, ensure_ascii=False, default=str))


# pylint: enable=too-many-arguments


@cli.command(name="generate-template")
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the plan template workbook to write",
)
@_config_option
def generate_template(output_path: str, config_path: str | None) -> None:
    """Generate a plan template workbook from the configured schema."""
    configuration, schema = _load(config_path)
    try:
        resolved = generate_plan_template(schema, configuration.schema.document, output_path)
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved))


@cli.command(name="import-plans")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the filled plan template workbook",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON plans file to write",
)
@_config_option
def import_plans(input_path: str, output_path: str, config_path: str | None) -> None:
    """Read a filled plan workbook and write its plans as JSON."""
    configuration, schema = _load(config_path)
    message_log = MessageLog(configuration.notifications.capacity)
    unsubscribe = message_log.subscribe(_echo_warning)
    try:
        result = read_plan_workbook(input_path, schema, message_log)
        resolved = write_plan_records(result.plans, output_path)
    except (TemplateValidationError, OSError) as exc:
        raise CliError(str(exc)) from exc
    finally:
        unsubscribe()
    click.echo(str(resolved))


@cli.command(name="audit")
@click.option(
    "--plans",
    "plans_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON/YAML plans file",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Optional directory for storing the audit workbook",
)
@_config_option
def audit(plans_path: str, output_dir: str | None, config_path: str | None) -> None:
    """Write an audit workbook of legacy fields and schema violations."""
    try:
        outcome = execute_metadata_audit(
            AuditRequest(plans_path=plans_path, config_path=config_path, output_dir=output_dir)
        )
    except AuditExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(outcome.output_path))


def _echo_warning(message: LogMessage) -> None:
    if message.type in (MessageType.WARNING, MessageType.ERROR):
        click.echo(f"{message.type.value}: {message.message}", err=True)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
