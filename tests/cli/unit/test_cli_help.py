"""CLI smoke tests."""

from click.testing import CliRunner
from plan_metadata_engine.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in (
        "generate-config",
        "validate-schema",
        "legacy-fields",
        "show-form",
        "generate-template",
        "import-plans",
        "audit",
    ):
        assert command in result.output


def test_show_form_help_lists_modes() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["show-form", "-h"])

    assert result.exit_code == 0
    assert "create" in result.output
    assert "compare" in result.output
