"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for plan-metadata-engine.
# Every setting is optional; remove a line to fall back to its default.

schema:
  # JSON or YAML schema document; the built-in plan metadata schema is used when omitted.
  # path: "<OPTIONAL>"

rendering:
  # Key or label fragments that render string fields as multi-line text.
  long_text_keywords:
    - notes
    - summary
    - description
    - rx_cost_share
    - service_area

audit:
  # Concept values that base field keys need not contain.
  concept_key_exceptions:
    - coverage_limit

notifications:
  # Number of recent messages kept in memory.
  capacity: 100
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the engine configuration scaffold and return its resolved path.

    Raises:
      FileExistsError: If a configuration already exists at `output_path`;
        an existing file is never overwritten.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
