"""Reading and writing plan record files."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from plan_metadata_engine.metadata_access import PlanMetadata

from .plan_models import PLAN_COLUMNS, PlanRecord

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())

_OPTIONAL_TEXT_COLUMNS = tuple(
    column for column in PLAN_COLUMNS if column not in ("plan_id", "name", "plan_year")
)


class PlanRecordError(Exception):
    """Raised when a plan file or plan entry is invalid."""


def read_plan_records(plans_path: Path | str) -> tuple[PlanRecord, ...]:
    """Read plans from a JSON or YAML list, or a mapping with a `plans` list."""
    path = Path(plans_path)
    if not path.exists():
        raise PlanRecordError(f"Plans file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PlanRecordError(f"Unable to read plans file {path}: {exc}") from exc
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise PlanRecordError(f"Failed to parse plans file: {exc}") from exc

    entries = loaded.get("plans") if isinstance(loaded, Mapping) else loaded
    if not isinstance(entries, list):
        raise PlanRecordError("Plans file must contain a list of plans.")

    plans: list[PlanRecord] = []
    seen_ids: set[str] = set()
    for position, entry in enumerate(entries, start=1):
        plan = plan_from_mapping(entry, position)
        if plan.plan_id in seen_ids:
            raise PlanRecordError(f"Duplicate plan id '{plan.plan_id}' (entry {position}).")
        seen_ids.add(plan.plan_id)
        plans.append(plan)
    _LOGGER.debug("Read %d plans from %s", len(plans), path)
    return tuple(plans)


def plan_from_mapping(raw: Any, position: int = 1) -> PlanRecord:
    """Build a plan from a mapping; `id` is accepted for `plan_id`."""
    if not isinstance(raw, Mapping):
        raise PlanRecordError(f"Plan entry {position} must be a mapping.")
    plan_id = _text(raw.get("plan_id", raw.get("id")))
    if not plan_id:
        raise PlanRecordError(f"Plan entry {position} is missing a plan id.")
    metadata = raw.get("metadata")
    if metadata is not None and not isinstance(metadata, Mapping):
        raise PlanRecordError(f"Plan '{plan_id}': metadata must be a mapping.")
    optional = {column: _text(raw.get(column)) or None for column in _OPTIONAL_TEXT_COLUMNS}
    return PlanRecord(
        plan_id=plan_id,
        name=_text(raw.get("name")) or "Unnamed Plan",
        plan_year=_plan_year(raw.get("plan_year"), plan_id),
        metadata=PlanMetadata.from_raw(metadata),
        **optional,
    )


def plan_to_dict(plan: PlanRecord) -> dict[str, Any]:
    """Return the JSON-serializable form of a plan."""
    payload: dict[str, Any] = {column: getattr(plan, column) for column in PLAN_COLUMNS}
    payload["metadata"] = plan.metadata.to_dict()
    return payload


def write_plan_records(plans: Iterable[PlanRecord], output_path: Path | str) -> Path:
    """Write plans as a JSON document with a `plans` list."""
    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    document = {"plans": [plan_to_dict(plan) for plan in plans]}
    destination.write_text(
        json.dumps(document, indent=2, ensure_ascii=False, default=str) + "\n", encoding="utf-8"
    )
    return destination.resolve()


def _plan_year(value: Any, plan_id: str) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise PlanRecordError(f"Plan '{plan_id}': plan_year must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise PlanRecordError(f"Plan '{plan_id}': plan_year must be an integer.")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
