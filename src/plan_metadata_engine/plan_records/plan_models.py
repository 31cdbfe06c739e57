"""Plan record entities and display helpers."""

from __future__ import annotations

from dataclasses import dataclass, field

from plan_metadata_engine.metadata_access import PlanMetadata

PLAN_COLUMNS: tuple[str, ...] = (
    "plan_id",
    "name",
    "carrier",
    "plan_year",
    "cms_contract_number",
    "cms_plan_number",
    "cms_geo_segment",
    "type_network",
    "type_extension",
    "type_snp",
    "type_program",
)

_PROGRAMS_IMPLIED_BY_TYPE = ("MA", "SNP")


@dataclass(frozen=True)
class PlanRecord:  # pylint: disable=too-many-instance-attributes
    """A stored insurance plan with its free-form metadata."""

    plan_id: str
    name: str
    carrier: str | None = None
    plan_year: int | None = None
    cms_contract_number: str | None = None
    cms_plan_number: str | None = None
    cms_geo_segment: str | None = None
    type_network: str | None = None
    type_extension: str | None = None
    type_snp: str | None = None
    type_program: str | None = None
    metadata: PlanMetadata = field(default_factory=PlanMetadata)


def calculate_cms_id(plan: PlanRecord) -> str | None:
    """Join contract, plan and geo segment numbers with `-`; None when all are missing."""
    parts = [
        part
        for part in (plan.cms_contract_number, plan.cms_plan_number, plan.cms_geo_segment)
        if part
    ]
    return "-".join(parts) if parts else None


def build_plan_type_string(plan: PlanRecord) -> str:
    """Combine the normalized plan type columns, e.g. `HMO-POS-D-SNP`."""
    parts: list[str] = []
    if plan.type_network:
        parts.append(plan.type_network)
    if plan.type_extension:
        parts.append(plan.type_extension)
    if plan.type_snp:
        parts.append(f"{plan.type_snp}-SNP")
    if plan.type_program and plan.type_program not in _PROGRAMS_IMPLIED_BY_TYPE:
        parts.append(plan.type_program)
    return "-".join(parts)


def format_plan_display_name(plan: PlanRecord) -> str:
    """Return `carrier name (cms id)`, skipping missing parts."""
    parts = [plan.carrier, plan.name]
    cms_id = calculate_cms_id(plan)
    if cms_id:
        parts.append(f"({cms_id})")
    return " ".join(part for part in parts if part)
