"""Plan workbook ingestion entities."""

from __future__ import annotations

from dataclasses import dataclass

from plan_metadata_engine.plan_records import PlanRecord


@dataclass(frozen=True)
class PlanWorkbookReadResult:
    """Result of ingesting a filled plan workbook."""

    plans: tuple[PlanRecord, ...]
    legacy_columns: tuple[str, ...] = ()
