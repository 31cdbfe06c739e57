"""Template ingestion exports."""

from .plan_workbook_models import PlanWorkbookReadResult
from .workbook_reader import TemplateValidationError, read_plan_workbook

__all__ = [
    "PlanWorkbookReadResult",
    "TemplateValidationError",
    "read_plan_workbook",
]
