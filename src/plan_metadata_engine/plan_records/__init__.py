"""Plan record exports."""

from .plan_file_reader import (
    PlanRecordError,
    plan_from_mapping,
    plan_to_dict,
    read_plan_records,
    write_plan_records,
)
from .plan_models import (
    PLAN_COLUMNS,
    PlanRecord,
    build_plan_type_string,
    calculate_cms_id,
    format_plan_display_name,
)

__all__ = [
    "PLAN_COLUMNS",
    "PlanRecord",
    "PlanRecordError",
    "build_plan_type_string",
    "calculate_cms_id",
    "format_plan_display_name",
    "plan_from_mapping",
    "plan_to_dict",
    "read_plan_records",
    "write_plan_records",
]
