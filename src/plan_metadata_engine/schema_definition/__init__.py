"""Schema definition exports."""

from .characteristic_options import (
    ELIGIBILITY_OPTIONS,
    FREQUENCY_OPTIONS,
    MEDICAID_LEVEL_OPTIONS,
    PLAN_METADATA_CHARACTERISTIC_OPTIONS,
    UNIT_OPTIONS,
)
from .definition_builders import (
    SchemaDefinitionError,
    build_schema_document,
    compile_authoring_document,
    define_field,
    define_section,
    define_variant,
    generate_section_key,
)
from .plans_metadata_schema import PLANS_METADATA_SCHEMA

__all__ = [
    "ELIGIBILITY_OPTIONS",
    "FREQUENCY_OPTIONS",
    "MEDICAID_LEVEL_OPTIONS",
    "PLAN_METADATA_CHARACTERISTIC_OPTIONS",
    "PLANS_METADATA_SCHEMA",
    "UNIT_OPTIONS",
    "SchemaDefinitionError",
    "build_schema_document",
    "compile_authoring_document",
    "define_field",
    "define_section",
    "define_variant",
    "generate_section_key",
]
