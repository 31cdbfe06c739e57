"""Schema management exports."""

from .field_values import (
    format_field_value,
    normalize_date_value,
    parse_number,
    validate_field_value,
)
from .schema_models import (
    UNCATEGORIZED_SECTION,
    FieldCharacteristics,
    FieldDefinition,
    FieldType,
    FieldValidation,
    ParsedSchema,
    SchemaDocument,
    SectionDefinition,
)
from .schema_parser import (
    SchemaError,
    compute_schema_hash,
    get_field_definition,
    get_fields_for_section,
    get_parsed_schema,
    load_schema_document,
    parse_schema,
    parse_schema_text,
)

__all__ = [
    "UNCATEGORIZED_SECTION",
    "FieldCharacteristics",
    "FieldDefinition",
    "FieldType",
    "FieldValidation",
    "ParsedSchema",
    "SchemaDocument",
    "SchemaError",
    "SectionDefinition",
    "compute_schema_hash",
    "format_field_value",
    "get_field_definition",
    "get_fields_for_section",
    "get_parsed_schema",
    "load_schema_document",
    "normalize_date_value",
    "parse_number",
    "parse_schema",
    "parse_schema_text",
    "validate_field_value",
]
