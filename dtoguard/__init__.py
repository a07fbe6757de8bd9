"""
dtoguard - declarative validation for untyped records.

Validates parsed request bodies and similar mappings against a closed field
schema, producing either a normalized record or every field-level error.
"""

from dtoguard.adapters import (
    DTOValidationError,
    create_dto,
    dto,
    error_response,
    validation_middleware,
    with_validation,
)
from dtoguard.core.models import (
    ErrorCode,
    FieldRule,
    FieldType,
    Schema,
    ValidationError,
    ValidationResult,
)
from dtoguard.core.rules import DTOValidator, SchemaBuilder, SchemaLoader, validate
from dtoguard.core.validators import COMMON_RULES, MISSING, classify

__version__ = "0.1.0"

__all__ = [
    "validate",
    "DTOValidator",
    "FieldRule",
    "FieldType",
    "Schema",
    "ErrorCode",
    "ValidationError",
    "ValidationResult",
    "SchemaLoader",
    "SchemaBuilder",
    "COMMON_RULES",
    "MISSING",
    "classify",
    "dto",
    "create_dto",
    "DTOValidationError",
    "with_validation",
    "validation_middleware",
    "error_response",
]
