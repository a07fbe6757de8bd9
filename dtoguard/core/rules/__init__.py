"""
Record-level validation and schema configuration management.
"""

from .record_evaluator import DTOValidator, normalize_schema, validate
from .schema_config import SchemaBuilder, SchemaLoader, parse_schema_config

__all__ = [
    "DTOValidator",
    "validate",
    "normalize_schema",
    "SchemaLoader",
    "SchemaBuilder",
    "parse_schema_config",
]
