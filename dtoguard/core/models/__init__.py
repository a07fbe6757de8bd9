"""
Core data models for the dtoguard validation engine.

All models use Pydantic for runtime validation and type safety.
"""

from .field_rule import FieldRule, FieldType, Schema
from .validation_error import ErrorCode, ValidationError
from .validation_result import ValidationResult

__all__ = [
    "FieldRule",
    "FieldType",
    "Schema",
    "ErrorCode",
    "ValidationError",
    "ValidationResult",
]
