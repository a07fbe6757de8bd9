"""
Adapters that wrap the validation engine for classes and request handlers.

Adapters own a (schema, validator) pair and delegate every decision to
DTOValidator; they add no validation semantics of their own.
"""

from .decorators import DTOValidationError, create_dto, dto
from .handlers import error_response, validation_middleware, with_validation

__all__ = [
    "dto",
    "create_dto",
    "DTOValidationError",
    "with_validation",
    "validation_middleware",
    "error_response",
]
