"""
Class decorator attaching a schema and a validator to a class.

Usage:
    @dto({"name": {"required": True, "type": "string"}})
    class CreateUser:
        def __init__(self, name):
            self.name = name

    result = CreateUser.validate(payload)
    user = CreateUser.parse(payload)  # raises DTOValidationError on failure
"""

from typing import Any, Callable, Mapping, TypeVar

from dtoguard.core.models import Schema, ValidationError, ValidationResult
from dtoguard.core.rules import DTOValidator, normalize_schema

T = TypeVar("T", bound=type)


class DTOValidationError(Exception):
    """Raised by DTO.parse() when the record does not satisfy the schema."""

    def __init__(self, dto_name: str, errors: list[ValidationError]):
        self.dto_name = dto_name
        self.errors = errors
        details = "; ".join(error.message for error in errors)
        super().__init__(f"[{dto_name}] {len(errors)} validation error(s): {details}")


def _validate(cls, data: Mapping[str, Any] | None) -> ValidationResult:
    return cls.validator.validate(data, cls.schema)


def _parse(cls, data: Mapping[str, Any] | None):
    result = cls.validate(data)
    if not result.success:
        raise DTOValidationError(cls.__name__, result.errors)
    return cls(**result.data)


def dto(schema: Schema) -> Callable[[T], T]:
    """
    Build a class decorator for the given schema.

    The decorated class gains:
        schema: the normalized schema
        validator: a DTOValidator instance
        validate(data): classmethod returning a ValidationResult
        parse(data): classmethod returning an instance built from the
                     validated data, or raising DTOValidationError

    Args:
        schema: Ordered mapping of field name to rule

    Returns:
        Class decorator
    """
    rules = normalize_schema(schema)

    def decorator(cls: T) -> T:
        cls.schema = rules
        cls.validator = DTOValidator()
        cls.validate = classmethod(_validate)
        cls.parse = classmethod(_parse)
        return cls

    return decorator


def create_dto(schema: Schema, name: str | None = None) -> type:
    """
    Create a DTO class directly from a schema.

    Instances of the created class expose the validated fields as attributes.

    Args:
        schema: Ordered mapping of field name to rule
        name: Class name (default: "BaseDTO")

    Returns:
        New DTO class
    """

    def __init__(self, **fields: Any) -> None:
        for field_name, value in fields.items():
            setattr(self, field_name, value)

    cls = type(name or "BaseDTO", (), {"__init__": __init__})
    return dto(schema)(cls)
