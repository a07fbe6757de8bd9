"""
FieldRule model describing the constraints declared for one schema field.
"""

from re import Pattern
from typing import Any, Callable, Literal, Mapping

from pydantic import BaseModel, Field

FieldType = Literal["string", "number", "boolean", "array", "object"]


class FieldRule(BaseModel):
    """
    The rule-set for a single schema field (immutable once declared).

    Attributes:
        required: Field must be present and not null
        type: Expected runtime shape: "string", "number", "boolean", "array", "object"
        min_length: Minimum string length (alias: minLength)
        max_length: Maximum string length (alias: maxLength)
        min: Minimum numeric value (inclusive)
        max: Maximum numeric value (inclusive)
        pattern: Regular expression strings must match (str values are compiled)
        custom: Callable returning the value to store or a ValidationError
        transform: Callable applied to the value before any other check
        allow_null: Accept an explicit null and store it as-is (alias: allowNull)
    """

    required: bool = False
    type: FieldType | None = None
    min_length: int | None = Field(None, ge=0, alias="minLength")
    max_length: int | None = Field(None, ge=0, alias="maxLength")
    min: int | float | None = None
    max: int | float | None = None
    pattern: Pattern[str] | None = None
    custom: Callable[[Any], Any] | None = None
    transform: Callable[[Any], Any] | None = None
    allow_null: bool = Field(False, alias="allowNull")

    class Config:
        frozen = True
        populate_by_name = True
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "required": True,
                "type": "string",
                "minLength": 3,
                "maxLength": 50,
                "pattern": "^[A-Za-z ]+$",
                "allowNull": False,
            }
        }


# Ordered mapping of field name to rule; dict insertion order is declaration order.
Schema = Mapping[str, FieldRule]
