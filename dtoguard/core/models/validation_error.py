"""
ValidationError model describing a single field-level failure.
"""

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Classification of field-level failures."""

    REQUIRED_FIELD_MISSING = "required_field_missing"
    TYPE_MISMATCH = "type_mismatch"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    BELOW_MINIMUM = "below_minimum"
    ABOVE_MAXIMUM = "above_maximum"
    PATTERN_MISMATCH = "pattern_mismatch"
    TRANSFORM_FAILED = "transform_failed"
    CUSTOM_VALIDATION_FAILED = "custom_validation_failed"
    UNKNOWN_FIELD = "unknown_field"


class ValidationError(BaseModel):
    """
    A single failed check for one field (not an exception).

    Attributes:
        field: Name of the offending field
        message: Human-readable description of the failure
        value: The offending value (only present when it was supplied)
        code: Failure classification, when known
    """

    field: str
    message: str
    value: Any = None
    code: ErrorCode | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any], default_code: ErrorCode | None = None) -> "ValidationError":
        """
        Build an error from a plain mapping returned by a custom validator.

        Args:
            payload: Mapping with at least a "field" key
            default_code: Code to use when the mapping carries none

        Returns:
            ValidationError instance
        """
        kwargs: dict[str, Any] = {
            "field": str(payload["field"]),
            "message": str(payload.get("message", "Custom validation failed")),
            "code": payload.get("code") or default_code,
        }
        if "value" in payload:
            kwargs["value"] = payload["value"]
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary, omitting unset members."""
        data: dict[str, Any] = {"field": self.field, "message": self.message}
        if "value" in self.model_fields_set:
            data["value"] = self.value
        if self.code is not None:
            data["code"] = self.code.value
        return data

    class Config:
        json_schema_extra = {
            "example": {
                "field": "age",
                "message": "Field 'age' must be at least 18",
                "value": 16,
                "code": "below_minimum",
            }
        }
