"""
ValidationResult model representing the outcome of validating a record (ephemeral).
"""

from typing import Any

from pydantic import BaseModel, model_validator

from .validation_error import ValidationError


class ValidationResult(BaseModel):
    """
    Outcome of validating a record against a schema.

    Exactly one of data/errors is present, selected by success. There is no
    partial result: a failed validation never carries data.

    Attributes:
        success: Overall validation status
        data: Normalized record (declared fields only) when successful
        errors: Every field-level failure when unsuccessful
    """

    success: bool
    data: dict[str, Any] | None = None
    errors: list[ValidationError] | None = None

    @model_validator(mode="after")
    def check_success_consistency(self) -> "ValidationResult":
        """Validate that success selects exactly one of data/errors."""
        if self.success:
            if self.data is None or self.errors is not None:
                raise ValueError("success=True requires data and no errors")
        elif not self.errors or self.data is not None:
            raise ValueError("success=False requires non-empty errors and no data")
        return self

    @classmethod
    def passed(cls, data: dict[str, Any]) -> "ValidationResult":
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, errors: list[ValidationError]) -> "ValidationResult":
        return cls(success=False, errors=errors)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON-friendly result shape."""
        if self.success:
            return {"success": True, "data": dict(self.data)}
        return {"success": False, "errors": [error.to_dict() for error in self.errors]}

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "errors": [
                    {
                        "field": "name",
                        "message": "Field 'name' is required",
                        "code": "required_field_missing",
                    },
                    {
                        "field": "nickname",
                        "message": "Unknown field 'nickname'",
                        "value": "jd",
                        "code": "unknown_field",
                    },
                ],
            }
        }
