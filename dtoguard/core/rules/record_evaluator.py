"""
Record evaluator for orchestrating field rules over whole records.

Applies every declared field rule in schema order, then rejects keys the
schema does not declare, and assembles the ValidationResult.
"""

from typing import Any, Mapping

from dtoguard.core.models import ErrorCode, FieldRule, Schema, ValidationError, ValidationResult
from dtoguard.core.validators import MISSING, FieldEvaluator
from dtoguard.observability.logger import get_logger

logger = get_logger(__name__)


def normalize_schema(schema: Mapping[str, FieldRule | Mapping[str, Any]]) -> dict[str, FieldRule]:
    """
    Convert a schema declared with plain mappings into FieldRule instances.

    Args:
        schema: Ordered mapping of field name to FieldRule or rule mapping

    Returns:
        New dict with the same order, every rule a FieldRule

    Raises:
        pydantic.ValidationError: If a rule mapping is invalid
    """
    rules: dict[str, FieldRule] = {}
    for field_name, rule in schema.items():
        if isinstance(rule, FieldRule):
            rules[field_name] = rule
        else:
            rules[field_name] = FieldRule.model_validate(rule)
    return rules


class DTOValidator:
    """
    Validates records against a closed schema.

    Every declared field's first failing check is reported and every
    undeclared key is rejected, all in a single pass.
    """

    def __init__(self, field_evaluator: FieldEvaluator | None = None):
        """
        Initialize the validator.

        Args:
            field_evaluator: Evaluator for individual fields (default: FieldEvaluator())
        """
        self.field_evaluator = field_evaluator or FieldEvaluator()

    def validate(self, record: Mapping[str, Any] | None, schema: Schema) -> ValidationResult:
        """
        Validate a record against a schema.

        Args:
            record: Untyped input mapping (None is treated as empty); never mutated
            schema: Ordered mapping of field name to rule

        Returns:
            ValidationResult with either the normalized data or all errors

        Raises:
            TypeError: If record is neither None nor a mapping
        """
        rules = normalize_schema(schema)
        payload: Mapping[str, Any] = {} if record is None else record
        if not isinstance(payload, Mapping):
            raise TypeError(f"Record must be a mapping, got {type(payload).__name__}")

        errors: list[ValidationError] = []
        data: dict[str, Any] = {}

        for field_name, rule in rules.items():
            outcome = self.field_evaluator.evaluate(field_name, payload.get(field_name, MISSING), rule)
            if isinstance(outcome, ValidationError):
                errors.append(outcome)
            elif outcome is not MISSING:
                data[field_name] = outcome

        for key, value in payload.items():
            if key not in rules:
                errors.append(ValidationError(
                    field=str(key),
                    message=f"Unknown field '{key}'",
                    value=value,
                    code=ErrorCode.UNKNOWN_FIELD,
                ))

        if errors:
            logger.debug(
                "Record failed validation",
                extra={"error_count": len(errors), "fields": [error.field for error in errors]},
            )
            return ValidationResult.failed(errors)

        return ValidationResult.passed(data)

    def validate_batch(self, records: list[Mapping[str, Any] | None], schema: Schema) -> list[ValidationResult]:
        """
        Validate a batch of records.

        Args:
            records: List of input mappings
            schema: Ordered mapping of field name to rule

        Returns:
            List of ValidationResult objects, one per record
        """
        rules = normalize_schema(schema)
        return [self.validate(record, rules) for record in records]

    def describe_schema(self, schema: Schema) -> dict[str, Any]:
        """
        Get summary of a schema.

        Returns:
            Dictionary with field counts by type and required flag
        """
        rules = normalize_schema(schema)
        fields_by_type: dict[str, int] = {}
        for rule in rules.values():
            type_name = rule.type or "any"
            fields_by_type[type_name] = fields_by_type.get(type_name, 0) + 1

        return {
            "total_fields": len(rules),
            "required_fields": sum(1 for rule in rules.values() if rule.required),
            "fields_by_type": fields_by_type,
        }


_default_validator = DTOValidator()


def validate(record: Mapping[str, Any] | None, schema: Schema) -> ValidationResult:
    """
    Validate a record against a schema using the shared default validator.

    Args:
        record: Untyped input mapping (None is treated as empty)
        schema: Ordered mapping of field name to rule

    Returns:
        ValidationResult with either the normalized data or all errors
    """
    return _default_validator.validate(record, schema)
