"""
FieldEvaluator - resolves a single field's raw value against its FieldRule.

Checks run in a fixed order and the first failure wins:
required, null bypass, absence bypass, transform, type, string constraints,
numeric constraints, custom validator, numeric coercion.
"""

import math
import re
from typing import Any, Mapping, Sequence

from dtoguard.core.models import ErrorCode, FieldRule, ValidationError


class _Missing:
    """Marker for a field that is absent from the record."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def classify(value: Any) -> str:
    """
    Tag a runtime value with its schema type name.

    Args:
        value: Any value taken from a record

    Returns:
        One of "undefined", "null", "boolean", "number", "string",
        "array", "object"
    """
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    # bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Sequence) and not isinstance(value, bytes | bytearray):
        return "array"
    return "object"


# Numeric literal grammar accepted by JavaScript's Number(): ASCII digits only,
# no digit separators, "Infinity" spelled out, unsigned 0x/0o/0b integers.
DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?Infinity")
RADIX_PATTERN = re.compile(r"0(?:[xX](?P<hex>[0-9a-fA-F]+)|[oO](?P<oct>[0-7]+)|[bB](?P<bin>[01]+))")


def parse_number(text: str) -> int | float | None:
    """
    Parse a numeric string the way JavaScript's Number() does.

    Args:
        text: Candidate string such as "25", " 3.5 ", "1e3" or "0x1F"

    Returns:
        The parsed number (int when integral), 0 for a blank string, or
        None if the string is not a numeric literal
    """
    stripped = text.strip()
    if not stripped:
        return 0

    radix = RADIX_PATTERN.fullmatch(stripped)
    if radix:
        if radix.group("hex"):
            return int(radix.group("hex"), 16)
        if radix.group("oct"):
            return int(radix.group("oct"), 8)
        return int(radix.group("bin"), 2)

    if not DECIMAL_PATTERN.fullmatch(stripped):
        return None

    number = float(stripped)
    if math.isfinite(number) and number.is_integer():
        return int(number)
    return number


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


class FieldEvaluator:
    """
    Evaluates one field against its rule.

    The evaluator holds no per-call state and can be shared across threads.
    """

    def evaluate(self, field_name: str, value: Any, rule: FieldRule) -> Any:
        """
        Resolve a field value.

        Args:
            field_name: Name of the field being evaluated
            value: Raw value from the record, or MISSING if the key is absent
            rule: The field's rule

        Returns:
            A ValidationError, MISSING (omit from output), None (allowed
            null) or the value to store

        Raises:
            Exception: Anything raised by the rule's custom validator
        """
        if rule.required and (value is MISSING or value is None):
            return self._error(
                field_name,
                f"Field '{field_name}' is required",
                ErrorCode.REQUIRED_FIELD_MISSING,
                value,
            )

        if value is None and rule.allow_null:
            return None

        if value is MISSING or value is None:
            return MISSING

        if rule.transform is not None:
            try:
                value = rule.transform(value)
            except Exception as e:
                return self._error(
                    field_name,
                    f"Failed to transform field '{field_name}': {e}",
                    ErrorCode.TRANSFORM_FAILED,
                    value,
                )

        if rule.type is not None:
            type_error = self._check_type(field_name, value, rule.type)
            if type_error is not None:
                return type_error

        if isinstance(value, str):
            string_error = self._check_string(field_name, value, rule)
            if string_error is not None:
                return string_error

        if _is_number(value):
            range_error = self._check_range(field_name, value, rule)
            if range_error is not None:
                return range_error

        if rule.custom is not None:
            outcome = rule.custom(value)
            if isinstance(outcome, ValidationError):
                if outcome.code is None:
                    return outcome.model_copy(update={"code": ErrorCode.CUSTOM_VALIDATION_FAILED})
                return outcome
            if isinstance(outcome, Mapping) and "field" in outcome:
                return ValidationError.from_mapping(outcome, ErrorCode.CUSTOM_VALIDATION_FAILED)
            value = outcome

        if rule.type == "number" and isinstance(value, str):
            number = parse_number(value)
            if number is not None:
                value = number

        return value

    def _check_type(self, field_name: str, value: Any, expected_type: str) -> ValidationError | None:
        actual_type = classify(value)

        # Numeric strings are converted after the custom validator runs
        if expected_type == "number" and isinstance(value, str) and parse_number(value) is not None:
            return None

        if actual_type != expected_type:
            return self._error(
                field_name,
                f"Field '{field_name}' must be of type {expected_type}, got {actual_type}",
                ErrorCode.TYPE_MISMATCH,
                value,
            )
        return None

    def _check_string(self, field_name: str, value: str, rule: FieldRule) -> ValidationError | None:
        if rule.min_length and len(value) < rule.min_length:
            return self._error(
                field_name,
                f"Field '{field_name}' must be at least {rule.min_length} characters long",
                ErrorCode.TOO_SHORT,
                value,
            )

        if rule.max_length and len(value) > rule.max_length:
            return self._error(
                field_name,
                f"Field '{field_name}' must be no more than {rule.max_length} characters long",
                ErrorCode.TOO_LONG,
                value,
            )

        if rule.pattern is not None and not rule.pattern.search(value):
            return self._error(
                field_name,
                f"Field '{field_name}' does not match required pattern",
                ErrorCode.PATTERN_MISMATCH,
                value,
            )
        return None

    def _check_range(self, field_name: str, value: int | float, rule: FieldRule) -> ValidationError | None:
        if rule.min is not None and value < rule.min:
            return self._error(
                field_name,
                f"Field '{field_name}' must be at least {rule.min}",
                ErrorCode.BELOW_MINIMUM,
                value,
            )

        if rule.max is not None and value > rule.max:
            return self._error(
                field_name,
                f"Field '{field_name}' must be no more than {rule.max}",
                ErrorCode.ABOVE_MAXIMUM,
                value,
            )
        return None

    @staticmethod
    def _error(field_name: str, message: str, code: ErrorCode, value: Any) -> ValidationError:
        if value is MISSING:
            return ValidationError(field=field_name, message=message, code=code)
        return ValidationError(field=field_name, message=message, value=value, code=code)
