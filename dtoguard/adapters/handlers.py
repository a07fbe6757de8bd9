"""
Transport-agnostic request handler adapters.

The adapters read the body from a request object, validate it, and either
call the wrapped handler with the normalized data or return an error
response as a (status_code, payload) tuple.
"""

import functools
from typing import Any, Callable

from dtoguard.core.models import Schema, ValidationResult
from dtoguard.core.rules import DTOValidator, normalize_schema
from dtoguard.observability.logger import get_logger
from dtoguard.observability.metrics import record_validation, track_duration

logger = get_logger(__name__)

VALIDATION_FAILED_STATUS = 400


def default_body_getter(request: Any) -> Any:
    """Return request.body, or None when the request has no body attribute."""
    return getattr(request, "body", None)


def error_response(result: ValidationResult) -> tuple[int, dict[str, Any]]:
    """
    Build the error response for a failed validation.

    Args:
        result: An unsuccessful ValidationResult

    Returns:
        (status_code, payload) tuple
    """
    return VALIDATION_FAILED_STATUS, {
        "error": "Validation failed",
        "details": [error.to_dict() for error in result.errors or []],
    }


def with_validation(
    schema: Schema,
    body_getter: Callable[[Any], Any] = default_body_getter,
    validator: DTOValidator | None = None,
):
    """
    Decorate a handler so it only runs with a valid request body.

    The handler is called as handler(request, data, *args, **kwargs).

    Args:
        schema: Ordered mapping of field name to rule
        body_getter: Extracts the record from the request
        validator: Validator to use (default: new DTOValidator)

    Returns:
        Handler decorator
    """
    rules = normalize_schema(schema)
    validator = validator or DTOValidator()

    def decorator(handler):
        source = handler.__name__

        @functools.wraps(handler)
        def wrapper(request, *args, **kwargs):
            with track_duration(source=source):
                result = validator.validate(body_getter(request), rules)
            record_validation(result, source=source)

            if not result.success:
                logger.info(
                    "Rejected request body",
                    extra={"handler": source, "error_count": len(result.errors)},
                )
                return error_response(result)

            return handler(request, result.data, *args, **kwargs)

        return wrapper

    return decorator


def validation_middleware(
    schema: Schema,
    body_getter: Callable[[Any], Any] = default_body_getter,
    validator: DTOValidator | None = None,
):
    """
    Build a middleware storing validated data on the request.

    The returned callable is middleware(request, next_handler): on success it
    sets request.validated_data and returns next_handler(request); on failure
    it returns error_response(result).

    Args:
        schema: Ordered mapping of field name to rule
        body_getter: Extracts the record from the request
        validator: Validator to use (default: new DTOValidator)

    Returns:
        Middleware callable
    """
    rules = normalize_schema(schema)
    validator = validator or DTOValidator()

    def middleware(request, next_handler):
        with track_duration(source="middleware"):
            result = validator.validate(body_getter(request), rules)
        record_validation(result, source="middleware")

        if not result.success:
            return error_response(result)

        request.validated_data = result.data
        return next_handler(request)

    return middleware
