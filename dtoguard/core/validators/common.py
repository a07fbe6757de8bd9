"""
Bundled custom validators and ready-made field rules.

Each validator takes the field value and returns it unchanged on success,
or a ValidationError describing the failure. Use them as FieldRule.custom.
"""

import re
from typing import Any, Callable, Iterable
from urllib.parse import urlparse

from dtoguard.core.models import FieldRule, ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[0-9+\-\s()]+$")
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")

# Schemes that cannot be parsed without a host.
HOST_REQUIRED_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})
FORBIDDEN_HOST_CHARS = frozenset(" #%/<>?@[\\]^|")


def email(value: Any) -> Any:
    """Accept strings shaped like local@domain.tld."""
    if not isinstance(value, str) or not EMAIL_PATTERN.search(value):
        return ValidationError(field="email", message="Invalid email format", value=value)
    return value


def phone(value: Any) -> Any:
    """Accept digits, spaces, and the characters + - ( )."""
    if not isinstance(value, str) or not PHONE_PATTERN.search(value):
        return ValidationError(field="phone", message="Invalid phone number format", value=value)
    return value


def _is_valid_url(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in value):
        return False

    try:
        parsed = urlparse(value)
        parsed.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError:
        return False

    if not parsed.scheme:
        return False
    if parsed.scheme.lower() in HOST_REQUIRED_SCHEMES and not parsed.hostname:
        return False
    if parsed.netloc:
        bracketed = parsed.netloc.rpartition("@")[2].startswith("[")
        if not bracketed and FORBIDDEN_HOST_CHARS.intersection(parsed.hostname or ""):
            return False
    return bool(parsed.netloc or parsed.path)


def url(value: Any) -> Any:
    """Accept absolute URLs with a scheme and a well-formed host (or a path for file: URLs)."""
    if not _is_valid_url(value):
        return ValidationError(field="url", message="Invalid URL format", value=value)
    return value


def one_of(allowed_values: Iterable[Any]) -> Callable[[Any], Any]:
    """Build a validator accepting only the given values."""
    allowed = list(allowed_values)

    def validator(value: Any) -> Any:
        if value not in allowed:
            return ValidationError(
                field="oneOf",
                message=f"Value must be one of: {', '.join(str(v) for v in allowed)}",
                value=value,
            )
        return value

    return validator


def min_items(minimum: int) -> Callable[[Any], Any]:
    """Build a validator requiring a list with at least `minimum` items."""

    def validator(value: Any) -> Any:
        if not isinstance(value, list | tuple) or len(value) < minimum:
            return ValidationError(
                field="minItems",
                message=f"Array must have at least {minimum} items",
                value=value,
            )
        return value

    return validator


def max_items(maximum: int) -> Callable[[Any], Any]:
    """Build a validator requiring a list with at most `maximum` items."""

    def validator(value: Any) -> Any:
        if not isinstance(value, list | tuple) or len(value) > maximum:
            return ValidationError(
                field="maxItems",
                message=f"Array must have no more than {maximum} items",
                value=value,
            )
        return value

    return validator


COMMON_RULES: dict[str, FieldRule] = {
    "email": FieldRule(required=True, type="string", custom=email),
    "password": FieldRule(required=True, type="string", min_length=8, pattern=PASSWORD_PATTERN),
    "phone": FieldRule(required=False, type="string", custom=phone),
    "age": FieldRule(required=True, type="number", min=0, max=120),
}
