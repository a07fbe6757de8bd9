"""
Field-level evaluation and bundled custom validators.

Provides the fixed-order field evaluator plus convenience validators for
emails, phone numbers, URLs, enumerations and list sizes.
"""

from .common import COMMON_RULES, email, max_items, min_items, one_of, phone, url
from .field_evaluator import MISSING, FieldEvaluator, classify, parse_number

__all__ = [
    "FieldEvaluator",
    "MISSING",
    "classify",
    "parse_number",
    "COMMON_RULES",
    "email",
    "phone",
    "url",
    "one_of",
    "min_items",
    "max_items",
]
