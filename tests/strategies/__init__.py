"""Hypothesis strategies for intlkit property-based testing.

Usage:
    from tests.strategies import substitution_cases, message_ids
    from tests.strategies.messages import LITERAL_CHARS, VALUE_CHARS
"""

from .messages import (
    LITERAL_CHARS,
    VALUE_CHARS,
    dictionaries,
    message_ids,
    placeholder_names,
    substitution_cases,
)

__all__ = [
    "LITERAL_CHARS",
    "VALUE_CHARS",
    "dictionaries",
    "message_ids",
    "placeholder_names",
    "substitution_cases",
]
