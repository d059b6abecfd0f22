"""Restricted parsers for captured source fragments.

Exports:
    parse_descriptor: Descriptor object literal -> MessageDescriptor
    read_descriptor: Same, returning None on failure
    Cursor, ParseResult: Immutable parser infrastructure

Python 3.13+. Zero external dependencies.
"""

from .cursor import Cursor, ParseResult
from .descriptor import camel_case, normalize_placeholders, parse_descriptor, read_descriptor

__all__ = [
    "Cursor",
    "ParseResult",
    "camel_case",
    "normalize_placeholders",
    "parse_descriptor",
    "read_descriptor",
]
