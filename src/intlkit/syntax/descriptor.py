"""Restricted parser for message descriptor literals.

Extraction rules capture object-literal fragments such as::

    { id: 'user.greeting', defaultMessage: "Hello {user_name}" }

This module turns such a fragment into a MessageDescriptor WITHOUT executing
it. The grammar accepted is deliberately small:

    object   := '{' (property (',' property)* ','?)? '}'
    property := key ':' value
    key      := identifier | string
    value    := string ('+' string)* | number | 'true' | 'false' | 'null'
    string   := '...' | "..." | `...`

Only the ``id`` and ``defaultMessage`` keys are kept. Other keys are
accepted when their value is a literal and then ignored; anything else
(variables, calls, nested objects) rejects the whole fragment.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re

from intlkit.constants import MESSAGE_ID_PATTERN
from intlkit.diagnostics import DescriptorParseError, ErrorTemplate
from intlkit.syntax.cursor import Cursor, ParseResult
from intlkit.types import MessageDescriptor

__all__ = [
    "camel_case",
    "normalize_placeholders",
    "parse_descriptor",
    "read_descriptor",
]

_QUOTES = frozenset("'\"`")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Literal values accepted for ignored keys.
_KEYWORDS = ("true", "false", "null")

# Simple {name} placeholders in a default message. ICU sub-messages
# ("{# items}") and argument forms ("{count, plural, ...}") do not match.
_PLACEHOLDER_PATTERN = re.compile(r"\{\s*([A-Za-z_$][\w\-$]*)\s*\}")

# Word splitting for camel-casing: acronyms, capitalized words, lower runs, digits.
_WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


def camel_case(text: str) -> str:
    """Convert a name to lower camel case.

    Example:
        >>> camel_case("user_name")
        'userName'
        >>> camel_case("First-Name")
        'firstName'
        >>> camel_case("HTTPStatus")
        'httpStatus'
    """
    words = _WORD_PATTERN.findall(text)
    if not words:
        return text
    head, *tail = words
    return head.lower() + "".join(word.capitalize() for word in tail)


def normalize_placeholders(message: str) -> str:
    """Rewrite every simple ``{name}`` placeholder to its camel-case name."""
    return _PLACEHOLDER_PATTERN.sub(lambda m: "{" + camel_case(m.group(1)) + "}", message)


def _fail(reason: str, cursor: Cursor) -> DescriptorParseError:
    return DescriptorParseError(
        ErrorTemplate.descriptor_invalid(reason, cursor.pos), position=cursor.pos
    )


def _parse_escape(cursor: Cursor) -> ParseResult[str]:
    """Parse the character(s) after a backslash, JavaScript-style."""
    if cursor.is_eof:
        raise _fail("unterminated escape sequence", cursor)
    ch = cursor.current
    if ch in _SIMPLE_ESCAPES:
        return ParseResult(_SIMPLE_ESCAPES[ch], cursor.advance())
    if ch in ("u", "x"):
        width = 4 if ch == "u" else 2
        digits = cursor.advance().slice_to(cursor.pos + 1 + width)
        if len(digits) != width or not all(d in _HEX_DIGITS for d in digits):
            raise _fail(f"invalid \\{ch} escape", cursor)
        return ParseResult(chr(int(digits, 16)), cursor.advance(1 + width))
    # Any other escaped character stands for itself (\' \" \\ \`)
    return ParseResult(ch, cursor.advance())


def _parse_string(cursor: Cursor) -> ParseResult[str]:
    """Parse a quoted string literal.

    In backtick strings, ``${expr}`` interpolation is flattened to ``{expr}``
    so that template literals yield placeholder syntax.
    """
    quote = cursor.current
    cursor = cursor.advance()
    chars: list[str] = []
    while not cursor.is_eof:
        ch = cursor.current
        if ch == quote:
            return ParseResult("".join(chars), cursor.advance())
        if ch == "\\":
            escaped = _parse_escape(cursor.advance())
            chars.append(escaped.value)
            cursor = escaped.cursor
            continue
        if quote == "`" and ch == "$" and cursor.peek(1) == "{":
            cursor = cursor.advance()
            continue
        if ch == "\n" and quote != "`":
            raise _fail("line break in string literal", cursor)
        chars.append(ch)
        cursor = cursor.advance()
    raise _fail("unterminated string literal", cursor)


def _parse_identifier(cursor: Cursor) -> ParseResult[str]:
    start = cursor
    while not cursor.is_eof and (cursor.current.isalnum() or cursor.current in "_$"):
        cursor = cursor.advance()
    if cursor.pos == start.pos or start.current.isdigit():
        raise _fail("expected property name", start)
    return ParseResult(start.slice_to(cursor.pos), cursor)


def _parse_key(cursor: Cursor) -> ParseResult[str]:
    if cursor.current in _QUOTES:
        return _parse_string(cursor)
    return _parse_identifier(cursor)


def _parse_number(cursor: Cursor) -> ParseResult[float]:
    start = cursor
    if cursor.current in "+-":
        cursor = cursor.advance()
    while not cursor.is_eof and (cursor.current.isdigit() or cursor.current == "."):
        cursor = cursor.advance()
    text = start.slice_to(cursor.pos)
    try:
        return ParseResult(float(text), cursor)
    except ValueError:
        raise _fail(f"invalid number literal {text!r}", start) from None


def _parse_value(cursor: Cursor) -> ParseResult[str | float | bool | None]:
    """Parse a literal value; string literals may be joined with '+'."""
    if cursor.is_eof:
        raise _fail("expected value", cursor)
    ch = cursor.current
    if ch in _QUOTES:
        parts: list[str] = []
        while True:
            result = _parse_string(cursor)
            parts.append(result.value)
            after = result.cursor.skip_whitespace()
            if after.is_eof or after.current != "+":
                return ParseResult("".join(parts), result.cursor)
            cursor = after.advance().skip_whitespace()
            if cursor.is_eof or cursor.current not in _QUOTES:
                raise _fail("only string literals may be concatenated", cursor)
    if ch.isdigit() or ch in "+-.":
        return _parse_number(cursor)
    for keyword in _KEYWORDS:
        if cursor.slice_to(cursor.pos + len(keyword)) == keyword:
            end = cursor.advance(len(keyword))
            if end.is_eof or not (end.current.isalnum() or end.current in "_$"):
                value = {"true": True, "false": False, "null": None}[keyword]
                return ParseResult(value, end)
    raise _fail("value is not a literal", cursor)


def _parse_object(cursor: Cursor) -> dict[str, str | float | bool | None]:
    if cursor.expect("{") is None:
        raise _fail("expected '{'", cursor)
    cursor = cursor.advance().skip_whitespace()
    properties: dict[str, str | float | bool | None] = {}
    while not cursor.is_eof and cursor.current != "}":
        key = _parse_key(cursor)
        cursor = key.cursor.skip_whitespace()
        if cursor.expect(":") is None:
            raise _fail(f"expected ':' after '{key.value}'", cursor)
        value = _parse_value(cursor.advance().skip_whitespace())
        properties[key.value] = value.value
        cursor = value.cursor.skip_whitespace()
        if cursor.expect(",") is not None:
            cursor = cursor.advance().skip_whitespace()
        elif cursor.is_eof or cursor.current != "}":
            raise _fail("expected ',' or '}'", cursor)
    if cursor.expect("}") is None:
        raise _fail("unterminated object literal", cursor)
    trailing = cursor.advance().skip_whitespace()
    if not trailing.is_eof:
        raise _fail("unexpected text after object literal", trailing)
    return properties


def parse_descriptor(fragment: str) -> MessageDescriptor:
    """Parse a descriptor object literal.

    Args:
        fragment: Text captured by an object-kind extraction rule

    Returns:
        MessageDescriptor with the placeholder names of its default message
        normalized to lower camel case

    Raises:
        DescriptorParseError: If the fragment is outside the grammar, has no
            string id, or its id contains characters outside [a-zA-Z_.-]

    Example:
        >>> parse_descriptor("{ id: 'a.b', defaultMessage: 'Hi {user_name}' }")
        MessageDescriptor(id='a.b', default_message='Hi {userName}')
    """
    properties = _parse_object(Cursor(fragment, 0).skip_whitespace())

    message_id = properties.get("id")
    if not isinstance(message_id, str) or not message_id:
        msg = "descriptor has no string 'id'"
        raise DescriptorParseError(ErrorTemplate.descriptor_invalid(msg, 0))
    if not MESSAGE_ID_PATTERN.fullmatch(message_id):
        raise DescriptorParseError(ErrorTemplate.descriptor_id_invalid(message_id))

    default_message = properties.get("defaultMessage")
    if default_message is not None and not isinstance(default_message, str):
        msg = "'defaultMessage' must be a string"
        raise DescriptorParseError(ErrorTemplate.descriptor_invalid(msg, 0))
    if default_message:
        default_message = normalize_placeholders(default_message)

    return MessageDescriptor(message_id, default_message or None)


def read_descriptor(fragment: str) -> MessageDescriptor | None:
    """Parse a descriptor, returning None instead of raising."""
    try:
        return parse_descriptor(fragment)
    except DescriptorParseError:
        return None
