"""ICU-style message formatting step backed by Babel.

Runs after placeholder substitution and handles the constructs the
substitution engine leaves alone: plural, selectordinal, select and number
arguments, plus ICU apostrophe quoting.

Supported syntax:
    {name}                                  value as text
    {name, number}                          locale decimal format
    {name, number, integer|percent|<pattern>}
    {name, plural, [offset:N] =0 {..} one {..} other {..}}   '#' = value - offset
    {name, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}
    {name, select, male {..} female {..} other {..}}
    ''  -> '        '{literal}' -> {literal}

Plural categories come from CLDR via ``babel.Locale.plural_form`` /
``ordinal_form``; numbers via ``babel.numbers``. Unknown locales format with
English rules.

Python 3.13+. Depends on Babel for CLDR data.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import TYPE_CHECKING

from babel.numbers import format_decimal, format_percent

from intlkit.diagnostics import ErrorTemplate, IcuFormatError
from intlkit.locale_utils import resolve_babel_locale
from intlkit.syntax.cursor import Cursor, ParseResult

if TYPE_CHECKING:
    from babel import Locale

    from intlkit.types import LocaleCode, VariableValue

__all__ = [
    "ArgumentKind",
    "IcuArgument",
    "IcuChoice",
    "IcuPound",
    "IcuText",
    "format_icu",
    "parse_icu",
]

# Nested plural/select bodies deeper than this are rejected.
_MAX_NESTING: int = 20

# Characters that end an argument name.
_NAME_TERMINATORS = frozenset(" \t\n\r,{}")


class ArgumentKind(StrEnum):
    """Kind of ICU argument."""

    SIMPLE = "simple"
    NUMBER = "number"
    PLURAL = "plural"
    SELECTORDINAL = "selectordinal"
    SELECT = "select"


@dataclass(frozen=True, slots=True)
class IcuText:
    """Literal text."""

    value: str


@dataclass(frozen=True, slots=True)
class IcuPound:
    """'#' inside a plural body."""


@dataclass(frozen=True, slots=True)
class IcuArgument:
    """{name} or {name, number[, style]}."""

    name: str
    kind: ArgumentKind = ArgumentKind.SIMPLE
    style: str | None = None


@dataclass(frozen=True, slots=True)
class IcuChoice:
    """plural, selectordinal or select argument with its option bodies."""

    name: str
    kind: ArgumentKind
    options: tuple[tuple[str, tuple[IcuNode, ...]], ...]
    offset: int = 0

    def option(self, key: str) -> tuple[IcuNode, ...] | None:
        """Body for a selector key, or None."""
        for selector, body in self.options:
            if selector == key:
                return body
        return None


type IcuNode = IcuText | IcuPound | IcuArgument | IcuChoice


def _error(reason: str, cursor: Cursor) -> IcuFormatError:
    return IcuFormatError(ErrorTemplate.icu_syntax_error(reason, cursor.pos), position=cursor.pos)


# ============================================================================
# PARSER
# ============================================================================


def _parse_quoted(cursor: Cursor, chars: list[str]) -> Cursor:
    """Consume a quoted literal; cursor is on the opening apostrophe."""
    cursor = cursor.advance()
    while not cursor.is_eof:
        if cursor.current == "'":
            if cursor.peek(1) == "'":
                chars.append("'")
                cursor = cursor.advance(2)
                continue
            return cursor.advance()
        chars.append(cursor.current)
        cursor = cursor.advance()
    # Unterminated quote: the rest of the message is literal
    return cursor


def _parse_message(cursor: Cursor, *, in_plural: bool, depth: int) -> ParseResult[tuple[IcuNode, ...]]:
    """Parse text and arguments up to an unmatched '}' or end of input."""
    if depth > _MAX_NESTING:
        raise _error("message nesting too deep", cursor)
    nodes: list[IcuNode] = []
    chars: list[str] = []

    def flush() -> None:
        if chars:
            nodes.append(IcuText("".join(chars)))
            chars.clear()

    while not cursor.is_eof:
        ch = cursor.current
        if ch == "{":
            flush()
            argument = _parse_argument(cursor, in_plural=in_plural, depth=depth)
            nodes.append(argument.value)
            cursor = argument.cursor
        elif ch == "}":
            break
        elif ch == "#" and in_plural:
            flush()
            nodes.append(IcuPound())
            cursor = cursor.advance()
        elif ch == "'":
            following = cursor.peek(1)
            if following == "'":
                chars.append("'")
                cursor = cursor.advance(2)
            elif following in ("{", "}", "|") or (in_plural and following == "#"):
                cursor = _parse_quoted(cursor, chars)
            else:
                chars.append("'")
                cursor = cursor.advance()
        else:
            chars.append(ch)
            cursor = cursor.advance()
    flush()
    return ParseResult(tuple(nodes), cursor)


def _parse_word(cursor: Cursor) -> ParseResult[str]:
    start = cursor
    while not cursor.is_eof and cursor.current not in _NAME_TERMINATORS:
        cursor = cursor.advance()
    return ParseResult(start.slice_to(cursor.pos), cursor)


def _parse_argument(cursor: Cursor, *, in_plural: bool, depth: int) -> ParseResult[IcuNode]:
    """Parse an argument; cursor is on its opening brace."""
    opening = cursor
    name = _parse_word(cursor.advance().skip_whitespace())
    if not name.value:
        raise _error("expected argument name", name.cursor)
    cursor = name.cursor.skip_whitespace()
    if cursor.expect("}") is not None:
        return ParseResult(IcuArgument(name.value), cursor.advance())
    if cursor.expect(",") is None:
        raise _error("expected ',' or '}' after argument name", cursor)

    kind_word = _parse_word(cursor.advance().skip_whitespace())
    cursor = kind_word.cursor.skip_whitespace()
    try:
        kind = ArgumentKind(kind_word.value)
    except ValueError:
        raise _error(f"unsupported argument type '{kind_word.value}'", kind_word.cursor) from None

    match kind:
        case ArgumentKind.NUMBER:
            return _parse_number_argument(name.value, cursor)
        case ArgumentKind.PLURAL | ArgumentKind.SELECTORDINAL | ArgumentKind.SELECT:
            if cursor.expect(",") is None:
                raise _error(f"expected ',' after '{kind}'", cursor)
            return _parse_choice(
                name.value, kind, cursor.advance(), in_plural=in_plural, depth=depth
            )
        case _:
            raise _error(f"argument type '{kind}' takes no arguments", opening)


def _parse_number_argument(name: str, cursor: Cursor) -> ParseResult[IcuNode]:
    if cursor.expect("}") is not None:
        return ParseResult(IcuArgument(name, ArgumentKind.NUMBER), cursor.advance())
    if cursor.expect(",") is None:
        raise _error("expected ',' or '}' after 'number'", cursor)
    start = cursor.advance()
    end = start
    while not end.is_eof and end.current != "}":
        end = end.advance()
    if end.is_eof:
        raise _error("unterminated number argument", end)
    style = start.slice_to(end.pos).strip()
    return ParseResult(IcuArgument(name, ArgumentKind.NUMBER, style or None), end.advance())


def _parse_choice(
    name: str, kind: ArgumentKind, cursor: Cursor, *, in_plural: bool, depth: int
) -> ParseResult[IcuNode]:
    """Parse the option list of a plural/selectordinal/select argument."""
    offset = 0
    cursor = cursor.skip_whitespace()
    if kind is not ArgumentKind.SELECT and cursor.slice_to(cursor.pos + 7) == "offset:":
        digits = _parse_word(cursor.advance(7).skip_whitespace())
        if not digits.value.isdigit():
            raise _error("offset must be a non-negative integer", digits.cursor)
        offset = int(digits.value)
        cursor = digits.cursor

    options: list[tuple[str, tuple[IcuNode, ...]]] = []
    seen: set[str] = set()
    while True:
        cursor = cursor.skip_whitespace()
        if cursor.is_eof:
            raise _error(f"unterminated {kind} argument", cursor)
        if cursor.current == "}":
            cursor = cursor.advance()
            break
        selector = _parse_word(cursor)
        if not selector.value:
            raise _error("expected option selector", cursor)
        if selector.value in seen:
            raise _error(f"duplicate option '{selector.value}'", cursor)
        seen.add(selector.value)
        cursor = selector.cursor.skip_whitespace()
        if cursor.expect("{") is None:
            raise _error(f"expected '{{' after option '{selector.value}'", cursor)
        body = _parse_message(
            cursor.advance(),
            in_plural=in_plural or kind is not ArgumentKind.SELECT,
            depth=depth + 1,
        )
        cursor = body.cursor
        if cursor.expect("}") is None:
            raise _error(f"unterminated option '{selector.value}'", cursor)
        cursor = cursor.advance()
        options.append((selector.value, body.value))

    if "other" not in seen:
        raise _error(f"{kind} argument '{name}' requires an 'other' option", cursor)
    return ParseResult(IcuChoice(name, kind, tuple(options), offset), cursor)


@functools.lru_cache(maxsize=256)
def parse_icu(source: str) -> tuple[IcuNode, ...]:
    """Parse an ICU message into nodes.

    Raises:
        IcuFormatError: On syntax errors
    """
    result = _parse_message(Cursor(source, 0), in_plural=False, depth=0)
    if not result.cursor.is_eof:
        raise _error("unmatched '}'", result.cursor)
    return result.value


# ============================================================================
# FORMATTER
# ============================================================================


def _as_number(name: str, value: VariableValue) -> int | float | Decimal:
    if isinstance(value, bool):
        msg = f"argument '{name}' must be a number, got bool"
        raise IcuFormatError(ErrorTemplate.icu_syntax_error(msg, 0))
    if isinstance(value, int | float | Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        msg = f"argument '{name}' must be a number, got {value!r}"
        raise IcuFormatError(ErrorTemplate.icu_syntax_error(msg, 0)) from None


def _format_number(number: int | float | Decimal, style: str | None, locale: Locale) -> str:
    match style:
        case None:
            return format_decimal(number, locale=locale)
        case "integer":
            return format_decimal(number, format="#,##0", locale=locale)
        case "percent":
            return format_percent(number, locale=locale)
        case _:
            return format_decimal(number, format=style, locale=locale)


def _matches_exact(selector: str, number: int | float | Decimal) -> bool:
    try:
        return Decimal(selector[1:]) == Decimal(str(number))
    except InvalidOperation:
        return False


def _select_body(
    choice: IcuChoice, value: VariableValue, locale: Locale
) -> tuple[tuple[IcuNode, ...], int | float | Decimal | None]:
    if choice.kind is ArgumentKind.SELECT:
        body = choice.option(str(value)) or choice.option("other")
        return body or (), None

    number = _as_number(choice.name, value)
    for selector, body in choice.options:
        if selector.startswith("=") and _matches_exact(selector, number):
            return body, number - choice.offset
    adjusted = number - choice.offset
    if choice.kind is ArgumentKind.SELECTORDINAL:
        category = locale.ordinal_form(adjusted)
    else:
        category = locale.plural_form(adjusted)
    body = choice.option(category) or choice.option("other")
    return body or (), adjusted


def _format_nodes(
    nodes: tuple[IcuNode, ...],
    values: Mapping[str, VariableValue],
    locale: Locale,
    pound: int | float | Decimal | None,
) -> str:
    parts: list[str] = []
    for node in nodes:
        match node:
            case IcuText(value=text):
                parts.append(text)
            case IcuPound():
                parts.append("#" if pound is None else _format_number(pound, None, locale))
            case IcuArgument(name=name, kind=kind, style=style):
                if name not in values:
                    raise IcuFormatError(ErrorTemplate.icu_argument_missing(name))
                value = values[name]
                if kind is ArgumentKind.NUMBER:
                    parts.append(_format_number(_as_number(name, value), style, locale))
                elif isinstance(value, int | float | Decimal) and not isinstance(value, bool):
                    parts.append(_format_number(value, None, locale))
                else:
                    parts.append(str(value))
            case IcuChoice(name=name) as choice:
                if name not in values:
                    raise IcuFormatError(ErrorTemplate.icu_argument_missing(name))
                body, inner_pound = _select_body(choice, values[name], locale)
                next_pound = pound if choice.kind is ArgumentKind.SELECT else inner_pound
                parts.append(_format_nodes(body, values, locale, next_pound))
    return "".join(parts)


def format_icu(
    source: str, values: Mapping[str, VariableValue] | None, locale: LocaleCode
) -> str:
    """Format an ICU message.

    Args:
        source: Message text, typically after placeholder substitution
        values: Argument values
        locale: Locale code selecting plural rules and number symbols

    Returns:
        Formatted text

    Raises:
        IcuFormatError: On syntax errors or arguments missing from values

    Examples:
        >>> format_icu("{n, plural, one {# file} other {# files}}", {"n": 3}, "en")
        '3 files'
        >>> format_icu("It''s {n, number, percent}", {"n": 0.5}, "en")
        "It's 50%"
    """
    if "{" not in source and "}" not in source and "'" not in source:
        return source
    nodes = parse_icu(source)
    return _format_nodes(nodes, values or {}, resolve_babel_locale(locale), None)
