"""Placeholder substitution for message templates.

Two placeholder forms are filled in one left-to-right pass:

    {name}          value of ``name`` from the variables mapping
    {@'expr'}       nested reference: ``expr`` (which may itself contain
                    {name} placeholders) is filled in to give a message id,
                    and that message is looked up and formatted

Unresolved placeholders stay in the text as-is, unless the caller supplied
a fallback string, which is then returned instead of a partial result.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from intlkit.core import DepthGuard
from intlkit.diagnostics import ErrorTemplate, ReferenceDepthError

if TYPE_CHECKING:
    from intlkit.types import MessageId, MessageVariables

__all__ = ["PLACEHOLDER_PATTERN", "ReferenceResolver", "substitute"]

logger = logging.getLogger(__name__)

# Group 1: placeholder body; group 2: nested reference expression (if any).
PLACEHOLDER_PATTERN: re.Pattern[str] = re.compile(r"\{(\w+|@'((?:[\w.]+|\{\w+\})+?)')\}")

type ReferenceResolver = Callable[[MessageId, DepthGuard], str]
"""Formats a referenced message; receives the caller's depth guard."""


def _needs_values(matches: list[re.Match[str]]) -> bool:
    return any(m.group(2) is None or "{" in m.group(2) for m in matches)


def substitute(
    template: str,
    values: MessageVariables | None,
    *,
    resolve_reference: ReferenceResolver | None = None,
    fallback: str | None = None,
    guard: DepthGuard | None = None,
) -> str:
    """Fill the placeholders of a template.

    Args:
        template: Message template
        values: Placeholder values; None or a non-mapping counts as no values
        resolve_reference: Formats the message named by a nested reference.
            Without it, nested references stay unresolved.
        fallback: Returned instead of a partially substituted string
        guard: Depth guard shared along one chain of nested references

    Returns:
        The substituted text, or the fallback

    Examples:
        >>> substitute("{user} assigned {assignee} a task", {"user": "Jack", "assignee": "Black"})
        'Jack assigned Black a task'
        >>> substitute("Hello {name}", {})
        'Hello {name}'
    """
    matches = list(PLACEHOLDER_PATTERN.finditer(template))
    if not matches:
        return template

    variables: Mapping[str, object] = values if isinstance(values, Mapping) else {}
    if not isinstance(values, Mapping) and _needs_values(matches):
        logger.warning("%s", ErrorTemplate.values_not_mapping(template, values))
        if fallback is not None:
            return fallback

    if guard is None:
        guard = DepthGuard()

    replacements: dict[str, str] = {}
    missing: list[str] = []
    for match in matches:
        placeholder, name, expression = match.group(0), match.group(1), match.group(2)
        if placeholder in replacements or placeholder in missing:
            continue
        value: object = None
        if expression is not None:
            value = _resolve_reference(expression, variables, resolve_reference, guard)
        else:
            value = variables.get(name)
        if value is None:
            missing.append(placeholder)
        else:
            replacements[placeholder] = str(value)

    if missing:
        logger.warning("%s", ErrorTemplate.variables_not_provided(template, missing))
        if fallback is not None:
            logger.warning("Using fallback: '%s'", fallback)
            return fallback

    return PLACEHOLDER_PATTERN.sub(lambda m: replacements.get(m.group(0), m.group(0)), template)


def _resolve_reference(
    expression: str,
    variables: Mapping[str, object],
    resolve_reference: ReferenceResolver | None,
    guard: DepthGuard,
) -> str | None:
    """Turn a nested reference expression into the referenced message's text."""
    def fill(match: re.Match[str]) -> str:
        value = variables.get(match.group(1))
        return match.group(0) if value is None else str(value)

    message_id = PLACEHOLDER_PATTERN.sub(fill, expression)
    if "{" in message_id:
        logger.warning("Nested reference '%s' has unresolved variables", expression)
        return None
    if resolve_reference is None:
        return None
    if guard.tripped:
        logger.debug("Not resolving '%s': reference depth already exceeded", message_id)
        return None
    try:
        with guard:
            return resolve_reference(message_id, guard)
    except ReferenceDepthError as e:
        logger.warning("Not resolving '%s': %s", message_id, e)
        return None
