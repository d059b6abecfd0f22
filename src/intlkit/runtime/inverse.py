"""Recover variable values from already-formatted text.

The inverse of simple ``{name}`` substitution: the template is cut into
literal segments around its placeholders, and the formatted text is walked
segment by segment. Whatever lies before the next segment is the value of
the pending placeholder.

The match is linear and greedy-from-the-left: when a literal segment also
occurs inside a value, the value is cut short. Results are all-or-nothing;
if the number of recovered values differs from the number of placeholders,
nothing is returned.

Python 3.13+. Zero external dependencies.
"""

import re

__all__ = ["extract_variables"]

_SIMPLE_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def extract_variables(template: str, text: str) -> dict[str, str]:
    """Extract placeholder values from formatted text.

    Args:
        template: Template the text was formatted from
        text: Formatted text

    Returns:
        Placeholder name -> value, or an empty dict when the text cannot be
        matched unambiguously

    Examples:
        >>> extract_variables("Hello {name}!", "Hello Jack!")
        {'name': 'Jack'}
        >>> extract_variables("{user} assigned {assignee} a task", "Jack assigned Black a task")
        {'user': 'Jack', 'assignee': 'Black'}
        >>> extract_variables("Hello {name}!", "Goodbye Jack!")
        {}
    """
    names = _SIMPLE_PLACEHOLDER.findall(template)
    if not names:
        return {}
    # split() with a capturing group interleaves names; keep the literals
    segments = _SIMPLE_PLACEHOLDER.split(template)[::2]

    found: list[str] = []
    rest = text
    last = len(segments) - 1
    for index, segment in enumerate(segments):
        if segment:
            pos = rest.find(segment)
        else:
            # An empty trailing segment owns the rest of the text; any other
            # empty segment sits right here
            pos = len(rest) if index == last else 0
        if pos < 0:
            break
        if pos > 0:
            found.append(rest[:pos])
        rest = rest[pos + len(segment) :]

    if len(found) != len(names):
        return {}
    return dict(zip(names, found, strict=True))
