"""Extraction rules: line-scoped patterns that find message usages.

A rule pairs a compiled pattern with the kind of its first capture group:

    object  the group is a descriptor literal, handed to the descriptor parser
    string  the group is the message id itself

An optional second group lists placeholder names passed at the call site
(``values={{ a, b }}``); it is recorded on the occurrence for reference only.

Patterns are applied to one line at a time, so usages spanning several
lines are not found.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from intlkit.diagnostics import ConfigurationError, ErrorTemplate

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "DEFAULT_RULES",
    "ExtractionRule",
    "RuleKind",
]


class RuleKind(StrEnum):
    """How the first capture group of a rule is interpreted."""

    OBJECT = "object"
    STRING = "string"


@dataclass(frozen=True, slots=True)
class ExtractionRule:
    """One scanning pattern.

    Attributes:
        pattern: Compiled pattern with at least one capture group
        kind: Interpretation of capture group 1
    """

    pattern: re.Pattern[str]
    kind: RuleKind

    def __post_init__(self) -> None:
        if self.pattern.groups < 1:
            msg = f"Extraction pattern needs a capture group: {self.pattern.pattern!r}"
            raise ValueError(msg)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> ExtractionRule:
        """Build a rule from ``{"regex": "...", "parser": "object" | "string"}``.

        Raises:
            ConfigurationError: If the entry is incomplete, the pattern does
                not compile, or the parser kind is unknown
        """
        regex, parser = data.get("regex"), data.get("parser", RuleKind.STRING.value)
        if not isinstance(regex, str) or not regex:
            raise ConfigurationError(
                ErrorTemplate.config_invalid_option("patterns", "'regex' must be a string"),
                option="patterns",
            )
        try:
            kind = RuleKind(parser)
        except ValueError:
            reason = f"unknown parser {parser!r} (expected 'object' or 'string')"
            raise ConfigurationError(
                ErrorTemplate.config_invalid_option("patterns", reason), option="patterns"
            ) from None
        try:
            return cls(re.compile(regex), kind)
        except (re.error, ValueError) as e:
            raise ConfigurationError(
                ErrorTemplate.config_invalid_option("patterns", f"{regex!r}: {e}"),
                option="patterns",
            ) from e

    def keys(self, match: re.Match[str]) -> tuple[str, ...] | None:
        """Names listed in the optional second capture group.

        Example:
            "{ count, total }" -> ("count", "total")
        """
        if self.pattern.groups < 2 or not match.group(2):
            return None
        body = match.group(2).strip().removeprefix("{").removesuffix("}")
        return tuple(part.split(":")[0].strip() for part in body.split(","))


DEFAULT_RULES: tuple[ExtractionRule, ...] = (
    # formatMessage({ id: '...', defaultMessage: '...' }, ...)
    ExtractionRule(re.compile(r"\bformatMessage\(\s*(\{[\s\S]+?\}(?=,|\)))"), RuleKind.OBJECT),
    # __({ id: '...', defaultMessage: '...' }, ...)
    ExtractionRule(re.compile(r"\b__\(\s*(\{[\s\S]+?\}(?=,|\)))"), RuleKind.OBJECT),
    # __('message.id')
    ExtractionRule(re.compile(r"\b__\(\s*'((?:[^'\\]|\\.)*)'\s*\)"), RuleKind.STRING),
    # <FormattedMessage id="message.id" values={{ a, b }} />
    ExtractionRule(
        re.compile(
            r"<FormattedMessage id=\"([^\"]+)\""
            r"(?:\s*values=\{\s*\{\s*([^\{]+)\s*\}\s*\})?\s*/>"
        ),
        RuleKind.STRING,
    ),
    # new Meteor.Error(403, 'message.id')
    ExtractionRule(re.compile(r"Meteor\.Error\(\d+,\s?'([\w\.]+)'.*\)"), RuleKind.STRING),
)
