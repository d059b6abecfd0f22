"""Types shared by the runtime and extraction layers.

Provides semantic type aliases and the MessageDescriptor record used by
formatting calls and produced by source extraction.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from dataclasses import dataclass

__all__ = [
    "LanguageListItem",
    "LocaleCode",
    "LocaleConfig",
    "MessageDescriptor",
    "MessageDictionary",
    "MessageId",
    "MessageVariables",
    "VariableValue",
]

type MessageId = str
"""Stable cross-locale message key (e.g., 'user.status.ok')."""

type LocaleCode = str
"""Locale code exactly as used for dictionary file names (e.g., 'en', 'zh-cn')."""

type MessageDictionary = dict[MessageId, str]
"""Message id -> template string, for one locale."""

type LocaleConfig = Mapping[LocaleCode, Mapping[MessageId, str]]
"""Locale code -> dictionary: the whole translation corpus."""

type VariableValue = str | int | float
"""Primitive value substituted for a placeholder."""

type MessageVariables = Mapping[str, VariableValue]
"""Placeholder name -> value, supplied per formatting call."""


@dataclass(frozen=True, slots=True)
class MessageDescriptor:
    """Identifies a message and optionally carries its author-supplied text.

    Attributes:
        id: Message id
        default_message: Text used when no dictionary has the id
    """

    id: MessageId
    default_message: str | None = None

    @classmethod
    def coerce(cls, desc: "MessageDescriptor | str") -> "MessageDescriptor":
        """Accept a descriptor or a bare message id.

        Raises:
            TypeError: If desc is neither a descriptor nor a string
            ValueError: If the id is empty
        """
        if isinstance(desc, str):
            desc = cls(desc)
        elif not isinstance(desc, MessageDescriptor):
            msg = f"Invalid message descriptor: {desc!r}"
            raise TypeError(msg)
        if not desc.id:
            msg = "Invalid message descriptor: empty id"
            raise ValueError(msg)
        return desc


@dataclass(frozen=True, slots=True)
class LanguageListItem:
    """Locale code paired with the locale's name in its own language."""

    lang: LocaleCode
    name: str
