"""TemplateStore - the runtime translation corpus.

Holds one dictionary per locale and answers ``lookup(id, locale)``. Locale
selection is exact match on the configured codes; "fr-CA" never falls back
to "fr" here. A miss is reported as None so callers can apply their own
fallback chain.

The store copies the configuration it is given. Gap filling happens once,
at construction; afterwards the store is read-only and safe to share
between threads.

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from intlkit.constants import DEFAULT_LANGUAGE, LANGUAGE_NAME_ID
from intlkit.loading import read_dictionary
from intlkit.types import LanguageListItem

if TYPE_CHECKING:
    from collections.abc import Mapping

    from intlkit.types import LocaleCode, LocaleConfig, MessageDictionary, MessageId

__all__ = ["TemplateStore"]

logger = logging.getLogger(__name__)


class TemplateStore:
    """Locale code -> message id -> template string.

    Examples:
        >>> store = TemplateStore({"en": {"hello": "Hello"}, "fr": {"hello": ""}})
        >>> store.lookup("hello", "en")
        'Hello'
        >>> store.lookup("hello", "fr")
        '[en]Hello'
        >>> store.lookup("hello", "de") is None
        True
    """

    __slots__ = ("_default_language", "_locales")

    def __init__(
        self,
        locales: LocaleConfig,
        /,
        *,
        default_language: LocaleCode = DEFAULT_LANGUAGE,
        fill_gaps: bool = True,
    ) -> None:
        """Initialize store from a locale configuration.

        Args:
            locales: Locale code -> dictionary [positional-only]
            default_language: Locale whose templates fill gaps in the others
            fill_gaps: Replace empty templates in non-default locales with the
                default language's template prefixed by "[<default_language>]"
        """
        self._default_language = default_language
        self._locales: dict[LocaleCode, MessageDictionary] = {
            code: dict(messages) for code, messages in locales.items()
        }
        if fill_gaps:
            self._fill_gaps()
        logger.debug(
            "TemplateStore initialized with locales: %s", ", ".join(self._locales) or "(none)"
        )

    @classmethod
    def from_directory(
        cls,
        locales_dir: str | Path,
        /,
        *,
        default_language: LocaleCode = DEFAULT_LANGUAGE,
        fill_gaps: bool = True,
    ) -> TemplateStore:
        """Load every ``<code>.json`` dictionary in a directory.

        Raises:
            FileNotFoundError: If locales_dir does not exist
            DictionaryLoadError: If a dictionary file is malformed
        """
        directory = Path(locales_dir)
        if not directory.is_dir():
            msg = f"Locales directory not found: {directory}"
            raise FileNotFoundError(msg)
        locales = {path.stem: read_dictionary(path) for path in sorted(directory.glob("*.json"))}
        return cls(locales, default_language=default_language, fill_gaps=fill_gaps)

    def _fill_gaps(self) -> None:
        default = self._locales.get(self._default_language, {})
        for code, messages in self._locales.items():
            if code == self._default_language:
                continue
            for message_id, template in messages.items():
                if not template and default.get(message_id):
                    messages[message_id] = f"[{self._default_language}]{default[message_id]}"

    @property
    def default_language(self) -> LocaleCode:
        """Locale used when a call does not name one (read-only)."""
        return self._default_language

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Configured locale codes in configuration order."""
        return tuple(self._locales)

    def has_locale(self, locale: LocaleCode) -> bool:
        """Check whether a dictionary exists for the exact locale code."""
        return locale in self._locales

    def messages(self, locale: LocaleCode) -> Mapping[MessageId, str] | None:
        """Read-only view of one locale's dictionary, or None if absent."""
        messages = self._locales.get(locale)
        if messages is None:
            return None
        return MappingProxyType(messages)

    def lookup(self, message_id: MessageId, locale: LocaleCode) -> str | None:
        """Get a message template.

        Args:
            message_id: Message id
            locale: Exact locale code

        Returns:
            The template, or None when the locale or the id is absent.
            An empty template is returned as-is; callers treat it as a miss.
        """
        messages = self._locales.get(locale)
        if messages is None:
            return None
        return messages.get(message_id)

    def native_names(self) -> dict[LocaleCode, str | None]:
        """Locale code -> the locale's name in its own language."""
        return {code: messages.get(LANGUAGE_NAME_ID) for code, messages in self._locales.items()}

    def language_list(self) -> list[LanguageListItem]:
        """Locales with display names, falling back to the code itself."""
        return [
            LanguageListItem(code, messages.get(LANGUAGE_NAME_ID) or code)
            for code, messages in self._locales.items()
        ]
