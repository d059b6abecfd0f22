"""Intl - runtime formatting entry points.

Combines the template store, placeholder substitution, the ICU formatting
step and the inverse parser behind the calls an application makes:

    intl = Intl(TemplateStore.from_directory("locales"))
    intl.format("task.assigned", {"user": "Jack"}, "fr")
    intl.for_locale("fr").format("task.assigned", {"user": "Jack"})

There is no process-wide "current language". Every call names its locale,
either directly or through an IntlContext bound to one locale, so several
locales can be served side by side (one context per request).

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING

from babel.dates import format_date as babel_format_date
from babel.dates import format_time as babel_format_time
from babel.dates import format_timedelta

from intlkit.constants import DEFAULT_LANGUAGE, LANGUAGE_NAME_ID, MAX_REFERENCE_DEPTH
from intlkit.core import DepthGuard
from intlkit.diagnostics import ErrorTemplate, IcuFormatError
from intlkit.locale_utils import resolve_babel_locale
from intlkit.runtime.icu import format_icu
from intlkit.runtime.inverse import extract_variables
from intlkit.runtime.store import TemplateStore
from intlkit.runtime.substitution import substitute
from intlkit.types import MessageDescriptor

if TYPE_CHECKING:
    from intlkit.types import LocaleCode, LocaleConfig, MessageId, MessageVariables

__all__ = ["Intl", "IntlContext"]

logger = logging.getLogger(__name__)

# Dates closer to "now" than this are shown relative ("3 days ago").
_RELATIVE_WINDOW = timedelta(weeks=1)


class Intl:
    """Message formatting over a TemplateStore.

    Thread Safety:
        Safe for concurrent use. The store is read-only after construction
        and every call carries its own locale and depth state.

    Examples:
        >>> intl = Intl({"en": {"user.status.ok": "Active", "status": "Status: {@'user.status.{s}'}"}})
        >>> intl.format("status", {"s": "ok"})
        'Status: Active'
        >>> intl.format("missing", fallback="-")
        '-'
    """

    __slots__ = ("_max_reference_depth", "_store")

    def __init__(
        self,
        store: TemplateStore | LocaleConfig,
        /,
        *,
        default_language: LocaleCode = DEFAULT_LANGUAGE,
        max_reference_depth: int = MAX_REFERENCE_DEPTH,
    ) -> None:
        """Initialize with a store, or a locale configuration to build one from.

        Args:
            store: TemplateStore, or locale code -> dictionary [positional-only]
            default_language: Default locale of a store built from a configuration
            max_reference_depth: Ceiling for chains of nested {@'...'} references
        """
        if isinstance(store, TemplateStore):
            self._store = store
        else:
            self._store = TemplateStore(store, default_language=default_language)
        self._max_reference_depth = max_reference_depth

    @property
    def store(self) -> TemplateStore:
        """The underlying template store (read-only)."""
        return self._store

    @property
    def default_language(self) -> LocaleCode:
        """Locale used when a call does not name one."""
        return self._store.default_language

    def for_locale(self, locale: LocaleCode) -> IntlContext:
        """Bind a locale, e.g. the one negotiated for the current request."""
        return IntlContext(self, locale)

    def lookup(self, message_id: MessageId, locale: LocaleCode | None = None) -> str | None:
        """Get the raw template for an id, or None."""
        return self._store.lookup(message_id, locale or self.default_language)

    def get_message_template(
        self, desc: MessageDescriptor | str, locale: LocaleCode | None = None
    ) -> str | None:
        """Get the raw template for a descriptor or bare id.

        Raises:
            TypeError: If desc is neither a descriptor nor a string
            ValueError: If the id is empty
        """
        return self.lookup(MessageDescriptor.coerce(desc).id, locale)

    def format(
        self,
        desc: MessageDescriptor | str,
        values: MessageVariables | None = None,
        locale: LocaleCode | None = None,
        *,
        fallback: str | None = None,
    ) -> str:
        """Translate a message.

        Template selection: the locale's template, else the descriptor's
        default message, else the fallback (returned as-is), else the bare id.

        Args:
            desc: Message descriptor or bare id
            values: Placeholder values
            locale: Locale code (default: the store's default language)
            fallback: Returned when the message is missing or placeholders
                remain unresolved

        Returns:
            Formatted text. Never raises for missing messages or values.
        """
        desc = MessageDescriptor.coerce(desc)
        guard = DepthGuard(max_depth=self._max_reference_depth)
        return self._format(desc, values, locale or self.default_language, fallback, guard)

    def _format(
        self,
        desc: MessageDescriptor,
        values: MessageVariables | None,
        locale: LocaleCode,
        fallback: str | None,
        guard: DepthGuard,
    ) -> str:
        template = self._store.lookup(desc.id, locale) or desc.default_message or ""
        if not template:
            if fallback is not None:
                return fallback
            logger.error(
                "%s, falling back to message id", ErrorTemplate.message_not_found(desc.id, locale)
            )
            template = desc.id

        def resolve_reference(message_id: MessageId, inner_guard: DepthGuard) -> str:
            return self._format(MessageDescriptor(message_id), {}, locale, None, inner_guard)

        text = substitute(
            template,
            values,
            resolve_reference=resolve_reference,
            fallback=fallback,
            guard=guard,
        )
        try:
            result = format_icu(text, values if isinstance(values, Mapping) else None, locale)
        except IcuFormatError as e:
            logger.error("ICU formatting of '%s' failed: %s", desc.id, e)
            return text
        logger.debug("Formatted message '%s' for %s", desc.id, locale)
        return result

    def extract_variables(
        self, desc: MessageDescriptor | str, text: str, locale: LocaleCode | None = None
    ) -> dict[str, str]:
        """Recover placeholder values from text formatted with a message.

        Returns:
            Placeholder name -> value, or {} if the message is missing or the
            text does not match its template
        """
        template = self.get_message_template(desc, locale)
        if not template:
            return {}
        return extract_variables(template, text)

    def get_language_name(self, lang: LocaleCode) -> str:
        """Name of a locale in its own language, or the code itself."""
        return self._store.lookup(LANGUAGE_NAME_ID, lang) or lang

    def format_date(
        self, value: date, pattern: str = "yyyy-MM-dd", locale: LocaleCode | None = None
    ) -> str:
        """Format a date with a CLDR pattern via Babel."""
        babel_locale = resolve_babel_locale(locale or self.default_language)
        return babel_format_date(value, format=pattern, locale=babel_locale)

    def format_time(
        self, value: time | datetime, pattern: str = "HH:mm", locale: LocaleCode | None = None
    ) -> str:
        """Format a time of day with a CLDR pattern via Babel."""
        babel_locale = resolve_babel_locale(locale or self.default_language)
        return babel_format_time(value, format=pattern, locale=babel_locale)

    def format_relative(
        self,
        value: datetime,
        pattern: str = "yyyy-MM-dd",
        locale: LocaleCode | None = None,
        *,
        now: datetime | None = None,
    ) -> str:
        """Relative phrase ("2 days ago") within a week of now, else a date."""
        babel_locale = resolve_babel_locale(locale or self.default_language)
        reference = now if now is not None else datetime.now(tz=value.tzinfo)
        delta = value - reference
        if abs(delta) <= _RELATIVE_WINDOW:
            return format_timedelta(delta, add_direction=True, locale=babel_locale)
        return babel_format_date(value, format=pattern, locale=babel_locale)


@dataclass(frozen=True, slots=True)
class IntlContext:
    """An Intl bound to one locale.

    Example:
        >>> fr = intl.for_locale("fr")
        >>> fr.format("hello")
        'Bonjour'
    """

    intl: Intl
    locale: LocaleCode

    def lookup(self, message_id: MessageId) -> str | None:
        """Get the raw template for an id in this locale."""
        return self.intl.lookup(message_id, self.locale)

    def format(
        self,
        desc: MessageDescriptor | str,
        values: MessageVariables | None = None,
        *,
        fallback: str | None = None,
    ) -> str:
        """Translate a message in this locale."""
        return self.intl.format(desc, values, self.locale, fallback=fallback)

    def extract_variables(self, desc: MessageDescriptor | str, text: str) -> dict[str, str]:
        """Recover placeholder values from text formatted in this locale."""
        return self.intl.extract_variables(desc, text, self.locale)

    def format_date(self, value: date, pattern: str = "yyyy-MM-dd") -> str:
        """Format a date in this locale."""
        return self.intl.format_date(value, pattern, self.locale)

    def format_time(self, value: time | datetime, pattern: str = "HH:mm") -> str:
        """Format a time of day in this locale."""
        return self.intl.format_time(value, pattern, self.locale)

    def format_relative(
        self, value: datetime, pattern: str = "yyyy-MM-dd", *, now: datetime | None = None
    ) -> str:
        """Relative phrase or date in this locale."""
        return self.intl.format_relative(value, pattern, self.locale, now=now)
