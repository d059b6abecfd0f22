"""Dictionary builder: merge scan results into per-locale dictionaries.

Per id and locale, sources are consulted from highest to lowest priority:

    1. the locale's own persisted value
    2. the extracted default message (default language only)
    3. the fallback locale's value (when a fallback locale is configured)
    4. an empty-string stub (when empty tags are enabled)

A source only fills ids that are missing or still empty, so a persisted
non-empty value is never replaced and no persisted id is ever dropped.
Keys keep insertion order (persisted ids first, then new ids by source)
unless sorting by key is requested.

All functions here are pure; reading and writing files is the pipeline's job.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from intlkit.extraction.config import ExtractionConfig
    from intlkit.extraction.scanner import ScanResult
    from intlkit.types import LocaleCode, MessageDictionary, MessageId

__all__ = [
    "DictionaryBuilder",
    "build_template",
    "merge_dictionary",
]

logger = logging.getLogger(__name__)


def build_template(message_ids: Iterable[MessageId]) -> MessageDictionary:
    """Every discovered id mapped to an empty template."""
    return dict.fromkeys(message_ids, "")


def merge_dictionary(
    existing: Mapping[MessageId, str],
    *sources: Mapping[MessageId, str],
    sort_by_key: bool = False,
) -> MessageDictionary:
    """Merge lower-priority sources into a persisted dictionary.

    Args:
        existing: The locale's persisted dictionary (highest priority)
        *sources: Further sources, highest priority first
        sort_by_key: Return the result sorted by id

    Returns:
        New dictionary; ``existing`` is not modified

    Example:
        >>> merge_dictionary({"a": "Hello", "b": ""}, {"b": "World", "c": "!"}, {"a": "", "d": ""})
        {'a': 'Hello', 'b': 'World', 'c': '!', 'd': ''}
    """
    result: MessageDictionary = dict(existing)
    for source in sources:
        for message_id, template in source.items():
            if message_id not in result or (not result[message_id] and template):
                result[message_id] = template
    if sort_by_key:
        return dict(sorted(result.items()))
    return result


class DictionaryBuilder:
    """Builds dictionaries and build artifacts from one scan.

    Example:
        >>> builder = DictionaryBuilder(config, scan(files, config.patterns))
        >>> fr = builder.build("fr", read_dictionary("locales/fr.json"))
    """

    __slots__ = ("_config", "_result", "_template")

    def __init__(self, config: ExtractionConfig, result: ScanResult) -> None:
        self._config = config
        self._result = result
        self._template = build_template(result.message_map)

    @property
    def template(self) -> MessageDictionary:
        """Flat template: every discovered id mapped to ""."""
        return dict(self._template)

    def build(
        self,
        locale: LocaleCode,
        existing: Mapping[MessageId, str],
        fallback: Mapping[MessageId, str] | None = None,
    ) -> MessageDictionary:
        """Merged dictionary for one locale.

        Args:
            locale: Locale being built
            existing: Its persisted dictionary ({} if there is no file)
            fallback: The fallback locale's persisted dictionary, if any
        """
        sources: list[Mapping[MessageId, str]] = []
        if locale == self._config.default_language:
            sources.append(self._result.default_messages)
        if fallback:
            sources.append(fallback)
        if self._config.empty_tags:
            sources.append(self._template)
        merged = merge_dictionary(
            existing, *sources, sort_by_key=self._config.sort_by == "keys"
        )
        added = len(merged) - len(existing)
        logger.debug("%s: %d persisted ids, %d added", locale, len(existing), added)
        return merged

    def stale_ids(self, existing: Mapping[MessageId, str]) -> list[MessageId]:
        """Persisted ids no longer found in the scanned sources."""
        return [message_id for message_id in existing if message_id not in self._template]

    def message_map_json(self) -> dict[MessageId, list[dict[str, object]]]:
        """Message map in its JSON form."""
        return {
            message_id: [occurrence.to_json() for occurrence in occurrences]
            for message_id, occurrences in self._result.message_map.items()
        }

    def file_map_json(self) -> dict[str, list[dict[str, object]]]:
        """File map in its JSON form."""
        return {
            file: [occurrence.to_json() for occurrence in occurrences]
            for file, occurrences in self._result.file_map.items()
        }
