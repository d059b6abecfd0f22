"""Extraction configuration.

Provides a single frozen dataclass holding every option of an extraction
run. Options are validated at construction time so that a bad value stops
the run before any file is read or written.

Configuration files use the camelCase option names of the JSON format
(``sourceDir``, ``sortBy``, ``jsonIntend``...); ``ExtractionConfig`` maps
them to snake_case attributes.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from intlkit.constants import (
    DEFAULT_EXTENSIONS,
    DEFAULT_JSON_INDENT,
    DEFAULT_LANGUAGE,
    DEFAULT_LOCALES,
    DEFAULT_LOCALES_DIR,
    DEFAULT_OUTPUT_DIR,
)
from intlkit.diagnostics import ConfigurationError, ErrorTemplate
from intlkit.extraction.rules import DEFAULT_RULES, ExtractionRule

__all__ = ["SORT_MODES", "ExtractionConfig"]

SORT_MODES: tuple[str | None, ...] = ("keys", "source", None)
"""Accepted ``sortBy`` values: sort by id, or keep insertion order."""

# Option name in configuration files -> attribute name.
_OPTION_NAMES: dict[str, str] = {
    "sourceDir": "source_dir",
    "localesDir": "locales_dir",
    "defaultLanguage": "default_language",
    "outputDir": "output_dir",
    "extensions": "extensions",
    "locales": "locales",
    "fallback": "fallback",
    "sortBy": "sort_by",
    "reserveKeys": "reserve_keys",
    "emptyTags": "empty_tags",
    "jsonIntend": "json_indent",
    "jsonIndent": "json_indent",
    "patterns": "patterns",
}

_SEQUENCE_OPTIONS = frozenset({"source_dir", "extensions", "locales"})


def _invalid(option: str, reason: str) -> ConfigurationError:
    return ConfigurationError(ErrorTemplate.config_invalid_option(option, reason), option=option)


def _check_locale_code(option: str, code: object) -> None:
    if not isinstance(code, str) or not code:
        raise _invalid(option, f"locale code must be a non-empty string, got {code!r}")
    if ".." in code or "/" in code or "\\" in code:
        raise _invalid(option, f"locale code {code!r} is not a valid file name")


def _check_strings(option: str, values: object) -> None:
    if isinstance(values, str) or not isinstance(values, Sequence):
        raise _invalid(option, "expected a list of strings")
    for value in values:
        if not isinstance(value, str):
            raise _invalid(option, f"expected a list of strings, found {value!r}")


@dataclass(frozen=True, slots=True)
class ExtractionConfig:
    """Immutable options of one extraction run.

    All fields have defaults; ``ExtractionConfig()`` scans the whole tree for
    js/jsx/ts/tsx files and maintains ``locales/<code>.json`` for the
    default locale list.

    Attributes:
        source_dir: Directories to scan, relative to the base directory
            (default: empty, meaning the whole tree)
        locales_dir: Directory of the ``<code>.json`` dictionaries
        default_language: Locale that receives extracted default messages
        output_dir: Directory of the template, message map and file map
        extensions: File extensions to scan; empty means every file
        locales: Locales whose dictionaries are maintained
        fallback: Locale whose values fill gaps in the others (default: None)
        sort_by: "keys" to write dictionaries sorted by id; "source" or None
            to keep insertion order
        reserve_keys: Keep persisted ids that no longer occur in sources.
            Ids are never deleted; when False they are reported as stale.
        empty_tags: Add newly discovered ids with an empty template
        json_indent: Indent width of written JSON files
        patterns: Extraction rules, tried in order on each line

    Example:
        >>> config = ExtractionConfig(locales=("en", "fr"), fallback="en")
        >>> config.sort_by
        'keys'
        >>> ExtractionConfig.from_mapping({"sortBy": "source", "locales": ["en"]}).locales
        ('en',)
    """

    source_dir: tuple[str, ...] = ()
    locales_dir: str = DEFAULT_LOCALES_DIR
    default_language: str = DEFAULT_LANGUAGE
    output_dir: str = DEFAULT_OUTPUT_DIR
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    locales: tuple[str, ...] = DEFAULT_LOCALES
    fallback: str | None = None
    sort_by: str | None = "keys"
    reserve_keys: bool = True
    empty_tags: bool = True
    json_indent: int = DEFAULT_JSON_INDENT
    patterns: tuple[ExtractionRule, ...] = DEFAULT_RULES

    def __post_init__(self) -> None:
        """Validate option values at construction time.

        Raises:
            ConfigurationError: Naming the first offending option
        """
        _check_strings("sourceDir", self.source_dir)
        _check_strings("extensions", self.extensions)
        _check_strings("locales", self.locales)
        for code in self.locales:
            _check_locale_code("locales", code)
        _check_locale_code("defaultLanguage", self.default_language)
        if self.fallback is not None:
            _check_locale_code("fallback", self.fallback)
        for option, value in (("localesDir", self.locales_dir), ("outputDir", self.output_dir)):
            if not isinstance(value, str) or not value:
                raise _invalid(option, "expected a non-empty path")
        if self.sort_by not in SORT_MODES:
            reason = f"unknown sort mode {self.sort_by!r} (expected 'keys', 'source' or null)"
            raise _invalid("sortBy", reason)
        if isinstance(self.json_indent, bool) or not isinstance(self.json_indent, int):
            raise _invalid("jsonIntend", "expected an integer")
        if self.json_indent < 0:
            raise _invalid("jsonIntend", "must not be negative")
        for rule in self.patterns:
            if not isinstance(rule, ExtractionRule):
                raise _invalid("patterns", f"expected extraction rules, found {rule!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ExtractionConfig:
        """Build a configuration from camelCase options, e.g. a parsed JSON file.

        Missing options take their defaults. ``patterns`` entries are
        ``{"regex": "...", "parser": "object" | "string"}`` mappings.

        Raises:
            ConfigurationError: On unknown option names or invalid values
        """
        kwargs: dict[str, Any] = {}
        for option, value in data.items():
            name = _OPTION_NAMES.get(option)
            if name is None:
                raise ConfigurationError(
                    ErrorTemplate.config_unknown_option(option), option=option
                )
            if name in _SEQUENCE_OPTIONS:
                _check_strings(option, value)
                value = tuple(value)
            elif name == "patterns":
                if isinstance(value, str) or not isinstance(value, Sequence):
                    raise _invalid(option, "expected a list of pattern objects")
                value = tuple(_rule_from_entry(entry) for entry in value)
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def from_json_file(cls, path: str | Path) -> ExtractionConfig:
        """Load a configuration file holding one JSON object of options.

        Raises:
            ConfigurationError: If the file cannot be read or parsed, or
                holds invalid options
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise _invalid("config", f"{path}: {e}") from e
        if not isinstance(data, Mapping):
            raise _invalid("config", f"{path}: expected a JSON object")
        return cls.from_mapping(data)


def _rule_from_entry(entry: object) -> ExtractionRule:
    if isinstance(entry, ExtractionRule):
        return entry
    if not isinstance(entry, Mapping):
        raise _invalid("patterns", f"expected a pattern object, found {entry!r}")
    return ExtractionRule.from_mapping(entry)
