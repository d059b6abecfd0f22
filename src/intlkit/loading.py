"""Persisted locale dictionary I/O.

One flat JSON object per locale, stored as ``<locales_dir>/<code>.json``.
Shared by the runtime (loading a TemplateStore from disk) and the
extraction pipeline (merging and rewriting dictionaries).

A missing file reads as an empty dictionary. A file that exists but cannot
be read, is not valid JSON, or is not an object of strings raises
DictionaryLoadError naming the path; callers must not paper over it.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from intlkit.diagnostics import DictionaryLoadError, ErrorTemplate, IntlError
from intlkit.types import LocaleCode, MessageDictionary

__all__ = [
    "dump_json",
    "locale_file",
    "read_dictionary",
    "write_json",
]

logger = logging.getLogger(__name__)

_DICTIONARY_SUFFIX = ".json"


def locale_file(locales_dir: str | Path, locale: LocaleCode) -> Path:
    """Path of a locale's dictionary file.

    Raises:
        ValueError: If the locale code contains path separators or ".."
    """
    if not locale or ".." in locale or "/" in locale or "\\" in locale:
        msg = f"Invalid locale code for a dictionary file name: '{locale}'"
        raise ValueError(msg)
    return Path(locales_dir) / f"{locale}{_DICTIONARY_SUFFIX}"


def read_dictionary(path: str | Path) -> MessageDictionary:
    """Read one locale dictionary, preserving the file's key order.

    Args:
        path: Dictionary file

    Returns:
        The dictionary, or an empty one if the file does not exist

    Raises:
        DictionaryLoadError: If the file exists but is unusable
    """
    path = Path(path)
    if not path.exists():
        logger.debug("No dictionary at %s, starting empty", path)
        return {}
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DictionaryLoadError(
            ErrorTemplate.dictionary_unreadable(str(path), str(e)), path=str(path)
        ) from e
    try:
        data: Any = json.loads(content)
    except json.JSONDecodeError as e:
        raise DictionaryLoadError(
            ErrorTemplate.dictionary_malformed(str(path), str(e)), path=str(path)
        ) from e
    if not isinstance(data, dict):
        reason = f"expected a JSON object, found {type(data).__name__}"
        raise DictionaryLoadError(
            ErrorTemplate.dictionary_malformed(str(path), reason), path=str(path)
        )
    for key, value in data.items():
        if not isinstance(value, str):
            reason = f"value of '{key}' is {type(value).__name__}, expected string"
            raise DictionaryLoadError(
                ErrorTemplate.dictionary_malformed(str(path), reason), path=str(path)
            )
    return data


def dump_json(data: object, indent: int) -> str:
    """Serialize for writing: indented, non-ASCII kept, trailing newline."""
    return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"


def write_json(path: str | Path, data: object, indent: int) -> None:
    """Write a JSON file, creating parent directories.

    Raises:
        IntlError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_json(data, indent), encoding="utf-8")
    except OSError as e:
        raise IntlError(ErrorTemplate.dictionary_write_failed(str(path), str(e))) from e
    logger.debug("Wrote %s", path)
