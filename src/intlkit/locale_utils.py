"""Locale utilities for locale-code normalization.

Dictionary files use whatever codes the project chose ("en", "zh-cn",
"pt_BR"); Babel wants POSIX form with a proper-cased territory. Lookups in
the template store are exact-match on the original code; only calls into
Babel go through normalization.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "normalize_locale",
    "resolve_babel_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert a dictionary locale code to POSIX format for Babel.

    Hyphens become underscores and a two-letter territory is upper-cased.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("zh-cn")
        'zh_CN'
        >>> normalize_locale("en")
        'en'
    """
    parts = locale_code.replace("-", "_").split("_")
    normalized = [parts[0].lower()]
    for part in parts[1:]:
        if len(part) == 2 and part.isalpha():
            normalized.append(part.upper())
        elif len(part) == 4 and part.isalpha():
            normalized.append(part.title())
        else:
            normalized.append(part)
    return "_".join(normalized)


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def resolve_babel_locale(locale_code: str, default: str = "en") -> Locale:
    """Get a Babel Locale, falling back to ``default`` for unknown codes.

    Project locale codes are free-form ("zh-hk", "pirate"); formatting must
    not fail because CLDR has no data for one of them.
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        return get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError) as e:
        logger.debug("Unknown locale '%s' (%s), using '%s' formatting rules", locale_code, e, default)
        return get_babel_locale(default)
