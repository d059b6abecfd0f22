"""Runtime message formatting.

Exports:
    Intl: Formatting entry points over a TemplateStore
    IntlContext: Intl bound to one locale
    TemplateStore: Locale code -> dictionary
    substitute: Placeholder substitution
    extract_variables: Inverse of placeholder substitution
    format_icu: ICU-style plural/select/number formatting step

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

from .context import Intl, IntlContext
from .icu import format_icu
from .inverse import extract_variables
from .store import TemplateStore
from .substitution import substitute

__all__ = [
    "Intl",
    "IntlContext",
    "TemplateStore",
    "extract_variables",
    "format_icu",
    "substitute",
]
