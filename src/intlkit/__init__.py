"""intlkit - message templates for applications, with source extraction.

Runtime: look up message templates by id and locale, substitute variables
(including nested message references), apply ICU-style plural/select
formatting, and recover variable values from formatted text.

Build time: scan source files for message usages and keep one JSON
dictionary per locale in sync with them.

Public API:
    Intl - Formatting entry points over a template store
    IntlContext - Intl bound to one locale
    TemplateStore - Locale code -> message dictionary
    MessageDescriptor - Message id with optional default text
    extract_messages - Run an extraction (CLI: intlkit-extract)
    ExtractionConfig - Options of an extraction run

Exceptions:
    IntlError - Base exception class
    DictionaryLoadError - Persisted dictionary unreadable or malformed
    ConfigurationError - Invalid extraction option

Submodules:
    intlkit.runtime - Store, substitution, inverse parser, ICU step
    intlkit.extraction - Rules, scanner, dictionary builder, pipeline
    intlkit.syntax - Restricted descriptor parser
    intlkit.diagnostics - Error types, codes and formatting
"""

from .diagnostics import ConfigurationError, DictionaryLoadError, IntlError
from .extraction import ExtractionConfig, extract_messages
from .runtime import Intl, IntlContext, TemplateStore
from .types import MessageDescriptor

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("intlkit")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigurationError",
    "DictionaryLoadError",
    "ExtractionConfig",
    "Intl",
    "IntlContext",
    "IntlError",
    "MessageDescriptor",
    "TemplateStore",
    "__version__",
    "extract_messages",
]
