"""Diagnostic system for intlkit errors.

Provides structured error diagnostics with codes, locations and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigurationError,
    DescriptorParseError,
    DictionaryLoadError,
    IcuFormatError,
    IntlError,
    ReferenceDepthError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ConfigurationError",
    "DescriptorParseError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DictionaryLoadError",
    "ErrorTemplate",
    "IcuFormatError",
    "IntlError",
    "OutputFormat",
    "ReferenceDepthError",
]
