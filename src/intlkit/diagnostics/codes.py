"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by intlkit errors.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup and substitution (runtime, non-fatal)
        2000-2999: ICU formatting step (runtime, non-fatal)
        3000-3999: Source extraction (per-occurrence, non-fatal)
        4000-4999: File I/O (fatal to an extraction run)
        5000-5999: Configuration (fatal, raised before any I/O)
    """

    # Lookup and substitution (1000-1999)
    MESSAGE_NOT_FOUND = 1001
    VARIABLE_NOT_PROVIDED = 1002
    VALUES_NOT_MAPPING = 1003
    MAX_DEPTH_EXCEEDED = 1004

    # ICU formatting step (2000-2999)
    ICU_SYNTAX_ERROR = 2001
    ICU_ARGUMENT_MISSING = 2002

    # Source extraction (3000-3999)
    DESCRIPTOR_INVALID = 3001
    DESCRIPTOR_ID_INVALID = 3002

    # File I/O (4000-4999)
    DICTIONARY_UNREADABLE = 4001
    DICTIONARY_MALFORMED = 4002
    DICTIONARY_WRITE_FAILED = 4003
    SOURCE_UNREADABLE = 4004

    # Configuration (5000-5999)
    CONFIG_INVALID_OPTION = 5001
    CONFIG_UNKNOWN_OPTION = 5002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        location: Where the problem was found ("src/app.js:12:5", a file path,
            or an option name)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    location: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[DICTIONARY_MALFORMED]: Locale dictionary is not valid JSON
              --> locales/fr.json
              = help: Fix the JSON syntax or delete the file to regenerate it

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
