"""intlkit exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic for rich error information.
Runtime formatting reports expected problems through logging and fallback
values; these exceptions surface where a caller has to stop.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class IntlError(Exception):
    """Base exception for all intlkit errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize IntlError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class DescriptorParseError(IntlError):
    """Captured descriptor fragment does not fit the restricted grammar.

    Raised by the descriptor parser; the scanner converts it into a
    per-occurrence diagnostic and keeps scanning.

    Attributes:
        position: Character offset inside the fragment where parsing stopped
    """

    def __init__(self, message: str | Diagnostic, *, position: int = 0) -> None:
        super().__init__(message)
        self.position = position


class DictionaryLoadError(IntlError):
    """A persisted locale dictionary exists but cannot be used.

    Fatal to an extraction run. A missing file is not an error; a file that
    cannot be read, is not valid JSON, or is not a flat string mapping is.

    Attributes:
        path: The offending file
    """

    def __init__(self, message: str | Diagnostic, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class ConfigurationError(IntlError, ValueError):
    """Invalid extraction option, detected before any file I/O.

    Attributes:
        option: Name of the offending option as spelled in configuration files
    """

    def __init__(self, message: str | Diagnostic, *, option: str) -> None:
        super().__init__(message)
        self.option = option


class ReferenceDepthError(IntlError):
    """Nested message references exceeded the depth ceiling.

    Example:
        a = "{@'b'}", b = "{@'a'}"  <- never terminates without the ceiling

    The substitution engine catches this and leaves the placeholder literal.
    """


class IcuFormatError(IntlError):
    """The ICU-style formatting step rejected a string.

    Raised on syntax errors and on arguments missing from the values mapping.
    The runtime catches it and returns the pre-formatting string.

    Attributes:
        position: Character offset where the problem was detected
    """

    def __init__(self, message: str | Diagnostic, *, position: int = 0) -> None:
        super().__init__(message)
        self.position = position
