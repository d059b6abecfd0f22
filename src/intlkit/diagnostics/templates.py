"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostics are created here. NO f-strings in exception constructors!
    Call sites build a Diagnostic through a named template and pass it to
    the matching exception class.
    """

    @staticmethod
    def message_not_found(message_id: str, locale: str | None = None) -> Diagnostic:
        """Message id absent from the locale dictionary."""
        where = f" for locale '{locale}'" if locale else ""
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message=f"Message '{message_id}' not found{where}",
            hint="Run intlkit-extract and translate the new entry",
        )

    @staticmethod
    def variables_not_provided(template: str, names: list[str]) -> Diagnostic:
        """Placeholders with no value in the variables mapping."""
        return Diagnostic(
            code=DiagnosticCode.VARIABLE_NOT_PROVIDED,
            message=f"Message '{template}': missing variable value(s) {', '.join(names)}",
            severity="warning",
        )

    @staticmethod
    def values_not_mapping(template: str, received: object) -> Diagnostic:
        """Variables argument is not a mapping while the template has placeholders."""
        return Diagnostic(
            code=DiagnosticCode.VALUES_NOT_MAPPING,
            message=(
                f"Message '{template}': values are not provided "
                f"(received {type(received).__name__})"
            ),
            severity="warning",
        )

    @staticmethod
    def reference_depth_exceeded(max_depth: int) -> Diagnostic:
        """Nested reference chain longer than the ceiling."""
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=f"Nested message references exceed maximum depth ({max_depth})",
            hint="Check for messages that reference each other in a cycle",
        )

    @staticmethod
    def icu_syntax_error(reason: str, position: int) -> Diagnostic:
        """ICU message syntax rejected."""
        return Diagnostic(
            code=DiagnosticCode.ICU_SYNTAX_ERROR,
            message=f"Invalid ICU message syntax at offset {position}: {reason}",
        )

    @staticmethod
    def icu_argument_missing(name: str) -> Diagnostic:
        """ICU argument with no value."""
        return Diagnostic(
            code=DiagnosticCode.ICU_ARGUMENT_MISSING,
            message=f"The intl string context variable '{name}' was not provided",
        )

    @staticmethod
    def descriptor_invalid(reason: str, position: int) -> Diagnostic:
        """Descriptor fragment outside the restricted grammar."""
        return Diagnostic(
            code=DiagnosticCode.DESCRIPTOR_INVALID,
            message=f"Invalid message descriptor at offset {position}: {reason}",
            hint="Descriptors must be object literals of quoted string values",
        )

    @staticmethod
    def descriptor_id_invalid(message_id: str) -> Diagnostic:
        """Descriptor id with characters outside [a-zA-Z_.-]."""
        return Diagnostic(
            code=DiagnosticCode.DESCRIPTOR_ID_INVALID,
            message=f"Invalid message id '{message_id}'",
            hint="Message ids may contain letters, '_', '.' and '-' only",
        )

    @staticmethod
    def dictionary_unreadable(path: str, reason: str) -> Diagnostic:
        """Locale dictionary exists but cannot be read."""
        return Diagnostic(
            code=DiagnosticCode.DICTIONARY_UNREADABLE,
            message=f"Cannot read locale dictionary: {reason}",
            location=path,
        )

    @staticmethod
    def dictionary_malformed(path: str, reason: str) -> Diagnostic:
        """Locale dictionary is not a flat JSON object of strings."""
        return Diagnostic(
            code=DiagnosticCode.DICTIONARY_MALFORMED,
            message=f"Locale dictionary is malformed: {reason}",
            location=path,
            hint="Fix the JSON syntax or delete the file to regenerate it",
        )

    @staticmethod
    def dictionary_write_failed(path: str, reason: str) -> Diagnostic:
        """Output file could not be written."""
        return Diagnostic(
            code=DiagnosticCode.DICTIONARY_WRITE_FAILED,
            message=f"Cannot write file: {reason}",
            location=path,
        )

    @staticmethod
    def config_invalid_option(option: str, reason: str) -> Diagnostic:
        """Extraction option with an unusable value."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_INVALID_OPTION,
            message=f"Invalid value for option '{option}': {reason}",
            location=option,
        )

    @staticmethod
    def config_unknown_option(option: str) -> Diagnostic:
        """Extraction option name not recognized."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_UNKNOWN_OPTION,
            message=f"Unknown option '{option}'",
            location=option,
        )

    @staticmethod
    def source_unreadable(path: str, reason: str) -> Diagnostic:
        """Source file selected for scanning cannot be read as UTF-8 text."""
        return Diagnostic(
            code=DiagnosticCode.SOURCE_UNREADABLE,
            message=f"Cannot read source file: {reason}",
            location=path,
            hint="Exclude binary files with the 'extensions' option",
        )
