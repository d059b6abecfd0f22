"""Tests for diagnostics: codes, templates, formatter and errors."""

from __future__ import annotations

import json

import pytest

from intlkit.diagnostics import (
    ConfigurationError,
    DescriptorParseError,
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    DictionaryLoadError,
    ErrorTemplate,
    IntlError,
    OutputFormat,
)

# ============================================================================
# CODES
# ============================================================================


class TestDiagnosticCode:
    """Code numbering."""

    def test_codes_unique(self) -> None:
        """No two codes share a value."""
        values = [code.value for code in DiagnosticCode]

        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("code", "category"),
        [
            (DiagnosticCode.MESSAGE_NOT_FOUND, 1),
            (DiagnosticCode.ICU_SYNTAX_ERROR, 2),
            (DiagnosticCode.DESCRIPTOR_INVALID, 3),
            (DiagnosticCode.SOURCE_UNREADABLE, 4),
            (DiagnosticCode.CONFIG_UNKNOWN_OPTION, 5),
        ],
    )
    def test_categories(self, code: DiagnosticCode, category: int) -> None:
        """The thousands digit names the category."""
        assert code.value // 1000 == category


# ============================================================================
# TEMPLATES
# ============================================================================


class TestErrorTemplate:
    """Message templates."""

    def test_message_not_found(self) -> None:
        """Locale is mentioned when given."""
        assert str(ErrorTemplate.message_not_found("x")) == "Message 'x' not found"
        assert "for locale 'fr'" in ErrorTemplate.message_not_found("x", "fr").message

    def test_variables_not_provided_is_warning(self) -> None:
        """Missing values are warnings listing every placeholder."""
        diagnostic = ErrorTemplate.variables_not_provided("Hi {a} {b}", ["{a}", "{b}"])

        assert diagnostic.severity == "warning"
        assert "{a}, {b}" in diagnostic.message

    def test_dictionary_location(self) -> None:
        """File errors carry the path as location."""
        diagnostic = ErrorTemplate.dictionary_malformed("locales/fr.json", "bad")

        assert diagnostic.location == "locales/fr.json"
        assert diagnostic.hint is not None


# ============================================================================
# FORMATTER
# ============================================================================


class TestDiagnosticFormatter:
    """Output formats."""

    diagnostic = Diagnostic(
        code=DiagnosticCode.DICTIONARY_MALFORMED,
        message="Locale dictionary is malformed: oops",
        location="locales/fr.json",
        hint="Fix it",
    )

    def test_compiler(self) -> None:
        """Multi-line with location and hint."""
        assert DiagnosticFormatter().format(self.diagnostic) == (
            "error[DICTIONARY_MALFORMED]: Locale dictionary is malformed: oops\n"
            "  --> locales/fr.json\n"
            "  = help: Fix it"
        )

    def test_simple(self) -> None:
        """One line."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        assert formatter.format(self.diagnostic) == (
            "DICTIONARY_MALFORMED: locales/fr.json: Locale dictionary is malformed: oops"
        )

    def test_json(self) -> None:
        """Machine-readable."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(self.diagnostic))

        assert data == {
            "code": "DICTIONARY_MALFORMED",
            "code_value": 4002,
            "message": "Locale dictionary is malformed: oops",
            "severity": "error",
            "location": "locales/fr.json",
            "hint": "Fix it",
        }

    def test_color(self) -> None:
        """ANSI codes around the severity."""
        formatted = DiagnosticFormatter(color=True).format(self.diagnostic)

        assert formatted.startswith("\033[1;31merror\033[0m")


# ============================================================================
# ERRORS
# ============================================================================


class TestErrors:
    """Exception hierarchy."""

    def test_plain_message(self) -> None:
        """Strings are accepted without a diagnostic."""
        error = IntlError("plain")

        assert str(error) == "plain"
        assert error.diagnostic is None

    def test_diagnostic_message(self) -> None:
        """Diagnostics are formatted into the exception text."""
        error = DictionaryLoadError(
            ErrorTemplate.dictionary_unreadable("fr.json", "denied"), path="fr.json"
        )

        assert "DICTIONARY_UNREADABLE" in str(error)
        assert "--> fr.json" in str(error)
        assert error.path == "fr.json"

    def test_hierarchy(self) -> None:
        """All errors derive from IntlError; configuration errors are ValueErrors."""
        assert issubclass(DescriptorParseError, IntlError)
        assert issubclass(ConfigurationError, ValueError)
        assert DescriptorParseError("x", position=3).position == 3
