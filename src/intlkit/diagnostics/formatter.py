"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    COMPILER = "compiler"  # Multi-line compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (compiler, simple, json)
        color: Enable ANSI color codes (for terminal output)

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(ErrorTemplate.message_not_found("hello")))
        MESSAGE_NOT_FOUND: Message 'hello' not found
    """

    output_format: OutputFormat = OutputFormat.COMPILER
    color: bool = False

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic."""
        match self.output_format:
            case OutputFormat.COMPILER:
                return self._format_compiler(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def _format_compiler(self, diagnostic: Diagnostic) -> str:
        severity = diagnostic.severity
        if self.color:
            colour = "1;31" if severity == "error" else "1;33"
            severity_str = f"\033[{colour}m{severity}\033[0m"
        else:
            severity_str = severity

        parts = [f"{severity_str}[{diagnostic.code.name}]: {diagnostic.message}"]
        if diagnostic.location:
            parts.append(f"  --> {diagnostic.location}")
        if diagnostic.hint:
            parts.append(f"  = help: {diagnostic.hint}")
        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        if diagnostic.location:
            return f"{diagnostic.code.name}: {diagnostic.location}: {diagnostic.message}"
        return f"{diagnostic.code.name}: {diagnostic.message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        data: dict[str, str | int] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
        }
        if diagnostic.location:
            data["location"] = diagnostic.location
        if diagnostic.hint:
            data["hint"] = diagnostic.hint
        return json.dumps(data, ensure_ascii=False)
