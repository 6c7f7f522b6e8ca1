"""
Error types for rawenum parsing, configuration, expansion and evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .ir.diagnostics import Diagnostic


class RawEnumError(Exception):
    """Base exception for all rawenum errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(RawEnumError):
    """
    Raised when declaration source text cannot be parsed.

    Examples:
    - Unexpected tokens
    - Unterminated string literals
    - Indentation errors
    """

    pass


class ConfigError(RawEnumError):
    """
    Raised when rawenum.toml cannot be loaded.

    Examples:
    - Invalid TOML
    - Wrong value types (e.g. a number where a case name is expected)
    - Unknown logging level
    """

    pass


class ExpansionError(RawEnumError):
    """
    Raised when a declaration cannot be expanded.

    Carries every diagnostic found in a single pass. No derived
    declarations are produced when this is raised.
    """

    def __init__(self, diagnostics: list["Diagnostic"]):
        if not diagnostics:
            raise ValueError("ExpansionError requires at least one diagnostic")
        self.diagnostics = diagnostics
        summary = "; ".join(d.message for d in diagnostics)
        super().__init__(f"{len(diagnostics)} diagnostic(s): {summary}")


class EvaluationError(RawEnumError):
    """
    Raised when the reference interpreter cannot evaluate a derived declaration.

    Examples:
    - Raw value of the wrong Python type for the declared raw type
    - No match arm accepts the subject
    - Unknown case name passed to encode
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source file where error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional code snippet showing the error location
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "colors.enum:10:5"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet starts up to 2 lines before the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def extract_snippet(text: str, line: int, context: int = 2) -> str:
    """Return the lines around ``line`` (1-indexed) for error display."""
    lines = text.split("\n")
    start = max(0, line - 1 - context)
    end = min(len(lines), line + context)
    return "\n".join(lines[start:end])


def make_parse_error(
    message: str,
    file: Path,
    line: int,
    column: int,
    snippet: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        file: Source file path
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional code snippet

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(file=file, line=line, column=column, snippet=snippet)
    return ParseError(message, context)


def make_config_error(message: str, file: Path | None = None) -> ConfigError:
    """Helper to create a ConfigError, pointing at the config file when known."""
    if file is not None:
        return ConfigError(message, ErrorContext(file=file, line=1, column=1))
    return ConfigError(message)
