"""
Error types for schema parsing, validation, and client generation.
"""

from dataclasses import dataclass
from pathlib import Path


class PyrismaError(Exception):
    """Base exception for all pyrisma errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(PyrismaError):
    """
    Raised when schema text cannot be parsed.

    Examples:
    - Unterminated string literal
    - Unexpected token at top level
    - Unknown field type or attribute name
    - Malformed default value expression
    """

    pass


class SchemaValidationError(PyrismaError):
    """
    Raised when a parsed schema fails semantic validation.

    Examples:
    - Two models with the same name
    - Field referencing a model or enum that is not declared
    - Relation fields naming a field that does not exist
    """

    pass


class GenerationError(PyrismaError):
    """
    Raised when a generator step cannot produce output.

    Examples:
    - Output file cannot be written
    - Default value that cannot be expressed for the field type
    - Unresolved schema passed to the generator
    """

    pass


class ConfigError(PyrismaError):
    """Raised when pyrisma.toml is missing required values or is malformed."""

    pass


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        file: Path to the schema file
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        lexeme: Offending token text, if any
        snippet: Optional source excerpt around the error
    """

    file: Path
    line: int
    column: int
    lexeme: str | None = None
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "schema.prisma:10:5 near 'Strng'"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.lexeme:
            location += f" near {self.lexeme!r}"

        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippets start one line above the error when possible
        start_line = max(1, self.line - 1)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^")

        return "\n".join(formatted)


def extract_snippet(text: str, line: int) -> str:
    """Return the error line and the line before it from ``text``."""
    lines = text.split("\n")
    start = max(0, line - 2)
    return "\n".join(lines[start:line])


def make_parse_error(
    message: str,
    file: Path,
    line: int,
    column: int,
    lexeme: str | None = None,
    snippet: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        file: Schema file path
        line: Line number
        column: Column number
        lexeme: Offending token text
        snippet: Optional source excerpt

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(file=file, line=line, column=column, lexeme=lexeme, snippet=snippet)
    return ParseError(message, context)


def make_validation_error(
    message: str,
    file: Path | None = None,
    line: int | None = None,
    column: int | None = None,
) -> SchemaValidationError:
    """Create a SchemaValidationError, attaching a location when one is known."""
    if file is not None and line is not None:
        return SchemaValidationError(message, ErrorContext(file=file, line=line, column=column or 1))
    return SchemaValidationError(message)
