"""
Error types for crudforge schema parsing, annotation handling, and generation.
"""

from dataclasses import dataclass
from typing import Optional


class CrudforgeError(Exception):
    """Base exception for all crudforge errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class SchemaParseError(CrudforgeError):
    """
    Raised when schema text cannot be parsed into models.

    Examples:
    - Unterminated string or block
    - Unexpected tokens
    - Field type that names no scalar, enum, or model
    - Duplicate model names
    """

    pass


class SchemaUnreadableError(CrudforgeError):
    """
    Raised when no schema text can be obtained.

    Examples:
    - Schema path does not exist
    - Schema directory without any .prisma files
    - Schema text is empty
    """

    pass


class AnnotationError(CrudforgeError):
    """
    Raised when a @crudAuth: fragment is present but malformed.

    Never escapes annotation resolution: the resolver logs it and falls back
    to the default policy.
    """

    def __init__(self, message: str, model: str | None = None):
        self.model = model
        super().__init__(message)


class ConfigError(CrudforgeError):
    """Raised when crudforge.toml cannot be read or validated."""

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Label of the source the error occurred in (path or "<schema>")
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source lines around the error location
    """

    file: str
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "schema.prisma:10:5"
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


def extract_snippet(text: str, line: int, radius: int = 2) -> str:
    """Return the source lines within `radius` of a 1-indexed line."""
    lines = text.split("\n")
    start = max(0, line - 1 - radius)
    end = min(len(lines), line + radius)
    return "\n".join(lines[start:end])


def make_parse_error(
    message: str,
    file: str,
    line: int,
    column: int,
    snippet: str | None = None,
) -> SchemaParseError:
    """
    Helper to create a SchemaParseError with context.

    Args:
        message: Error description
        file: Source label
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional code snippet

    Returns:
        SchemaParseError with context attached
    """
    context = ErrorContext(file=file, line=line, column=column, snippet=snippet)
    return SchemaParseError(message, context)
