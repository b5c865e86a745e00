"""Exceptions for grokmatch.

This module provides the exception hierarchy for the library. Every error
raised by grokmatch derives from GrokError, so callers can catch the whole
family with a single except clause.
"""

from __future__ import annotations

from pathlib import Path


class GrokError(Exception):
    """Base exception for grokmatch.

    All grokmatch specific exceptions inherit from this class.
    """

    pass


class MissingPatternError(GrokError):
    """Referenced pattern name could not be resolved.

    Raised when strict expansion meets a reference such as ``%{NAME}``
    whose NAME is not registered.

    Attributes:
        name: The unresolved pattern name.
        pattern: The pattern text that was being expanded.

    """

    def __init__(self, message: str, name: str, pattern: str | None = None) -> None:
        """Initialize MissingPatternError with context.

        Args:
            message: Human-readable error message.
            name: The unresolved pattern name.
            pattern: The pattern text that was being expanded.

        """
        super().__init__(message)
        self.name = name
        self.pattern = pattern


class InvalidRegexError(GrokError):
    """Expanded pattern text is not a valid regular expression.

    Attributes:
        pattern: The source pattern as given to compile.
        expanded: The fully expanded text handed to the regex engine.

    """

    def __init__(self, message: str, pattern: str, expanded: str | None = None) -> None:
        """Initialize InvalidRegexError with context.

        Args:
            message: Human-readable error message.
            pattern: The source pattern as given to compile.
            expanded: The fully expanded regex text.

        """
        super().__init__(message)
        self.pattern = pattern
        self.expanded = expanded


class NotCompiledError(GrokError):
    """Matching was attempted before any pattern compiled successfully."""

    pass


class CycleDetectedError(GrokError):
    """Pattern definitions reference each other in a cycle.

    Attributes:
        name: The name whose traversal closed the cycle.
        cycle: Names forming the cycle, starting and ending with the same name.

    """

    def __init__(self, message: str, name: str, cycle: list[str] | None = None) -> None:
        """Initialize CycleDetectedError with context.

        Args:
            message: Human-readable error message.
            name: The name whose traversal closed the cycle.
            cycle: Names forming the cycle.

        """
        super().__init__(message)
        self.name = name
        self.cycle = cycle or [name]


class CatalogError(GrokError):
    """A pattern catalog could not be read.

    Attributes:
        file_path: Path of the catalog file (if applicable).
        line_number: 1-based line number in the file (if applicable).

    """

    def __init__(
        self,
        message: str,
        file_path: Path | None = None,
        line_number: int | None = None,
    ) -> None:
        """Initialize CatalogError with context.

        Args:
            message: Human-readable error message.
            file_path: Path of the catalog file.
            line_number: 1-based line number in the file.

        """
        super().__init__(message)
        self.file_path = file_path
        self.line_number = line_number

    def __str__(self) -> str:
        """Return the message prefixed with the file location when known."""
        message = super().__str__()
        if self.file_path is None:
            return message
        if self.line_number is None:
            return f"{self.file_path}: {message}"
        return f"{self.file_path}:{self.line_number}: {message}"


class MatchTimeoutError(GrokError):
    """Regex evaluation exceeded the configured timeout.

    Attributes:
        timeout: The timeout in seconds that was exceeded.

    """

    def __init__(self, message: str, timeout: float) -> None:
        """Initialize MatchTimeoutError with context.

        Args:
            message: Human-readable error message.
            timeout: The timeout in seconds that was exceeded.

        """
        super().__init__(message)
        self.timeout = timeout


class ConfigError(GrokError):
    """Configuration file or values are invalid."""

    pass
