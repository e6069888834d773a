"""Diagnostic codes and data structures.

Defines error codes, source locations, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceLocation",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Syntax errors (malformed .env content)
        2000-2999: Source errors (file could not be read)
    """

    # Syntax errors (1000-1999)
    INVALID_NAME = 1001
    MISSING_EQUALS = 1002
    EXPORT_WITHOUT_VALUE = 1003
    WHITESPACE_AFTER_NAME = 1004
    WHITESPACE_BEFORE_VALUE = 1005
    MISSING_QUOTE = 1006
    UNQUOTED_WHITESPACE = 1007
    UNEXPECTED_EOF = 1008

    # Source errors (2000-2999)
    PATH_UNREADABLE = 2001


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """File location for error reporting.

    Attributes:
        path: Label of the source (usually the file path)
        line: Line number (1-indexed)
    """

    path: str
    line: int

    def __post_init__(self) -> None:
        """Validate SourceLocation invariants.

        Raises:
            ValueError: If line is less than 1 (lines are 1-indexed)
        """
        if self.line < 1:
            msg = f"SourceLocation.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        location: Source location (None for errors without a line)
        hint: Suggestion for fixing the error
    """

    code: DiagnosticCode
    message: str
    location: SourceLocation | None = None
    hint: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler error.

        Example output:
            error[MISSING_EQUALS]: Missing = in the environment variable declaration
              --> .env:3
              = help: Write the assignment as NAME=value

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
