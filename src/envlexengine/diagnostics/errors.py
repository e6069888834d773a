"""EnvLexEngine exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class EnvError(Exception):
    """Base exception for all EnvLexEngine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize EnvError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class EnvFormatError(EnvError):
    """Malformed .env content.

    Raised by the parser on the first grammar violation. Parsing does not
    continue past it, and nothing from the offending file is applied.

    Attributes:
        message: One of the fixed messages from ErrorTemplate
        path: Label of the source being parsed
        line_number: 1-based line of the cursor when the error was detected
    """

    def __init__(self, diagnostic: Diagnostic) -> None:
        """Initialize EnvFormatError.

        Args:
            diagnostic: Diagnostic carrying a SourceLocation

        Raises:
            ValueError: If the diagnostic has no location
        """
        if diagnostic.location is None:
            msg = f"EnvFormatError requires a located diagnostic, got {diagnostic.code.name}"
            raise ValueError(msg)
        super().__init__(diagnostic)
        self.message = diagnostic.message
        self.path = diagnostic.location.path
        self.line_number = diagnostic.location.line

    @property
    def code(self) -> DiagnosticCode:
        """Diagnostic code identifying the violated rule."""
        assert self.diagnostic is not None  # noqa: S101 - set in __init__
        return self.diagnostic.code

    def __str__(self) -> str:
        return f'{self.message} in "{self.path}" at line {self.line_number}'

    def format_with_context(self, source: str, context_lines: int = 2) -> str:
        """Format error with the offending line and its neighbours.

        Args:
            source: Text that was parsed (CRLF or LF)
            context_lines: Number of lines to show before/after the error line

        Returns:
            Multi-line string: the error, a blank line, then numbered source lines

        Example:
            >>> err = EnvFormatError(ErrorTemplate.missing_equals(".env", 2))
            >>> print(err.format_with_context("A=1\\nB\\nC=3"))
            Missing = in the environment variable declaration in ".env" at line 2
            <BLANKLINE>
               1 | A=1
            >  2 | B
               3 | C=3
        """
        from envlexengine.syntax.position import get_error_context  # noqa: PLC0415 - circular

        excerpt = get_error_context(
            source.replace("\r\n", "\n"), self.line_number, context_lines=context_lines
        )
        return f"{self}\n\n{excerpt}"


class EnvPathError(EnvError):
    """Source file could not be read (missing, unreadable, not a file).

    Raised by the loader, never by the parser. The originating OSError is
    chained as __cause__.

    Attributes:
        path: Path that failed to read
    """

    def __init__(self, diagnostic: Diagnostic, path: str) -> None:
        """Initialize EnvPathError.

        Args:
            diagnostic: Diagnostic for PATH_UNREADABLE
            path: Path that failed to read
        """
        super().__init__(diagnostic)
        self.path = path
