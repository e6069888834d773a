"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceLocation


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps the fixed message set in one place:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def invalid_name(path: str, line: int) -> Diagnostic:
        """Statement does not start with a valid variable name.

        Args:
            path: Source label
            line: Line of the statement (1-indexed)

        Returns:
            Diagnostic for INVALID_NAME
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_NAME,
            message="Invalid character in variable name",
            location=SourceLocation(path, line),
            hint="Names start with a letter followed by letters, digits or '_'",
        )

    @staticmethod
    def missing_equals(path: str, line: int) -> Diagnostic:
        """Variable name is not followed by '='.

        Args:
            path: Source label
            line: Line of the statement (1-indexed)

        Returns:
            Diagnostic for MISSING_EQUALS
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_EQUALS,
            message="Missing = in the environment variable declaration",
            location=SourceLocation(path, line),
            hint="Write the assignment as NAME=value",
        )

    @staticmethod
    def export_without_value(path: str, line: int) -> Diagnostic:
        """'export NAME' used on its own, without an assignment.

        Args:
            path: Source label
            line: Line of the statement (1-indexed)

        Returns:
            Diagnostic for EXPORT_WITHOUT_VALUE
        """
        return Diagnostic(
            code=DiagnosticCode.EXPORT_WITHOUT_VALUE,
            message="Unable to unset an environment variable",
            location=SourceLocation(path, line),
            hint="Use 'export NAME=' to declare an empty value",
        )

    @staticmethod
    def whitespace_after_name(path: str, line: int) -> Diagnostic:
        """Whitespace between the variable name and '='.

        Args:
            path: Source label
            line: Line of the statement (1-indexed)

        Returns:
            Diagnostic for WHITESPACE_AFTER_NAME
        """
        return Diagnostic(
            code=DiagnosticCode.WHITESPACE_AFTER_NAME,
            message="Whitespace characters are not supported after the variable name",
            location=SourceLocation(path, line),
            hint="Remove the whitespace before '='",
        )

    @staticmethod
    def whitespace_before_value(path: str, line: int) -> Diagnostic:
        """Whitespace between '=' and the value.

        Args:
            path: Source label
            line: Line of the statement (1-indexed)

        Returns:
            Diagnostic for WHITESPACE_BEFORE_VALUE
        """
        return Diagnostic(
            code=DiagnosticCode.WHITESPACE_BEFORE_VALUE,
            message="Whitespace characters are not supported before the value",
            location=SourceLocation(path, line),
            hint="Remove the whitespace after '=' or quote the value",
        )

    @staticmethod
    def missing_quote(path: str, line: int) -> Diagnostic:
        """Quoted segment is never closed.

        Args:
            path: Source label
            line: Line where the quoted segment opened (1-indexed)

        Returns:
            Diagnostic for MISSING_QUOTE
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_QUOTE,
            message="Missing quote to end the value",
            location=SourceLocation(path, line),
            hint="Close the quoted value on the same file",
        )

    @staticmethod
    def unquoted_whitespace(path: str, line: int) -> Diagnostic:
        """Bare value contains a space or tab.

        Args:
            path: Source label
            line: Line of the statement (1-indexed)

        Returns:
            Diagnostic for UNQUOTED_WHITESPACE
        """
        return Diagnostic(
            code=DiagnosticCode.UNQUOTED_WHITESPACE,
            message="A value containing spaces must be surrounded by quotes",
            location=SourceLocation(path, line),
            hint="Wrap the value in single or double quotes",
        )

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Cursor read past the end of the buffer.

        Args:
            position: Character offset of the read

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=f"Unexpected EOF at position {position}",
        )

    @staticmethod
    def path_unreadable(path: str) -> Diagnostic:
        """Source file could not be read.

        Args:
            path: Path that failed to read

        Returns:
            Diagnostic for PATH_UNREADABLE
        """
        return Diagnostic(
            code=DiagnosticCode.PATH_UNREADABLE,
            message=f'Unable to read the "{path}" environment file.',
            hint="Check that the file exists and is readable",
        )
