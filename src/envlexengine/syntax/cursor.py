"""Immutable cursor infrastructure for line-aware parsing.

Implements the immutable cursor pattern for zero-`None` parsing.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line number travels with the cursor, so errors never rescan the source

Line Ending Support:
    The parser collapses CRLF to LF before building the first cursor, so
    \\n is the only line delimiter the cursor counts.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from envlexengine.diagnostics import ErrorTemplate

__all__ = ["Cursor", "ParseResult"]

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Memory efficiency (important for large files)
        3. Line carried along - Incremented by newlines consumed in advance()
        4. EOF is a property - Not a return value

    Example:
        >>> cursor = Cursor("A=1\\nB=2", 0)
        >>> cursor.current
        'A'
        >>> cursor.advance(4).line
        2
        >>> cursor.line  # Original unchanged (immutability)
        1
        >>> Cursor("hi", 2).current
        Traceback (most recent call last):
        ...
        EOFError: Unexpected EOF at position 2
    """

    source: str
    pos: int
    line: int = 1

    @property
    def is_eof(self) -> bool:
        """Check if at end of input.

        Returns:
            True if position >= source length
        """
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Returns:
            Current character at position

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    @property
    def previous(self) -> str | None:
        """Character just before the cursor, or None at the start of input."""
        if self.pos == 0:
            return None
        return self.source[self.pos - 1]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Args:
            offset: Offset from current position (0 = current, 1 = next)

        Returns:
            Character at position + offset, or None if beyond EOF

        Note:
            Use for lookahead: `if cursor.peek() == '=':`
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions.

        Newlines inside the skipped range are added to the line number.

        Args:
            count: Number of positions to advance (default: 1)

        Returns:
            New Cursor instance at new position (original unchanged)

        Example:
            >>> cursor = Cursor("a\\n\\nb", 0)
            >>> moved = cursor.advance(3)
            >>> (moved.pos, moved.line)
            (3, 3)
        """
        new_pos = min(self.pos + count, len(self.source))
        newlines = self.source.count("\n", self.pos, new_pos)
        return Cursor(self.source, new_pos, self.line + newlines)

    def advance_to(self, end_pos: int) -> "Cursor":
        """Return new cursor moved forward to an absolute position.

        Args:
            end_pos: Target offset; positions behind the cursor are ignored

        Returns:
            New Cursor at max(pos, end_pos)
        """
        return self.advance(max(end_pos - self.pos, 0))

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def starts_with(self, text: str) -> bool:
        """Check if the remaining input begins with text."""
        return self.source.startswith(text, self.pos)

    def skip_inline_whitespace(self) -> "Cursor":
        """Skip spaces and tabs on the current line.

        Example:
            >>> Cursor(" \\t x", 0).skip_inline_whitespace().current
            'x'
        """
        pos = self.pos
        source = self.source
        while pos < len(source) and source[pos] in (" ", "\t"):
            pos += 1
        return self.advance_to(pos)

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next newline character (not consumed) or EOF.

        Example:
            >>> cursor = Cursor("hello\\nworld", 0).skip_to_line_end()
            >>> cursor.pos
            5
        """
        end = self.source.find("\n", self.pos)
        if end == -1:
            end = len(self.source)
        return self.advance_to(end)


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    """Lexer result containing the lexed value and the new cursor position.

    Type Parameters:
        T: The type of the lexed value

    Pattern:
        Every lexing rule has signature:
            def lex_foo(cursor: Cursor, path: str) -> ParseResult[Foo]:
                ...
        and raises EnvFormatError instead of returning on failure.

    Example:
        >>> cursor = Cursor("A=1", 0)
        >>> result = ParseResult("A", cursor.advance(2))
        >>> result.value
        'A'
        >>> result.cursor.current
        '1'
    """

    value: T
    cursor: Cursor
