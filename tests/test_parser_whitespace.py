"""Tests for blank line and comment skipping."""

from __future__ import annotations

from envlexengine.syntax.cursor import Cursor
from envlexengine.syntax.parser.whitespace import blank_line_rest, skip_blank_lines


class TestSkipBlankLines:
    """Test skip_blank_lines across whitespace and comments."""

    def test_no_blank_content(self) -> None:
        """Cursor on a statement does not move."""
        cursor = skip_blank_lines(Cursor("A=1", 0))

        assert cursor.pos == 0

    def test_skips_newlines_and_tracks_line(self) -> None:
        """Blank lines are skipped and counted."""
        cursor = skip_blank_lines(Cursor("\n\n\nA=1", 0))

        assert cursor.current == "A"
        assert cursor.line == 4

    def test_skips_comment_lines(self) -> None:
        """Whole-line comments are skipped."""
        cursor = skip_blank_lines(Cursor("# one\n  # two\nA=1", 0))

        assert cursor.current == "A"
        assert cursor.line == 3

    def test_skips_indentation(self) -> None:
        """Leading spaces and tabs before a statement are skipped."""
        cursor = skip_blank_lines(Cursor("\n \t A=1", 0))

        assert cursor.current == "A"

    def test_comment_to_eof(self) -> None:
        """A trailing comment without newline reaches EOF."""
        assert skip_blank_lines(Cursor("# only a comment", 0)).is_eof

    def test_only_whitespace(self) -> None:
        """Whitespace-only input reaches EOF."""
        cursor = skip_blank_lines(Cursor(" \n\t\n", 0))

        assert cursor.is_eof
        assert cursor.line == 3


class TestBlankLineRest:
    """Test detection of an empty value after '='."""

    def test_end_of_buffer(self) -> None:
        """EOF right after '=' is blank."""
        result = blank_line_rest(Cursor("", 0))

        assert result is not None
        assert result.is_eof

    def test_newline(self) -> None:
        """A newline right after '=' is blank; newline is not consumed."""
        result = blank_line_rest(Cursor("\nB=1", 0))

        assert result is not None
        assert result.current == "\n"

    def test_spaces_then_newline(self) -> None:
        """Trailing spaces before newline are blank."""
        result = blank_line_rest(Cursor("  \t\nB=1", 0))

        assert result is not None
        assert result.pos == 3

    def test_comment(self) -> None:
        """A comment right after '=' is blank."""
        result = blank_line_rest(Cursor("#note\nB=1", 0))

        assert result is not None
        assert result.current == "\n"

    def test_spaces_then_comment(self) -> None:
        """Spaces followed by a comment are blank."""
        result = blank_line_rest(Cursor("   # note", 0))

        assert result is not None
        assert result.is_eof

    def test_value_text(self) -> None:
        """Any value character means the line is not blank."""
        assert blank_line_rest(Cursor("value", 0)) is None
        assert blank_line_rest(Cursor("  value", 0)) is None
        assert blank_line_rest(Cursor("''", 0)) is None
