"""Whitespace and comment handling for the .env parser.

Statements are separated by any mix of blank lines and whole-line
comments. These helpers move the cursor across that filler.
"""

from envlexengine.constants import COMMENT_START
from envlexengine.syntax.cursor import Cursor


def skip_blank_lines(cursor: Cursor) -> Cursor:
    """Skip whitespace (including newlines) and '#' comments.

    Repeats until the cursor rests on a character that is neither
    whitespace nor the start of a comment, or reaches EOF. Used before
    the first statement and after every completed statement.

    Args:
        cursor: Current position in source

    Returns:
        New cursor at the next statement (or EOF)

    Example:
        >>> cursor = skip_blank_lines(Cursor("\\n  # note\\n\\nA=1", 0))
        >>> (cursor.current, cursor.line)
        ('A', 4)
    """
    source = cursor.source
    end = len(source)
    pos = cursor.pos
    while pos < end:
        ch = source[pos]
        if ch.isspace():
            pos += 1
        elif ch == COMMENT_START:
            newline = source.find("\n", pos)
            pos = end if newline == -1 else newline
        else:
            break
    return cursor.advance_to(pos)


def blank_line_rest(cursor: Cursor) -> Cursor | None:
    """Check whether the rest of the line holds no value.

    The rest of the line is empty when it contains only spaces/tabs,
    optionally followed by a comment, up to the newline or EOF.

    Args:
        cursor: Position right after '='

    Returns:
        Cursor at the end of the line (newline not consumed) if the rest is
        blank, None if there is value text

    Example:
        >>> blank_line_rest(Cursor("   # empty", 0)).is_eof
        True
        >>> blank_line_rest(Cursor(" value", 0)) is None
        True
    """
    after = cursor.skip_inline_whitespace()
    if after.is_eof or after.current == "\n":
        return after
    if after.current == COMMENT_START:
        return after.skip_to_line_end()
    return None
