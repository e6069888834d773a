"""Primitive lexing utilities for the .env parser.

This module provides the character classes and the variable-name scanner
shared by the grammar rules.

Name Grammar:
    [export (space|tab)+] [A-Za-z][A-Za-z0-9_]*

    ASCII only. Python's str.isalpha() accepts Unicode letters, which a
    shell could not export, so the checks below restrict to ASCII.
"""

from dataclasses import dataclass

from envlexengine.constants import EXPORT_KEYWORD, INLINE_WHITESPACE
from envlexengine.syntax.cursor import Cursor

__all__ = [
    "NameMatch",
    "is_inline_whitespace",
    "is_name_char",
    "is_name_start",
    "match_name",
]


@dataclass(frozen=True, slots=True)
class NameMatch:
    """Variable name found at the start of a statement.

    Attributes:
        name: Variable name without any export prefix
        exported: True if the statement started with 'export '
        cursor: Cursor positioned right after the name
    """

    name: str
    exported: bool
    cursor: Cursor


def is_name_start(ch: str) -> bool:
    """Check if character can start a variable name.

    Example:
        >>> is_name_start('a'), is_name_start('_'), is_name_start('é')
        (True, False, False)
    """
    return len(ch) == 1 and ch.isascii() and ch.isalpha()


def is_name_char(ch: str) -> bool:
    """Check if character can continue a variable name.

    Example:
        >>> is_name_char('Z'), is_name_char('9'), is_name_char('_'), is_name_char('-')
        (True, True, True, False)
    """
    return len(ch) == 1 and ch.isascii() and (ch.isalnum() or ch == "_")


def is_inline_whitespace(ch: str | None) -> bool:
    """Check if character is a space or tab."""
    return ch is not None and ch in INLINE_WHITESPACE


def _scan_name(cursor: Cursor) -> Cursor | None:
    """Advance past [A-Za-z][A-Za-z0-9_]* or return None if no name starts here."""
    source = cursor.source
    pos = cursor.pos
    if pos >= len(source) or not is_name_start(source[pos]):
        return None
    pos += 1
    while pos < len(source) and is_name_char(source[pos]):
        pos += 1
    return cursor.advance_to(pos)


def match_name(cursor: Cursor) -> NameMatch | None:
    """Match an optional export prefix followed by a variable name.

    The export keyword only counts as a prefix when it is followed by
    whitespace and then a name. Otherwise 'export' is read as the name
    itself (so 'export=1' assigns a variable called export).

    Args:
        cursor: Start of a statement

    Returns:
        NameMatch on success, None if no name starts at the cursor

    Example:
        >>> m = match_name(Cursor("export FOO=1", 0))
        >>> (m.name, m.exported, m.cursor.current)
        ('FOO', True, '=')
        >>> match_name(Cursor("1FOO=1", 0)) is None
        True
    """
    if cursor.starts_with(EXPORT_KEYWORD):
        after_keyword = cursor.advance(len(EXPORT_KEYWORD))
        if is_inline_whitespace(after_keyword.peek()):
            name_start = after_keyword.skip_inline_whitespace()
            name_end = _scan_name(name_start)
            if name_end is not None:
                return NameMatch(
                    name=name_start.slice_to(name_end.pos),
                    exported=True,
                    cursor=name_end,
                )

    name_end = _scan_name(cursor)
    if name_end is None:
        return None
    return NameMatch(name=cursor.slice_to(name_end.pos), exported=False, cursor=name_end)
