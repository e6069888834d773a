"""Grammar rules for .env statements.

Each rule takes an immutable Cursor plus the source label used in
diagnostics, and returns a ParseResult or raises EnvFormatError.

Statement Grammar:
    statement ::= [export blank_inline] name "=" value
    value     ::= blank_rest | segment+
    segment   ::= single_quoted | double_quoted | bare

Segments concatenate without separators: FOO='a'"b"c is "abc".

Comment Asymmetry:
    A '#' ends bare text only when the character before it is a space or
    tab. A '#' directly after a closing quote therefore starts bare text:
    FOO='a'#b is "a#b", while FOO='a' #b is "a".
"""

from envlexengine.constants import (
    COMMENT_START,
    DOUBLE_QUOTE,
    ESCAPE,
    SINGLE_QUOTE,
)
from envlexengine.diagnostics import EnvFormatError, ErrorTemplate
from envlexengine.syntax.cursor import Cursor, ParseResult
from envlexengine.syntax.parser.primitives import is_inline_whitespace, match_name
from envlexengine.syntax.parser.whitespace import blank_line_rest, skip_blank_lines

__all__ = [
    "lex_bare",
    "lex_double_quoted",
    "lex_name",
    "lex_single_quoted",
    "lex_value",
    "unescape_double_quoted",
]

# Applied in this order. \\ goes last so an escaped backslash before n or r
# has already been consumed by the earlier replacements.
_DOUBLE_QUOTE_ESCAPES: tuple[tuple[str, str], ...] = (
    ('\\"', '"'),
    ("\\r", "\r"),
    ("\\n", "\n"),
    ("\\\\", "\\"),
)

_QUOTES: tuple[str, str] = (SINGLE_QUOTE, DOUBLE_QUOTE)


def lex_name(cursor: Cursor, path: str) -> ParseResult[str]:
    """Lex a variable name and its '='.

    Args:
        cursor: Start of a statement
        path: Source label for diagnostics

    Returns:
        ParseResult with the name; cursor is right after '='

    Raises:
        EnvFormatError: INVALID_NAME, EXPORT_WITHOUT_VALUE, MISSING_EQUALS
            or WHITESPACE_AFTER_NAME

    Example:
        >>> result = lex_name(Cursor("export FOO=bar", 0), ".env")
        >>> (result.value, result.cursor.current)
        ('FOO', 'b')
    """
    match = match_name(cursor)
    if match is None:
        raise EnvFormatError(ErrorTemplate.invalid_name(path, cursor.line))

    cursor = match.cursor
    lookahead = cursor.peek()

    if lookahead is None or lookahead in ("\n", COMMENT_START):
        if match.exported:
            raise EnvFormatError(ErrorTemplate.export_without_value(path, cursor.line))
        raise EnvFormatError(ErrorTemplate.missing_equals(path, cursor.line))

    if is_inline_whitespace(lookahead):
        raise EnvFormatError(ErrorTemplate.whitespace_after_name(path, cursor.line))

    if lookahead != "=":
        raise EnvFormatError(ErrorTemplate.missing_equals(path, cursor.line))

    return ParseResult(match.name, cursor.advance())


def lex_value(cursor: Cursor, path: str) -> ParseResult[str]:
    """Lex the value of a statement and skip to the next statement.

    Args:
        cursor: Position right after '='
        path: Source label for diagnostics

    Returns:
        ParseResult with the concatenated value; cursor is at the next
        statement or EOF

    Raises:
        EnvFormatError: WHITESPACE_BEFORE_VALUE, MISSING_QUOTE or
            UNQUOTED_WHITESPACE

    Example:
        >>> result = lex_value(Cursor("'a b'\\"c\\"d # note\\nB=1", 0), ".env")
        >>> (result.value, result.cursor.current)
        ('a bcd', 'B')
    """
    line_end = blank_line_rest(cursor)
    if line_end is not None:
        return ParseResult("", skip_blank_lines(line_end))

    if is_inline_whitespace(cursor.current):
        raise EnvFormatError(ErrorTemplate.whitespace_before_value(path, cursor.line))

    parts: list[str] = []
    while True:
        ch = cursor.current
        if ch == SINGLE_QUOTE:
            segment = lex_single_quoted(cursor, path)
        elif ch == DOUBLE_QUOTE:
            segment = lex_double_quoted(cursor, path)
        else:
            segment = lex_bare(cursor, path)

        parts.append(segment.value)
        cursor = segment.cursor

        if cursor.is_eof or cursor.current == "\n":
            break
        # After a closing quote, '#' is value text
        if cursor.current == COMMENT_START and is_inline_whitespace(cursor.previous):
            break

    return ParseResult("".join(parts), skip_blank_lines(cursor))


def lex_single_quoted(cursor: Cursor, path: str) -> ParseResult[str]:
    """Lex a '...' segment. Content is literal, no escapes.

    Args:
        cursor: Position of the opening quote
        path: Source label for diagnostics

    Returns:
        ParseResult with the content; cursor is right after the closing quote

    Raises:
        EnvFormatError: MISSING_QUOTE, reported on the opening line

    Example:
        >>> lex_single_quoted(Cursor("'a\\\\nb'", 0), ".env").value
        'a\\\\nb'
    """
    close = cursor.source.find(SINGLE_QUOTE, cursor.pos + 1)
    if close == -1:
        raise EnvFormatError(ErrorTemplate.missing_quote(path, cursor.line))

    content = cursor.source[cursor.pos + 1 : close]
    return ParseResult(content, cursor.advance_to(close + 1))


def lex_double_quoted(cursor: Cursor, path: str) -> ParseResult[str]:
    """Lex a "..." segment and apply its escape sequences.

    The closing quote is the first '"' not preceded by an odd number of
    backslashes.

    Args:
        cursor: Position of the opening quote
        path: Source label for diagnostics

    Returns:
        ParseResult with the unescaped content; cursor is right after the
        closing quote

    Raises:
        EnvFormatError: MISSING_QUOTE, reported on the opening line

    Example:
        >>> lex_double_quoted(Cursor('"say \\\\"hi\\\\""', 0), ".env").value
        'say "hi"'
    """
    source = cursor.source
    close = source.find(DOUBLE_QUOTE, cursor.pos + 1)
    while close != -1:
        backslashes = 0
        probe = close - 1
        while probe > cursor.pos and source[probe] == ESCAPE:
            backslashes += 1
            probe -= 1
        if backslashes % 2 == 0:
            break
        close = source.find(DOUBLE_QUOTE, close + 1)

    if close == -1:
        raise EnvFormatError(ErrorTemplate.missing_quote(path, cursor.line))

    content = unescape_double_quoted(source[cursor.pos + 1 : close])
    return ParseResult(content, cursor.advance_to(close + 1))


def unescape_double_quoted(raw: str) -> str:
    """Apply double-quote escapes: \\" then \\r then \\n then \\\\.

    Example:
        >>> unescape_double_quoted('a\\\\r\\\\nb') == 'a\\r\\nb'
        True
    """
    for escaped, replacement in _DOUBLE_QUOTE_ESCAPES:
        raw = raw.replace(escaped, replacement)
    return raw


def lex_bare(cursor: Cursor, path: str) -> ParseResult[str]:
    """Lex unquoted text up to a quote, newline, comment or EOF.

    A backslash before a quote yields the quote literally. Trailing
    spaces/tabs are trimmed and doubled backslashes collapsed; any
    whitespace left inside is an error.

    Args:
        cursor: First character of the bare text
        path: Source label for diagnostics

    Returns:
        ParseResult with the text; cursor stops on the terminating
        character (quote, '#', newline) or EOF

    Raises:
        EnvFormatError: UNQUOTED_WHITESPACE

    Example:
        >>> result = lex_bare(Cursor("a#b #c", 0), ".env")
        >>> (result.value, result.cursor.current)
        ('a#b', '#')
    """
    source = cursor.source
    end = len(source)
    pos = cursor.pos
    previous = cursor.previous
    chars: list[str] = []

    while pos < end:
        ch = source[pos]
        if ch == "\n" or ch in _QUOTES:
            break
        if ch == COMMENT_START and is_inline_whitespace(previous):
            break
        if ch == ESCAPE and pos + 1 < end and source[pos + 1] in _QUOTES:
            pos += 1
            ch = source[pos]
        chars.append(ch)
        previous = ch
        pos += 1

    text = "".join(chars).rstrip(" \t").replace("\\\\", "\\")
    if " " in text or "\t" in text:
        raise EnvFormatError(ErrorTemplate.unquoted_whitespace(path, cursor.line))

    return ParseResult(text, cursor.advance_to(pos))
