""".env parser implementation.

This module provides the EnvParser class that turns .env source text into
a mapping of variable names to values.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~envlexengine.syntax.cursor.Cursor`)
    that carries the current line number. A two-state machine
    (:class:`~envlexengine.enums.ParseState`) alternates between the
    grammar rules in :mod:`~envlexengine.syntax.parser.rules`:

    - EXPECTING_NAME: :func:`~envlexengine.syntax.parser.rules.lex_name`
    - EXPECTING_VALUE: :func:`~envlexengine.syntax.parser.rules.lex_value`

    Unlike a recovering parser, the first grammar violation aborts the
    parse with :class:`~envlexengine.diagnostics.EnvFormatError`.

Security:
    Includes configurable input size limit to prevent DoS attacks via
    unbounded memory allocation from extremely large files.
"""

import logging

from envlexengine.constants import DEFAULT_PATH, MAX_SOURCE_SIZE
from envlexengine.enums import ParseState
from envlexengine.syntax.cursor import Cursor
from envlexengine.syntax.parser.rules import lex_name, lex_value
from envlexengine.syntax.parser.whitespace import skip_blank_lines

__all__ = ["EnvParser"]

logger = logging.getLogger(__name__)


class EnvParser:
    """.env parser using the immutable cursor pattern.

    Design:
    - Immutable cursor prevents infinite loops (no manual guards needed)
    - Cursor tracks the line number, so diagnostics need no rescan
    - All scratch state is local to parse(); an instance only holds
      configuration and can be shared between threads

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 10 MiB)
    """

    __slots__ = ("_max_source_size",)

    def __init__(self, *, max_source_size: int | None = None) -> None:
        """Initialize parser with an optional size limit.

        Args:
            max_source_size: Maximum source size in characters (default: 10 MiB).
                            Set to 0 to disable the size limit (not recommended).

        Raises:
            ValueError: If max_source_size is negative
        """
        if max_source_size is not None and max_source_size < 0:
            msg = f"max_source_size must be >= 0, got {max_source_size}"
            raise ValueError(msg)
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    def parse(self, source: str, path: str = DEFAULT_PATH) -> dict[str, str]:
        """Parse .env source into a name/value mapping.

        Args:
            source: .env file content
            path: Label reported in diagnostics (usually the file path)

        Returns:
            Mapping of variable name to value. A name assigned twice keeps
            its last value.

        Raises:
            ValueError: If source exceeds max_source_size (DoS prevention)
            EnvFormatError: On the first grammar violation

        Example:
            >>> parser = EnvParser()
            >>> parser.parse("# db\\nexport DB_USER=root\\nDB_PASS='p@ss word'")
            {'DB_USER': 'root', 'DB_PASS': 'p@ss word'}
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in EnvParser constructor to increase limit."
            )
            raise ValueError(msg)

        cursor = skip_blank_lines(Cursor(source.replace("\r\n", "\n"), 0))
        values: dict[str, str] = {}
        state = ParseState.EXPECTING_NAME
        name = ""

        while not cursor.is_eof:
            match state:
                case ParseState.EXPECTING_NAME:
                    name_result = lex_name(cursor, path)
                    name = name_result.value
                    cursor = name_result.cursor
                    state = ParseState.EXPECTING_VALUE
                case ParseState.EXPECTING_VALUE:
                    value_result = lex_value(cursor, path)
                    values[name] = value_result.value
                    cursor = value_result.cursor
                    state = ParseState.EXPECTING_NAME

        # "NAME=" at the very end of the buffer
        if state is ParseState.EXPECTING_VALUE:
            values[name] = ""

        logger.debug("Parsed %d variables from %s", len(values), path)
        return values
