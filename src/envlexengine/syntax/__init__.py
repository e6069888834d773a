""".env syntax parsing package.

Provides the cursor, the parser and position helpers. Separate from the
loading layer so the parser stays a pure function of its input text.

Python 3.13+.
"""

from envlexengine.constants import DEFAULT_PATH

from .cursor import Cursor, ParseResult
from .parser import EnvParser

__all__ = [
    "Cursor",
    "EnvParser",
    "ParseResult",
    "parse",
]


def parse(source: str, path: str = DEFAULT_PATH) -> dict[str, str]:
    """Parse .env source into a name/value mapping.

    Convenience function for EnvParser.parse().

    Args:
        source: .env source text
        path: Label reported in diagnostics

    Returns:
        Mapping of variable name to value

    Example:
        >>> from envlexengine.syntax import parse
        >>> parse("FOO=bar")
        {'FOO': 'bar'}
    """
    parser = EnvParser()
    return parser.parse(source, path)
