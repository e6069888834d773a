"""Enumerations for EnvLexEngine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ParseState(StrEnum):
    """Lexer state while scanning a .env buffer.

    StrEnum provides automatic string conversion: str(ParseState.EXPECTING_NAME) == "name"
    """

    EXPECTING_NAME = "name"
    """Next token is a variable name, optionally prefixed by export"""

    EXPECTING_VALUE = "value"
    """A name and its '=' were consumed; next token is the value"""


class LoadStatus(StrEnum):
    """Outcome of reading one file during a load.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """File was read and parsed"""

    NOT_FOUND = "not_found"
    """File could not be read and was treated as absent"""


__all__ = [
    "LoadStatus",
    "ParseState",
]
