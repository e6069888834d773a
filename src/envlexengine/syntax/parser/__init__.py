""".env parser module.

This module provides the main EnvParser class and related lexing
utilities organized into focused submodules.

Module Organization:
- core.py: Main EnvParser class and the name/value state machine
- primitives.py: Character classes and variable-name matching
- whitespace.py: Blank line and comment skipping
- rules.py: Statement grammar (names, values, quoted and bare segments)

Public API:
    EnvParser: Main parser class
"""

from envlexengine.syntax.parser.core import EnvParser

__all__ = ["EnvParser"]
