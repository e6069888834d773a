"""Shared constants for EnvLexEngine.

This module provides centralized configuration constants used across
the syntax, loading and orchestration layers. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Input limits: DoS prevention via size constraints
- Grammar: Characters and keywords with special meaning in .env files
- Hierarchy: File naming used by the environment-specific loader

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Input limits
    "MAX_SOURCE_SIZE",
    # Grammar
    "EXPORT_KEYWORD",
    "COMMENT_START",
    "INLINE_WHITESPACE",
    "SINGLE_QUOTE",
    "DOUBLE_QUOTE",
    "ESCAPE",
    # Hierarchy
    "DEFAULT_PATH",
    "DEFAULT_ENV_KEY",
    "DEFAULT_ENV",
    "LOCAL_SUFFIX",
    "DEFAULT_ENCODING",
]

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MiB).
# A .env file of this size is already far outside normal use.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# GRAMMAR
# ============================================================================

EXPORT_KEYWORD: str = "export"
COMMENT_START: str = "#"

# Horizontal whitespace only. Newlines terminate statements.
INLINE_WHITESPACE: tuple[str, str] = (" ", "\t")

SINGLE_QUOTE: str = "'"
DOUBLE_QUOTE: str = '"'
ESCAPE: str = "\\"

# ============================================================================
# HIERARCHY
# ============================================================================

DEFAULT_PATH: str = ".env"

# Variable selecting the environment-specific files (.env.{APP_ENV}).
DEFAULT_ENV_KEY: str = "APP_ENV"
DEFAULT_ENV: str = "dev"

# Suffix of uncommitted override files; also the selector value that
# disables environment-specific files entirely.
LOCAL_SUFFIX: str = "local"

DEFAULT_ENCODING: str = "utf-8"
