"""Diagnostic system for EnvLexEngine errors.

Provides structured error diagnostics with codes, locations and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceLocation
from .errors import EnvError, EnvFormatError, EnvPathError
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "EnvError",
    "EnvFormatError",
    "EnvPathError",
    "ErrorTemplate",
    "OutputFormat",
    "SourceLocation",
]
