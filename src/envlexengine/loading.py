"""Source loading infrastructure for Dotenv.

Provides the protocol for .env source loaders, a filesystem implementation,
and result/summary data structures for tracking load attempts.

Components:
    SourceLoader - Protocol for reading .env sources (structural typing)
    PathSourceLoader - Disk-based loader
    ResourceLoadResult - Immutable result of a single file load attempt
    LoadSummary - Immutable aggregate of all results from one hierarchical load

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from envlexengine.constants import DEFAULT_ENCODING
from envlexengine.diagnostics import EnvPathError, ErrorTemplate
from envlexengine.enums import LoadStatus

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "SourceLoader",
    # Concrete loader
    "PathSourceLoader",
    # Load result types
    "ResourceLoadResult",
    "LoadSummary",
]

logger = logging.getLogger(__name__)


class SourceLoader(Protocol):
    """Protocol for reading .env sources.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom loaders (archives,
    remote stores, in-memory fixtures).

    Example:
        >>> class DictLoader:
        ...     def __init__(self, files: dict[str, str]) -> None:
        ...         self.files = files
        ...     def read(self, path: str) -> str:
        ...         try:
        ...             return self.files[path]
        ...         except KeyError as e:
        ...             raise EnvPathError(ErrorTemplate.path_unreadable(path), path) from e
    """

    def read(self, path: str) -> str:
        """Read the full text of a source.

        Args:
            path: Path or key identifying the source

        Returns:
            Source text

        Raises:
            EnvPathError: If the source cannot be read
        """


@dataclass(frozen=True, slots=True)
class PathSourceLoader:
    """File system source loader.

    Implements SourceLoader protocol for reading .env files from disk.

    Attributes:
        encoding: Text encoding of the files (default: UTF-8)

    Example:
        >>> loader = PathSourceLoader()
        >>> text = loader.read(".env")
    """

    encoding: str = DEFAULT_ENCODING

    def read(self, path: str) -> str:
        """Read a .env file from disk.

        Args:
            path: File path

        Returns:
            File content

        Raises:
            EnvPathError: If the file is missing, is not a regular file,
                cannot be opened, or is not valid in the configured encoding
        """
        try:
            text = Path(path).read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Cannot read %s: %s", path, e)
            raise EnvPathError(ErrorTemplate.path_unreadable(path), path) from e
        logger.debug("Read %d characters from %s", len(text), path)
        return text


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of loading a single .env file.

    Attributes:
        path: Path that was attempted
        status: Load status (success, not_found)
        variables: Number of variables parsed from the file
        error: EnvPathError if status is NOT_FOUND, None otherwise
    """

    path: str
    status: LoadStatus
    variables: int = 0
    error: EnvPathError | None = None

    @property
    def is_success(self) -> bool:
        """Check if file was read and parsed."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if file was missing or unreadable (expected for optional files)."""
        return self.status == LoadStatus.NOT_FOUND


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of file load results from one hierarchical load.

    All statistics are computed properties derived from the ``results`` tuple.

    Attributes:
        results: All individual load results, in load order
        env: Resolved selector value (e.g. "dev", "prod", "local")

    Example:
        >>> summary = Dotenv().load_env(".env")
        >>> [r.path for r in summary.get_successful()]
        ['.env', '.env.dev']
    """

    results: tuple[ResourceLoadResult, ...]
    env: str

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(env={self.env!r}, "
            f"total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"variables={self.variables})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of files considered."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of files read and parsed."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of files treated as absent."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def variables(self) -> int:
        """Total number of variables parsed across all files."""
        return sum(r.variables for r in self.results)

    def get_successful(self) -> tuple[ResourceLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    def get_not_found(self) -> tuple[ResourceLoadResult, ...]:
        """Get all results where the file was absent."""
        return tuple(r for r in self.results if r.is_not_found)
