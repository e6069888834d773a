"""Dotenv orchestration: read, parse and populate.

Sequences the three collaborators:

    SourceLoader.read()  ->  EnvParser.parse()  ->  populate(EnvironmentSink)

A file is parsed in full before any of its variables are written, so a
malformed file never leaves the environment half-updated.

Hierarchical Loading:
    load_env() reads, later files taking precedence over earlier ones:

    - .env               committed defaults
    - .env.local         uncommitted local overrides
    - .env.{APP_ENV}     committed environment-specific defaults
    - .env.{APP_ENV}.local  uncommitted environment-specific overrides

    The first two are applied before APP_ENV is resolved, so .env may set
    APP_ENV itself. When APP_ENV is "local" the environment-specific files
    are not read.

Python 3.13+.
"""

from __future__ import annotations

import logging

from envlexengine.constants import (
    DEFAULT_ENV,
    DEFAULT_ENV_KEY,
    DEFAULT_PATH,
    LOCAL_SUFFIX,
)
from envlexengine.diagnostics import EnvPathError
from envlexengine.enums import LoadStatus
from envlexengine.environment import EnvironmentSink, OsEnvironment, populate
from envlexengine.loading import (
    LoadSummary,
    PathSourceLoader,
    ResourceLoadResult,
    SourceLoader,
)
from envlexengine.syntax.parser import EnvParser

__all__ = ["Dotenv"]

logger = logging.getLogger(__name__)


class Dotenv:
    """Loads .env files into an environment.

    Thread Safety:
        Parsing is safe to share. Populating writes to the environment sink
        without locking; serialize concurrent load calls on the same sink.

    Example:
        >>> dotenv = Dotenv(environment=MemoryEnvironment())
        >>> dotenv.load(".env")
        ('DB_USER', 'DB_PASS')
        >>> dotenv.environment.get("DB_USER")
        'root'
    """

    __slots__ = ("_environment", "_loader", "_parser")

    def __init__(
        self,
        *,
        loader: SourceLoader | None = None,
        environment: EnvironmentSink | None = None,
        parser: EnvParser | None = None,
    ) -> None:
        """Initialize Dotenv.

        Args:
            loader: Source reader (default: PathSourceLoader, UTF-8 files)
            environment: Destination (default: OsEnvironment, os.environ)
            parser: Parser instance (default: EnvParser with default limits)
        """
        self._loader: SourceLoader = loader if loader is not None else PathSourceLoader()
        self._environment: EnvironmentSink = (
            environment if environment is not None else OsEnvironment()
        )
        self._parser = parser if parser is not None else EnvParser()

    @property
    def loader(self) -> SourceLoader:
        """Source reader used by this instance."""
        return self._loader

    @property
    def environment(self) -> EnvironmentSink:
        """Environment sink receiving variables."""
        return self._environment

    @property
    def parser(self) -> EnvParser:
        """Parser used by this instance."""
        return self._parser

    def parse(self, source: str, path: str = DEFAULT_PATH) -> dict[str, str]:
        """Parse .env text without reading files or touching the environment.

        Raises:
            EnvFormatError: If the text is malformed
        """
        return self._parser.parse(source, path)

    def values(self, path: str = DEFAULT_PATH) -> dict[str, str]:
        """Read and parse one file without touching the environment.

        Raises:
            EnvPathError: If the file cannot be read
            EnvFormatError: If the file is malformed
        """
        _validate_path(path)
        return self._parser.parse(self._loader.read(path), path)

    def load(self, *paths: str) -> tuple[str, ...]:
        """Load files, keeping variables the environment already defines.

        Every file must exist. Files are all parsed before anything is
        written; later files override earlier ones.

        Args:
            *paths: Files to load (default: .env)

        Returns:
            Names written to the environment

        Raises:
            EnvPathError: If a file cannot be read
            EnvFormatError: If a file is malformed
        """
        return self._apply(paths, override=False)

    def overload(self, *paths: str) -> tuple[str, ...]:
        """Load files, overwriting variables the environment already defines.

        Args:
            *paths: Files to load (default: .env)

        Returns:
            Names written to the environment

        Raises:
            EnvPathError: If a file cannot be read
            EnvFormatError: If a file is malformed
        """
        return self._apply(paths, override=True)

    def load_env(
        self,
        path: str = DEFAULT_PATH,
        env_key: str = DEFAULT_ENV_KEY,
        default_env: str = DEFAULT_ENV,
    ) -> LoadSummary:
        """Load the .env hierarchy for the current environment.

        Missing files are skipped. Variables set before the call are never
        overwritten; among the files, later ones win.

        Args:
            path: Base file (default: .env)
            env_key: Variable naming the environment (default: APP_ENV)
            default_env: Environment used when env_key is unset (default: dev)

        Returns:
            LoadSummary listing every file considered

        Raises:
            EnvFormatError: If any file that exists is malformed; loading
                stops immediately
        """
        _validate_path(path)
        results: list[ResourceLoadResult] = []

        base_values: dict[str, str] = {}
        for candidate in (path, f"{path}.{LOCAL_SUFFIX}"):
            self._read_optional(candidate, base_values, results)
        owned = frozenset(populate(base_values, self._environment, override=False))

        env = self._environment.get(env_key)
        if env is None:
            env = default_env

        if env == LOCAL_SUFFIX:
            logger.debug("%s is %s; skipping environment-specific files", env_key, env)
        else:
            env_values: dict[str, str] = {}
            for candidate in (f"{path}.{env}", f"{path}.{env}.{LOCAL_SUFFIX}"):
                self._read_optional(candidate, env_values, results)
            populate(env_values, self._environment, override=False, owned=owned)

        summary = LoadSummary(results=tuple(results), env=env)
        logger.info(
            "Loaded %d of %d files for environment %s (%d variables)",
            summary.successful,
            summary.total_attempted,
            env,
            summary.variables,
        )
        return summary

    def _read_optional(
        self,
        path: str,
        merged: dict[str, str],
        results: list[ResourceLoadResult],
    ) -> None:
        """Parse path into merged if it can be read; record the outcome."""
        try:
            source = self._loader.read(path)
        except EnvPathError as e:
            logger.debug("Optional file %s not loaded", path)
            results.append(ResourceLoadResult(path=path, status=LoadStatus.NOT_FOUND, error=e))
            return

        values = self._parser.parse(source, path)
        merged.update(values)
        results.append(
            ResourceLoadResult(path=path, status=LoadStatus.SUCCESS, variables=len(values))
        )

    def _apply(self, paths: tuple[str, ...], *, override: bool) -> tuple[str, ...]:
        if not paths:
            paths = (DEFAULT_PATH,)

        merged: dict[str, str] = {}
        for path in paths:
            merged.update(self.values(path))

        written = populate(merged, self._environment, override=override)
        logger.info(
            "Loaded %d variables from %d files (%d written)",
            len(merged),
            len(paths),
            len(written),
        )
        return written

    def __repr__(self) -> str:
        return f"Dotenv(loader={self._loader!r}, environment={self._environment!r})"


def _validate_path(path: str) -> None:
    if not path:
        msg = "Path cannot be empty"
        raise ValueError(msg)
