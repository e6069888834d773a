"""EnvLexEngine - strict .env file parser and loader.

Parses .env files (NAME=value per line, single/double quotes, comments,
optional export prefix) with a cursor-driven lexer that reports the exact
line of every syntax error, and loads the results into the process
environment, optionally through an environment-specific file hierarchy.

Public API:
    Dotenv - Loader orchestrating file reading, parsing and populating
    EnvParser - Pure text-to-mapping parser
    parse_env - Parse .env text to a dict
    dotenv_values - Read and parse a file to a dict
    load / overload / load_env - Module-level shortcuts on a default Dotenv

Exceptions:
    EnvError - Base exception class
    EnvFormatError - Malformed .env content (message, path, line_number)
    EnvPathError - File could not be read (path)

Submodules:
    envlexengine.syntax - Cursor, parser and grammar rules
    envlexengine.diagnostics - Error types, codes and formatting
    envlexengine.loading - Source loaders and load summaries
    envlexengine.environment - Environment sinks (os.environ, in-memory)
"""

from .constants import DEFAULT_ENV, DEFAULT_ENV_KEY, DEFAULT_PATH
from .diagnostics import EnvError, EnvFormatError, EnvPathError
from .dotenv import Dotenv
from .environment import EnvironmentSink, MemoryEnvironment, OsEnvironment
from .loading import LoadSummary, PathSourceLoader, SourceLoader
from .syntax import EnvParser
from .syntax import parse as parse_env

try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("envlexengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"


def dotenv_values(path: str = DEFAULT_PATH) -> dict[str, str]:
    """Read and parse a .env file without touching the environment."""
    return Dotenv().values(path)


def load(*paths: str) -> tuple[str, ...]:
    """Load files into os.environ, keeping variables that are already set."""
    return Dotenv().load(*paths)


def overload(*paths: str) -> tuple[str, ...]:
    """Load files into os.environ, overwriting variables that are already set."""
    return Dotenv().overload(*paths)


def load_env(
    path: str = DEFAULT_PATH,
    env_key: str = DEFAULT_ENV_KEY,
    default_env: str = DEFAULT_ENV,
) -> LoadSummary:
    """Load the .env hierarchy into os.environ. See Dotenv.load_env()."""
    return Dotenv().load_env(path, env_key, default_env)


__all__ = [
    "Dotenv",
    "EnvError",
    "EnvFormatError",
    "EnvParser",
    "EnvPathError",
    "EnvironmentSink",
    "LoadSummary",
    "MemoryEnvironment",
    "OsEnvironment",
    "PathSourceLoader",
    "SourceLoader",
    "__version__",
    "dotenv_values",
    "load",
    "load_env",
    "overload",
    "parse_env",
]
