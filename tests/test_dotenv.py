"""Tests for the Dotenv orchestrator.

Files are real (tmp_path); the environment is a MemoryEnvironment so the
process environment is never touched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeAlias
from pathlib import Path

import pytest

from envlexengine import (
    Dotenv,
    EnvFormatError,
    EnvParser,
    EnvPathError,
    MemoryEnvironment,
    PathSourceLoader,
)
from envlexengine.diagnostics import ErrorTemplate
from envlexengine.enums import LoadStatus

WriteEnv: TypeAlias = Callable[[str, str], str]


class DictLoader:
    """In-memory SourceLoader keyed by path."""

    def __init__(self, files: dict[str, str]) -> None:
        self.files = files
        self.reads: list[str] = []

    def read(self, path: str) -> str:
        self.reads.append(path)
        try:
            return self.files[path]
        except KeyError as e:
            raise EnvPathError(ErrorTemplate.path_unreadable(path), path) from e


# ============================================================================
# CONSTRUCTION
# ============================================================================


class TestDotenvConstruction:
    """Test defaults and injected collaborators."""

    def test_defaults(self) -> None:
        """Default collaborators are created."""
        dotenv = Dotenv()

        assert isinstance(dotenv.loader, PathSourceLoader)
        assert isinstance(dotenv.parser, EnvParser)

    def test_injected(self, memory_env: MemoryEnvironment) -> None:
        """Injected collaborators are used as-is."""
        loader = DictLoader({})
        parser = EnvParser(max_source_size=100)
        dotenv = Dotenv(loader=loader, environment=memory_env, parser=parser)

        assert dotenv.loader is loader
        assert dotenv.environment is memory_env
        assert dotenv.parser is parser

    def test_parse_does_not_touch_environment(
        self, dotenv: Dotenv, memory_env: MemoryEnvironment
    ) -> None:
        """parse() only returns the mapping."""
        assert dotenv.parse("A=1") == {"A": "1"}
        assert memory_env.as_dict() == {}


# ============================================================================
# VALUES / LOAD / OVERLOAD
# ============================================================================


class TestValues:
    """Test values()."""

    def test_reads_and_parses(self, dotenv: Dotenv, write_env: WriteEnv) -> None:
        """values() returns the parsed mapping."""
        path = write_env(".env", "A=1\nB='two words'\n")

        assert dotenv.values(path) == {"A": "1", "B": "two words"}

    def test_empty_path(self, dotenv: Dotenv) -> None:
        """An empty path is rejected."""
        with pytest.raises(ValueError, match="Path cannot be empty"):
            dotenv.values("")

    def test_error_names_file(self, dotenv: Dotenv, write_env: WriteEnv) -> None:
        """Format errors report the file path."""
        path = write_env("broken.env", "A=1\nB = 2\n")

        with pytest.raises(EnvFormatError) as exc_info:
            dotenv.values(path)

        assert exc_info.value.path == path
        assert exc_info.value.line_number == 2


class TestLoad:
    """Test load() and overload()."""

    def test_load_sets_variables(
        self, dotenv: Dotenv, memory_env: MemoryEnvironment, write_env: WriteEnv
    ) -> None:
        """load() writes parsed variables."""
        path = write_env(".env", "A=1\nB=2\n")

        assert dotenv.load(path) == ("A", "B")
        assert memory_env.as_dict() == {"A": "1", "B": "2"}

    def test_load_keeps_existing(self, write_env: WriteEnv) -> None:
        """load() does not overwrite variables already set."""
        env = MemoryEnvironment({"A": "preset"})
        path = write_env(".env", "A=1\nB=2\n")

        Dotenv(environment=env).load(path)

        assert env.as_dict() == {"A": "preset", "B": "2"}

    def test_overload_replaces_existing(self, write_env: WriteEnv) -> None:
        """overload() overwrites variables already set."""
        env = MemoryEnvironment({"A": "preset"})
        path = write_env(".env", "A=1\nB=2\n")

        assert Dotenv(environment=env).overload(path) == ("A", "B")
        assert env.as_dict() == {"A": "1", "B": "2"}

    def test_later_files_win(
        self, dotenv: Dotenv, memory_env: MemoryEnvironment, write_env: WriteEnv
    ) -> None:
        """With several paths, later files override earlier ones."""
        first = write_env("a.env", "X=1\nY=1\n")
        second = write_env("b.env", "X=2\n")

        dotenv.load(first, second)

        assert memory_env.as_dict() == {"X": "2", "Y": "1"}

    def test_missing_file_raises(self, dotenv: Dotenv, tmp_path: Path) -> None:
        """load() requires every file to exist."""
        with pytest.raises(EnvPathError):
            dotenv.load(str(tmp_path / "absent.env"))

    def test_nothing_applied_on_format_error(
        self, dotenv: Dotenv, memory_env: MemoryEnvironment, write_env: WriteEnv
    ) -> None:
        """A malformed file leaves the environment untouched."""
        good = write_env("good.env", "A=1\n")
        bad = write_env("bad.env", "B=2\nC=has space\n")

        with pytest.raises(EnvFormatError):
            dotenv.load(good, bad)

        assert memory_env.as_dict() == {}

    def test_default_path(self, memory_env: MemoryEnvironment) -> None:
        """Without arguments .env is loaded."""
        loader = DictLoader({".env": "A=1"})

        Dotenv(loader=loader, environment=memory_env).load()

        assert loader.reads == [".env"]
        assert memory_env.get("A") == "1"

    def test_logs_counts_at_info(
        self, dotenv: Dotenv, write_env: WriteEnv, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A completed load is logged at INFO without values."""
        path = write_env(".env", "SECRET=hunter2\n")

        with caplog.at_level(logging.INFO, logger="envlexengine.dotenv"):
            dotenv.load(path)

        assert "Loaded 1 variables from 1 files" in caplog.text
        assert "hunter2" not in caplog.text


# ============================================================================
# HIERARCHICAL LOAD
# ============================================================================


class TestLoadEnv:
    """Test load_env() file hierarchy."""

    def test_precedence_for_dev(self, memory_env: MemoryEnvironment) -> None:
        """The environment-specific file beats base and base.local."""
        loader = DictLoader({".env": "X=1", ".env.local": "X=2", ".env.dev": "X=3"})

        Dotenv(loader=loader, environment=memory_env).load_env(".env", "APP_ENV", "dev")

        assert memory_env.get("X") == "3"

    def test_precedence_for_local(self, memory_env: MemoryEnvironment) -> None:
        """With selector local, base.local is the last file."""
        loader = DictLoader({".env": "X=1", ".env.local": "X=2", ".env.dev": "X=3"})
        dotenv = Dotenv(loader=loader, environment=memory_env)

        summary = dotenv.load_env(".env", "APP_ENV", "local")

        assert memory_env.get("X") == "2"
        assert summary.env == "local"
        assert loader.reads == [".env", ".env.local"]

    def test_full_order(self, memory_env: MemoryEnvironment) -> None:
        """All four files are read in precedence order."""
        loader = DictLoader(
            {
                ".env": "A=base\nB=base\nC=base\nD=base",
                ".env.local": "B=local\nC=local\nD=local",
                ".env.prod": "C=prod\nD=prod",
                ".env.prod.local": "D=prod-local",
            }
        )
        memory_env.set("APP_ENV", "prod")

        summary = Dotenv(loader=loader, environment=memory_env).load_env()

        assert loader.reads == [".env", ".env.local", ".env.prod", ".env.prod.local"]
        assert memory_env.as_dict() == {
            "APP_ENV": "prod",
            "A": "base",
            "B": "local",
            "C": "prod",
            "D": "prod-local",
        }
        assert summary.successful == 4
        assert summary.variables == 10

    def test_preexisting_variables_survive(self) -> None:
        """Variables set before the call are never overwritten."""
        env = MemoryEnvironment({"X": "preset"})
        loader = DictLoader({".env": "X=1", ".env.dev": "X=3"})

        Dotenv(loader=loader, environment=env).load_env()

        assert env.get("X") == "preset"

    def test_selector_from_base_file(self, memory_env: MemoryEnvironment) -> None:
        """The selector may be set by .env itself."""
        loader = DictLoader({".env": "APP_ENV=staging\nX=1", ".env.staging": "X=2"})

        summary = Dotenv(loader=loader, environment=memory_env).load_env()

        assert summary.env == "staging"
        assert memory_env.get("X") == "2"

    def test_selector_from_environment(self, write_env: WriteEnv) -> None:
        """A selector already in the environment wins over the files."""
        env = MemoryEnvironment({"APP_ENV": "test"})
        base = write_env(".env", "APP_ENV=prod\nX=1\n")
        write_env(".env.test", "X=test\n")
        write_env(".env.prod", "X=prod\n")

        summary = Dotenv(environment=env).load_env(base)

        assert summary.env == "test"
        assert env.get("X") == "test"

    def test_custom_env_key(self, memory_env: MemoryEnvironment) -> None:
        """env_key names the selector variable."""
        loader = DictLoader({".env": "STAGE=qa", ".env.qa": "X=qa"})

        summary = Dotenv(loader=loader, environment=memory_env).load_env(env_key="STAGE")

        assert summary.env == "qa"
        assert memory_env.get("X") == "qa"

    def test_missing_files_skipped(
        self, memory_env: MemoryEnvironment, write_env: WriteEnv
    ) -> None:
        """Absent files are recorded as NOT_FOUND and skipped."""
        base = write_env(".env", "A=1\n")

        summary = Dotenv(environment=memory_env).load_env(base)

        assert memory_env.as_dict() == {"A": "1"}
        assert [r.status for r in summary.results] == [
            LoadStatus.SUCCESS,
            LoadStatus.NOT_FOUND,
            LoadStatus.NOT_FOUND,
            LoadStatus.NOT_FOUND,
        ]
        assert summary.results[1].path == f"{base}.local"
        assert summary.results[2].path == f"{base}.dev"

    def test_no_files_at_all(self, memory_env: MemoryEnvironment, tmp_path: Path) -> None:
        """A hierarchy without any file loads nothing."""
        summary = Dotenv(environment=memory_env).load_env(str(tmp_path / ".env"))

        assert summary.successful == 0
        assert summary.not_found == 4
        assert memory_env.as_dict() == {}

    def test_format_error_aborts(self, memory_env: MemoryEnvironment) -> None:
        """A malformed file stops the load immediately."""
        loader = DictLoader({".env": "A=1", ".env.local": "B =2", ".env.dev": "C=3"})

        with pytest.raises(EnvFormatError) as exc_info:
            Dotenv(loader=loader, environment=memory_env).load_env()

        assert exc_info.value.path == ".env.local"
        assert loader.reads == [".env", ".env.local"]
        assert memory_env.as_dict() == {}

    def test_format_error_in_env_file(self, memory_env: MemoryEnvironment) -> None:
        """A malformed environment-specific file propagates after phase one applied."""
        loader = DictLoader({".env": "A=1", ".env.dev": "export B"})

        with pytest.raises(EnvFormatError) as exc_info:
            Dotenv(loader=loader, environment=memory_env).load_env()

        assert exc_info.value.message == "Unable to unset an environment variable"
        assert memory_env.as_dict() == {"A": "1"}

    def test_empty_path(self, dotenv: Dotenv) -> None:
        """An empty base path is rejected."""
        with pytest.raises(ValueError, match="Path cannot be empty"):
            dotenv.load_env("")
