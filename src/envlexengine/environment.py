"""Environment sinks: where parsed variables end up.

The process environment is the one shared, mutable resource in the
library. It sits behind the narrow EnvironmentSink protocol so callers
and tests can swap it for an in-memory mapping.

Thread Safety:
    Not synchronized. populate() with override=False reads presence and
    then writes, which races with any concurrent mutation of the same
    sink. Callers that populate from several threads must serialize.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Set as AbstractSet
from typing import Protocol

__all__ = [
    "EnvironmentSink",
    "MemoryEnvironment",
    "OsEnvironment",
    "populate",
]

logger = logging.getLogger(__name__)


class EnvironmentSink(Protocol):
    """Protocol for a name/value store receiving parsed variables."""

    def get(self, name: str) -> str | None:
        """Return the current value of name, or None if unset."""

    def set(self, name: str, value: str) -> None:
        """Set name to value."""

    def contains(self, name: str) -> bool:
        """Check if name currently has a value."""


class OsEnvironment:
    """Sink backed by os.environ (the real process environment)."""

    __slots__ = ()

    def get(self, name: str) -> str | None:
        return os.environ.get(name)

    def set(self, name: str, value: str) -> None:
        os.environ[name] = value

    def contains(self, name: str) -> bool:
        return name in os.environ

    def __repr__(self) -> str:
        return "OsEnvironment()"


class MemoryEnvironment:
    """Dict-backed sink for tests and for embedding without touching os.environ.

    Example:
        >>> env = MemoryEnvironment({"HOME": "/root"})
        >>> env.set("APP_ENV", "prod")
        >>> env.as_dict()
        {'HOME': '/root', 'APP_ENV': 'prod'}
    """

    __slots__ = ("_values",)

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial) if initial else {}

    def get(self, name: str) -> str | None:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def contains(self, name: str) -> bool:
        return name in self._values

    def as_dict(self) -> dict[str, str]:
        """Return a copy of the stored variables."""
        return dict(self._values)

    def __repr__(self) -> str:
        return f"MemoryEnvironment({len(self._values)} variables)"


def populate(
    values: Mapping[str, str],
    sink: EnvironmentSink,
    *,
    override: bool,
    owned: AbstractSet[str] = frozenset(),
) -> tuple[str, ...]:
    """Write parsed variables into a sink.

    Args:
        values: Parsed name/value mapping
        sink: Destination environment
        override: True to always write; False to keep names the sink
            already has
        owned: Names written earlier by the same load; these are
            overwritten even when override is False

    Returns:
        Names actually written, in mapping order

    Example:
        >>> env = MemoryEnvironment({"A": "old"})
        >>> populate({"A": "new", "B": "2"}, env, override=False)
        ('B',)
        >>> env.get("A")
        'old'
    """
    written: list[str] = []
    for name, value in values.items():
        if not override and name not in owned and sink.contains(name):
            logger.debug("Keeping existing value of %s", name)
            continue
        sink.set(name, value)
        written.append(name)
        logger.debug("Set %s", name)
    return tuple(written)
