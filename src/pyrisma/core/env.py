"""
Resolution of ``env("VAR")`` values in datasource blocks.

Lookups go through an ordered list of providers so that parsing can be made
deterministic in tests by injecting a fixed mapping.

Default order:
    1. The process environment
    2. A local dotenv file (``.env`` next to the schema unless configured)
    3. A literal ``env(VAR)`` placeholder

Usage:
    from pyrisma.core.env import EnvResolver, MappingEnvProvider

    resolver = EnvResolver([MappingEnvProvider({"DATABASE_URL": "postgresql://..."})])
    resolver.resolve("DATABASE_URL")
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


class EnvProvider(Protocol):
    """A source of environment values. Returns None when it has no value."""

    def lookup(self, name: str) -> str | None: ...


class ProcessEnvProvider:
    """Reads from ``os.environ``."""

    def lookup(self, name: str) -> str | None:
        return os.environ.get(name)


class DotenvFileProvider:
    """
    Reads ``NAME=value`` lines from a dotenv file.

    The file is read lazily on first lookup. A missing file yields no values.
    """

    def __init__(self, path: Path):
        self.path = path
        self._values: dict[str, str | None] | None = None

    def lookup(self, name: str) -> str | None:
        if self._values is None:
            if self.path.is_file():
                self._values = dict(dotenv_values(self.path))
            else:
                logger.debug("No dotenv file at %s", self.path)
                self._values = {}
        return self._values.get(name)


class MappingEnvProvider:
    """Serves values from a fixed mapping."""

    def __init__(self, values: Mapping[str, str]):
        self.values = dict(values)

    def lookup(self, name: str) -> str | None:
        return self.values.get(name)


class PlaceholderProvider:
    """Always answers with the literal ``env(NAME)`` text."""

    def lookup(self, name: str) -> str | None:
        logger.warning(
            "Environment variable %s not found in the environment or dotenv file; "
            "using placeholder env(%s)",
            name,
            name,
        )
        return placeholder(name)


def placeholder(name: str) -> str:
    return f"env({name})"


class EnvResolver:
    """Tries each provider in order and returns the first value found."""

    def __init__(self, providers: Sequence[EnvProvider]):
        self.providers = list(providers)

    def resolve(self, name: str) -> str:
        for provider in self.providers:
            value = provider.lookup(name)
            if value is not None:
                return value
        return placeholder(name)

    @classmethod
    def default(cls, env_file: Path | None = None) -> EnvResolver:
        """Process environment, then ``env_file`` (default ``./.env``), then a placeholder."""
        return cls(
            [
                ProcessEnvProvider(),
                DotenvFileProvider(env_file or Path(".env")),
                PlaceholderProvider(),
            ]
        )
