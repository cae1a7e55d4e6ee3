"""Dependencies and locator-keyed deduplication.

A dependency is anything that can name its own locator. Ecosystem analyzers
supply their own variants; the two here cover git remotes and registry
packages.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from typing import runtime_checkable

from ..locators import GIT_FETCHER
from ..locators import Locator


@runtime_checkable
class Dependency(Protocol):
    """Something resolved by a build that can report its locator."""

    def locator(self) -> Locator: ...


@dataclass(frozen=True)
class GitDependency:
    """A dependency fetched straight from a git remote."""

    remote: str
    revision: str

    def locator(self) -> Locator:
        return Locator(GIT_FETCHER, self.remote, self.revision)


@dataclass(frozen=True)
class PackageDependency:
    """A dependency fetched from a package registry (npm, mvn, gem, ...)."""

    fetcher: str
    name: str
    version: str

    def locator(self) -> Locator:
        return Locator(self.fetcher, self.name, self.version)


class LocatorDeduplicator:
    """Collapses dependencies that share a locator, tracking every origin."""

    def __init__(self) -> None:
        self._first: dict[str, Dependency] = {}
        self._origins: dict[str, list[Dependency]] = {}

    def add(self, dependency: Dependency) -> str:
        """Record a dependency.

        Args:
            dependency: Dependency to record

        Returns:
            The locator key it was filed under
        """
        key = dependency.locator().key
        if key not in self._first:
            self._first[key] = dependency
            self._origins[key] = []
        self._origins[key].append(dependency)
        return key

    def add_all(self, dependencies: Iterable[Dependency]) -> None:
        for dependency in dependencies:
            self.add(dependency)

    def unique(self) -> list[Dependency]:
        """One dependency per locator, in first-seen order."""
        return list(self._first.values())

    def locators(self) -> list[Locator]:
        return [dep.locator().normalized() for dep in self._first.values()]

    def origins(self, locator: Locator | str) -> list[Dependency]:
        """Every recorded dependency that collapsed onto ``locator``."""
        key = locator.key if isinstance(locator, Locator) else locator
        return list(self._origins.get(key, []))

    def __len__(self) -> int:
        return len(self._first)
