"""Locator codec - canonical string identity for resolved dependencies.

A locator combines a fetcher, a project and a revision into one key:

    <fetcher>+<project>$<revision>

Git projects are canonicalized first so that every spelling of the same
remote (SSH or HTTPS, with or without ``.git``) produces the same key.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

GIT_FETCHER = "git"

_GITHUB_SSH = "git@github.com:"
_GITHUB_PATH = "github.com/"


def _trim_prefix(value: str, prefix: str) -> str:
    return value[len(prefix) :] if value.startswith(prefix) else value


def _trim_suffix(value: str, suffix: str) -> str:
    return value[: -len(suffix)] if suffix and value.endswith(suffix) else value


def normalize_git_project(project: str) -> str:
    """Canonicalize a git remote so equivalent spellings compare equal.

    Steps run in order, each on the previous step's output:

    1. strip a leading ``git+`` (project taken from a split locator)
    2. strip a trailing ``.git``
    3. rewrite the first ``git@github.com:`` as ``github.com/``
    4. strip a leading ``http://``
    5. strip a leading ``https://``

    Only GitHub SSH remotes are rewritten. Other hosts keep their SSH form.

    Examples:
        >>> normalize_git_project("git@github.com:org/repo.git")
        'github.com/org/repo'
        >>> normalize_git_project("https://github.com/org/repo.git")
        'github.com/org/repo'
    """
    value = _trim_prefix(project, "git+")
    value = _trim_suffix(value, ".git")
    value = value.replace(_GITHUB_SSH, _GITHUB_PATH, 1)
    value = _trim_prefix(value, "http://")
    return _trim_prefix(value, "https://")


def make_locator(fetcher: str, project: str, revision: str, *, log: logging.Logger | None = None) -> str:
    """Build the locator string for a dependency.

    Args:
        fetcher: Resolution mechanism (``git``, ``npm``, ``mvn``, ...)
        project: Project identifier; normalized only for the git fetcher
        revision: Resolved revision or version
        log: Logger for normalization traces (defaults to this module's)

    Returns:
        Locator string
    """
    if fetcher != GIT_FETCHER:
        return fetcher + "+" + project + "$" + revision

    normalized = normalize_git_project(project)
    if normalized != project:
        (log or logger).debug(f"[locator] normalized git project {project!r} -> {normalized!r}")
    return "git+" + normalized + "$" + revision


@dataclass(frozen=True, eq=False)
class Locator:
    """Immutable ``(fetcher, project, revision)`` value.

    Equality and hashing use the encoded string, so a git locator built from
    an SSH remote equals one built from the HTTPS remote of the same repo.
    """

    fetcher: str
    project: str
    revision: str

    @classmethod
    def parse(cls, text: str) -> Locator:
        """Split a locator string back into its parts.

        The fetcher ends at the first ``+`` and the revision starts after the
        first ``$`` that follows it. Missing separators leave the
        corresponding part empty.
        """
        fetcher, sep, rest = text.partition("+")
        if not sep:
            fetcher, rest = "", text
        project, _, revision = rest.partition("$")
        return cls(fetcher=fetcher, project=project, revision=revision)

    @property
    def key(self) -> str:
        """Encoded form used as the dependency graph key."""
        return make_locator(self.fetcher, self.project, self.revision)

    def normalized(self) -> Locator:
        """Return a locator whose project field is already canonical."""
        if self.fetcher != GIT_FETCHER:
            return self
        return Locator(self.fetcher, normalize_git_project(self.project), self.revision)

    def __str__(self) -> str:
        return self.key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Locator):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)
