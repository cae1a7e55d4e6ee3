"""Process environment values consumed by module resolution."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

SOURCE_ROOT_VAR = "GOPATH"


@dataclass(frozen=True)
class Environment:
    """Read-only snapshot of the environment for one analysis run.

    Attributes:
        source_root: Root under which ``src/`` holds import-path addressable
            Go code. Empty when unset.
    """

    source_root: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Environment:
        """Capture the environment once so later lookups cannot drift."""
        if environ is None:
            environ = os.environ
        return cls(source_root=environ.get(SOURCE_ROOT_VAR, ""))
