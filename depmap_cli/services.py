"""Filesystem service used by module resolution and discovery.

Each service is a narrow protocol of side-effecting calls so that the
resolution logic can be exercised against a fake in tests.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any
from typing import Protocol

logger = logging.getLogger(__name__)

UnmarshalFunc = Callable[[bytes], Any]


class FileService(Protocol):
    """Filesystem interaction needed by the resolver."""

    def resolve(self, path: str) -> str:
        """Return the absolute, normalized form of ``path``."""
        ...

    def has_file(self, path: str | Path) -> bool: ...

    def has_folder(self, path: str | Path) -> bool: ...

    def read_file(self, path: str | Path) -> bytes: ...

    def read_json(self, path: str | Path) -> Any: ...

    def read_unmarshal(self, path: str | Path, unmarshal: UnmarshalFunc) -> Any: ...


class LocalFileService:
    """Default ``FileService`` backed by the local filesystem."""

    def resolve(self, path: str) -> str:
        """Absolute path without following symlinks or checking existence.

        Raises:
            OSError: The working directory cannot be determined
        """
        return os.path.abspath(path)

    def has_file(self, path: str | Path) -> bool:
        return Path(path).is_file()

    def has_folder(self, path: str | Path) -> bool:
        return Path(path).is_dir()

    def read_file(self, path: str | Path) -> bytes:
        logger.debug(f"Reading file: {path}")
        return Path(path).read_bytes()

    def read_json(self, path: str | Path) -> Any:
        return self.read_unmarshal(path, json.loads)

    def read_unmarshal(self, path: str | Path, unmarshal: UnmarshalFunc) -> Any:
        """Read ``path`` and decode it with ``unmarshal`` (e.g. ``json.loads``)."""
        return unmarshal(self.read_file(path))

    def __repr__(self) -> str:
        return "LocalFileService()"
