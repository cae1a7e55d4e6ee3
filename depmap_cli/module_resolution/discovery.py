"""Module discovery - convention over configuration.

Finds manifest files under a directory tree and proposes a ``ModuleConfig``
for each one, using the same manifest table the factory resolves against.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from pathlib import Path

from .modules import ModuleConfig
from .types import types_by_manifest

logger = logging.getLogger(__name__)

SKIPPED_DIRS = frozenset({"node_modules", "bower_components", "vendor", "target", ".git"})


def _should_skip(path: Path) -> bool:
    return path.name in SKIPPED_DIRS or path.name.startswith(".")


def discover_modules(root: str | Path, *, max_depth: int = 4) -> list[ModuleConfig]:
    """Propose module configs for every manifest under ``root``.

    Hidden directories and dependency caches (node_modules, vendor, ...) are
    not descended into. Types without a manifest file (Go, vendored
    archives) are never discovered.

    Args:
        root: Directory to scan
        max_depth: How many directory levels below ``root`` to visit

    Returns:
        Configs sorted by path, then type. Paths are ``root`` joined with the
        module's directory; names are the directory relative to ``root``.

    Example:
        >>> for conf in discover_modules("."):
        ...     print(conf.type, conf.path)
    """
    root_path = Path(root)
    manifests = types_by_manifest()
    found: list[ModuleConfig] = []

    queue: deque[tuple[Path, int]] = deque([(root_path, 0)])
    while queue:
        directory, depth = queue.popleft()
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            logger.debug(f"[module:discover] cannot read {directory}: {e}")
            continue

        rel = directory.relative_to(root_path).as_posix()
        for entry in entries:
            if entry.is_dir():
                if depth < max_depth and not _should_skip(entry):
                    queue.append((entry, depth + 1))
                continue
            for module_type in manifests.get(entry.name, []):
                name = rel if rel != "." else root_path.resolve().name
                path = os.path.normpath(os.path.join(str(root_path), rel))
                found.append(ModuleConfig(type=module_type, path=path, name=name))
                logger.debug(f"[module:discover] {module_type.value} manifest at {entry}")

    return sorted(found, key=lambda conf: (conf.path, conf.type.value if conf.type else ""))
