"""Module resolution - where each buildable unit's manifest lives on disk.

Resolution is driven by a fixed manifest table keyed by module type; the
factory applies it uniformly to every declared module.
"""

from .dependencies import Dependency
from .dependencies import GitDependency
from .dependencies import LocatorDeduplicator
from .dependencies import PackageDependency
from .discovery import discover_modules
from .modules import Module
from .modules import ModuleConfig
from .modules import ModuleFactory
from .modules import ModuleResolution
from .modules import PathResolutionError
from .modules import new_module
from .types import MANIFESTS
from .types import ManifestSpec
from .types import ModuleType
from .types import UnknownModuleTypeError

__all__ = [
    "Dependency",
    "GitDependency",
    "LocatorDeduplicator",
    "MANIFESTS",
    "ManifestSpec",
    "Module",
    "ModuleConfig",
    "ModuleFactory",
    "ModuleResolution",
    "ModuleType",
    "PackageDependency",
    "PathResolutionError",
    "UnknownModuleTypeError",
    "discover_modules",
    "new_module",
]
