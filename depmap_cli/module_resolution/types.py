"""Module types and the manifest table that drives resolution."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class UnknownModuleTypeError(ValueError):
    """Raised when text does not name a supported module type."""


class ModuleType(str, Enum):
    """Build ecosystems a module can belong to."""

    BOWER = "bower"
    COMPOSER = "composer"
    GOLANG = "golang"
    MAVEN = "maven"
    NODEJS = "nodejs"
    RUBY = "ruby"
    SBT = "sbt"
    VENDORED_ARCHIVES = "vendoredarchives"

    @classmethod
    def parse(cls, text: str) -> ModuleType:
        """Parse a type name or one of its common aliases (case-insensitive).

        Raises:
            UnknownModuleTypeError: ``text`` names no known type
        """
        key = text.strip().lower()
        try:
            return cls(key)
        except ValueError:
            pass
        if key in _ALIASES:
            return _ALIASES[key]
        valid = ", ".join(t.value for t in cls)
        raise UnknownModuleTypeError(f"Unknown module type '{text}' (expected one of: {valid})")

    def __str__(self) -> str:
        return self.value


_ALIASES: dict[str, ModuleType] = {
    "go": ModuleType.GOLANG,
    "mvn": ModuleType.MAVEN,
    "npm": ModuleType.NODEJS,
    "node": ModuleType.NODEJS,
    "gem": ModuleType.RUBY,
    "bundler": ModuleType.RUBY,
    "scala": ModuleType.SBT,
    "archive": ModuleType.VENDORED_ARCHIVES,
    "vendored": ModuleType.VENDORED_ARCHIVES,
}


class ManifestSpec(NamedTuple):
    """How a module type locates its build target.

    Attributes:
        filename: Manifest file name, or "" when the type has none
        uses_source_root: Target is an import path relative to ``<source_root>/src``
    """

    filename: str
    uses_source_root: bool = False


MANIFESTS: dict[ModuleType, ManifestSpec] = {
    ModuleType.BOWER: ManifestSpec("bower.json"),
    ModuleType.COMPOSER: ManifestSpec("composer.json"),
    ModuleType.GOLANG: ManifestSpec("", uses_source_root=True),
    ModuleType.MAVEN: ManifestSpec("pom.xml"),
    ModuleType.NODEJS: ManifestSpec("package.json"),
    ModuleType.RUBY: ManifestSpec("Gemfile"),
    ModuleType.SBT: ManifestSpec("build.sbt"),
    ModuleType.VENDORED_ARCHIVES: ManifestSpec(""),
}


def manifest_for(module_type: ModuleType) -> ManifestSpec:
    """Look up the manifest spec for a module type."""
    return MANIFESTS[module_type]


def types_by_manifest() -> dict[str, list[ModuleType]]:
    """Reverse index of manifest filename to the types that use it.

    Types without a manifest file are left out.
    """
    index: dict[str, list[ModuleType]] = {}
    for module_type, spec in MANIFESTS.items():
        if spec.filename:
            index.setdefault(spec.filename, []).append(module_type)
    return index
