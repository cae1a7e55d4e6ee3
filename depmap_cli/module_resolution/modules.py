"""Module descriptors and the factory that resolves them from configuration."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field

from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator

from ..environment import Environment
from ..services import FileService
from ..services import LocalFileService
from .types import ModuleType
from .types import manifest_for


class PathResolutionError(Exception):
    """Raised when a module's configured path cannot be made absolute."""

    def __init__(self, path: str, cause: BaseException | None = None):
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Could not resolve module path '{path}'{detail}")


class ModuleConfig(BaseModel):
    """One declared module as written in settings."""

    type: ModuleType | None = Field(None, description="Module type (bower, golang, nodejs, ...)")
    path: str = Field(..., description="Path to the module directory or its manifest file")
    name: str = Field("", description="Display name (defaults to path)")

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value):
        if isinstance(value, str):
            return ModuleType.parse(value)
        return value

    def to_dict(self) -> dict[str, str]:
        """Convert to the dict form stored in settings files."""
        result = {"path": self.path}
        if self.type is not None:
            result = {"type": self.type.value, **result}
        if self.name:
            result["name"] = self.name
        return result


@dataclass(frozen=True)
class Module:
    """A unit of buildable code within a project.

    Attributes:
        name: Display name
        type: Build ecosystem
        target: Manifest path, or for Go the import path under the source root
        dir: Absolute path of the directory the build runs from
    """

    name: str
    type: ModuleType
    target: str
    dir: str


@dataclass
class ModuleResolution:
    """Outcome of resolving many configs; failures never block successes."""

    modules: list[Module] = field(default_factory=list)
    failures: list[tuple[ModuleConfig, PathResolutionError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class ModuleFactory:
    """Resolves ``ModuleConfig`` records into ``Module`` descriptors.

    All per-type behavior comes from the manifest table, so supporting a new
    ecosystem is a table entry rather than a new branch here.
    """

    def __init__(
        self,
        environment: Environment | None = None,
        files: FileService | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialize factory with its collaborators.

        Args:
            environment: Source root provider (defaults to current process env)
            files: Path resolver (defaults to the local filesystem)
            logger: Logger for resolution traces (defaults to this module's)
        """
        self.environment = environment if environment is not None else Environment.from_env()
        self.files = files if files is not None else LocalFileService()
        self.logger = logger or logging.getLogger(__name__)

    def new(self, module_type: ModuleType, conf: ModuleConfig) -> Module:
        """Resolve one module.

        Raises:
            PathResolutionError: The configured path could not be resolved
        """
        try:
            module_path = self.files.resolve(conf.path)
        except (OSError, ValueError) as e:
            raise PathResolutionError(conf.path, e) from e

        manifest = manifest_for(module_type)

        target = ""
        if manifest.uses_source_root:
            target = _trim_prefix(module_path, self._source_prefix())

        # Path may point at the manifest itself rather than its directory
        if manifest.filename and os.path.basename(module_path) == manifest.filename:
            module_path = os.path.dirname(module_path)

        name = conf.name or conf.path

        if not target:
            target = os.path.join(module_path, manifest.filename) if manifest.filename else module_path

        module = Module(name=name, type=module_type, target=target, dir=module_path)
        self.logger.debug(f"[module:new] {name} ({module_type.value}) -> dir={module.dir} target={module.target}")
        return module

    def new_all(self, configs: Iterable[ModuleConfig], default_type: ModuleType | None = None) -> ModuleResolution:
        """Resolve every config, collecting failures instead of stopping.

        Args:
            configs: Declared modules
            default_type: Type to use for configs that carry none

        Returns:
            ModuleResolution with modules in config order
        """
        result = ModuleResolution()
        for conf in configs:
            module_type = conf.type or default_type
            if module_type is None:
                raise ValueError(f"Module '{conf.name or conf.path}' has no type")
            try:
                result.modules.append(self.new(module_type, conf))
            except PathResolutionError as e:
                self.logger.warning(f"[module:new] skipping {conf.path}: {e}")
                result.failures.append((conf, e))
        return result

    def _source_prefix(self) -> str:
        root = self.environment.source_root
        return os.path.normpath(os.path.join(root, "src")) + "/"

    def __repr__(self) -> str:
        return f"ModuleFactory(source_root={self.environment.source_root!r}, files={self.files!r})"


def _trim_prefix(value: str, prefix: str) -> str:
    return value[len(prefix) :] if value.startswith(prefix) else value


def new_module(
    module_type: ModuleType,
    conf: ModuleConfig,
    *,
    environment: Environment | None = None,
    files: FileService | None = None,
    logger: logging.Logger | None = None,
) -> Module:
    """Resolve a single module with a one-off factory."""
    return ModuleFactory(environment=environment, files=files, logger=logger).new(module_type, conf)
