"""CLI-specific path policy and dependency injection helpers.

Commands get their settings manager and module factory from here so tests
can patch a single seam.
"""

import logging
from pathlib import Path
from typing import Literal

from .environment import Environment
from .module_resolution import ModuleFactory
from .services import LocalFileService
from .settings import Scope
from .settings import SettingsManager

# Type alias for scope names used in CLI flags
ScopeType = Literal["local", "project", "global"]

_SCOPE_MAP: dict[ScopeType, Scope] = {
    "local": "local",
    "project": "project",
    "global": "user",
}


def is_running_from_home() -> bool:
    """Check if running from the home directory."""
    return Path.cwd() == Path.home()


def get_settings_scope(scope_flag: ScopeType | None) -> Scope:
    """Map a CLI scope flag to a settings scope.

    Defaults to project scope, or user scope when running from the home
    directory, where a project .depmap/ would shadow the user one.
    """
    if scope_flag is None:
        return "user" if is_running_from_home() else "project"
    return _SCOPE_MAP[scope_flag]


def create_settings_manager() -> SettingsManager:
    """Create settings manager with CLI path conventions."""
    return SettingsManager(depmap_dir=Path(".depmap"))


def create_module_factory(logger: logging.Logger | None = None) -> ModuleFactory:
    """Create a module factory bound to the current environment and local filesystem."""
    return ModuleFactory(
        environment=Environment.from_env(),
        files=LocalFileService(),
        logger=logger or logging.getLogger("depmap_cli.modules"),
    )
