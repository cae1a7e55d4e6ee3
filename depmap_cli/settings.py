"""Settings manager for depmap settings.yaml files.

Manages three-scope settings system:
- User global (~/.depmap/settings.yaml)
- Project (.depmap/settings.yaml)
- Local (.depmap/settings.local.yaml)
"""

import logging
from pathlib import Path
from typing import Any
from typing import Literal

import yaml

from .module_resolution import ModuleConfig
from .module_resolution import ModuleType

logger = logging.getLogger(__name__)

Scope = Literal["user", "project", "local"]


class SettingsManager:
    """Manages settings across user/project/local scopes."""

    def __init__(self, depmap_dir: Path | None = None, user_settings_file: Path | None = None):
        """Initialize settings manager with standard paths.

        Args:
            depmap_dir: Base directory for project/local settings (for testing).
                        If None, uses .depmap in current directory.
            user_settings_file: User settings file (for testing).
                                If None, uses ~/.depmap/settings.yaml.
        """
        if depmap_dir is None:
            depmap_dir = Path(".depmap")

        self.user_settings_file = user_settings_file or Path.home() / ".depmap" / "settings.yaml"
        self.project_settings_file = depmap_dir / "settings.yaml"
        self.local_settings_file = depmap_dir / "settings.local.yaml"

    def _scope_file(self, scope: Scope) -> Path:
        file_map = {
            "user": self.user_settings_file,
            "project": self.project_settings_file,
            "local": self.local_settings_file,
        }
        return file_map.get(scope, self.project_settings_file)

    def get_module_configs(self) -> list[ModuleConfig]:
        """Get declared modules from all scopes.

        Lists are concatenated user, project, local. An entry with the same
        (type, path) as an earlier one replaces it in place.

        Returns:
            Module configs in declaration order

        Raises:
            pydantic.ValidationError: A module entry is malformed
        """
        merged: dict[tuple[str, str], ModuleConfig] = {}

        for path in (self.user_settings_file, self.project_settings_file, self.local_settings_file):
            settings = self._read_settings(path)
            if not settings or not settings.get("modules"):
                continue
            for entry in settings["modules"]:
                conf = ModuleConfig.model_validate(entry)
                key = (conf.type.value if conf.type else "", conf.path)
                merged[key] = conf

        return list(merged.values())

    def add_module(self, conf: ModuleConfig, scope: Scope = "project") -> None:
        """Declare a module in one scope, replacing any entry with the same type and path.

        Args:
            conf: Module to declare
            scope: "user", "project", or "local"
        """
        target_file = self._scope_file(scope)
        settings = self._read_settings(target_file) or {}
        modules = [m for m in settings.get("modules") or [] if not _same_module(m, conf.type, conf.path)]
        modules.append(conf.to_dict())
        settings["modules"] = modules
        self._write_settings(target_file, settings)
        logger.info(f"Added {scope} module {conf.path} ({conf.type})")

    def remove_module(self, path: str, module_type: ModuleType | None = None, scope: Scope = "project") -> bool:
        """Remove module declarations matching ``path`` (and ``module_type`` if given).

        Args:
            path: Configured module path
            module_type: Only remove entries of this type
            scope: "user", "project", or "local"

        Returns:
            True if removed, False if not found
        """
        target_file = self._scope_file(scope)
        settings = self._read_settings(target_file)

        if not settings or not settings.get("modules"):
            return False

        kept = [m for m in settings["modules"] if not _same_module(m, module_type, path)]
        if len(kept) == len(settings["modules"]):
            return False

        if kept:
            settings["modules"] = kept
        else:
            # Clean up empty modules section
            del settings["modules"]

        self._write_settings(target_file, settings)
        logger.info(f"Removed {scope} module {path}")
        return True

    def get_merged_settings(self) -> dict[str, Any]:
        """Get merged settings from all scopes.

        Merge order (later overrides earlier):
        1. User settings
        2. Project settings
        3. Local settings

        The ``modules`` key is replaced by ``get_module_configs()`` semantics
        rather than overwritten by the highest scope.

        Returns:
            Merged settings dictionary
        """
        merged: dict[str, Any] = {}

        for path in (self.user_settings_file, self.project_settings_file, self.local_settings_file):
            settings = self._read_settings(path)
            if settings:
                merged = self._deep_merge(merged, settings)

        if "modules" in merged:
            merged["modules"] = [conf.to_dict() for conf in self.get_module_configs()]

        return merged

    def _read_settings(self, path: Path) -> dict[str, Any] | None:
        """Read settings from YAML file.

        Args:
            path: Path to settings file

        Returns:
            Settings dict or None if file doesn't exist, can't be parsed, or
            isn't a mapping
        """
        if not path.exists():
            return None

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

        if not data:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings in {path}: expected a mapping, got {type(data).__name__}")
            return None
        return data

    def _write_settings(self, path: Path, settings: dict[str, Any]) -> None:
        """Write settings to YAML file.

        Args:
            path: Path to settings file
            settings: Settings dictionary
        """
        # Ensure directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(path, "w") as f:
                yaml.dump(settings, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            logger.error(f"Failed to write settings to {path}: {e}")
            raise

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            overlay: Overlay dictionary (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def _same_module(entry: Any, module_type: ModuleType | None, path: str) -> bool:
    if not isinstance(entry, dict) or entry.get("path") != path:
        return False
    if module_type is None:
        return True
    raw_type = entry.get("type")
    try:
        return raw_type is not None and ModuleType.parse(str(raw_type)) == module_type
    except ValueError:
        return False
