"""CLI configuration schema and loader.

Settings come from the merged settings.yaml scopes; a few values can be
overridden from the environment so CI jobs don't have to write files.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError

from .locators import Locator
from .module_resolution import ModuleConfig
from .settings import SettingsManager

logger = logging.getLogger(__name__)

ENV_API_KEY = "DEPMAP_API_KEY"
ENV_ENDPOINT = "DEPMAP_ENDPOINT"
ENV_DEBUG = "DEPMAP_DEBUG"

TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(Exception):
    """Raised when settings do not form a valid CLI configuration."""


class DefaultConfig(BaseModel):
    """Config for the default command."""

    build: bool = Field(default=False, description="Build modules before analyzing")


class AnalyzeConfig(BaseModel):
    """Config for the analyze command."""

    output: bool = Field(default=False, description="Print results instead of uploading")
    allow_unresolved: bool = Field(default=False, description="Tolerate unresolved dependencies")


class BuildConfig(BaseModel):
    """Config for the build command."""

    force: bool = Field(default=False, description="Rebuild even when build output exists")


class TestConfig(BaseModel):
    """Config for the test command."""

    timeout: float = Field(default=600.0, description="Seconds to wait for results")


class UploadConfig(BaseModel):
    """Config for the upload command."""

    locators: bool = Field(default=False, description="Upload data as raw locators")
    data: str = Field(default="", description="Pre-computed analysis data to upload")


class ReportConfig(BaseModel):
    """Config for the report command."""

    type: Literal["dependencies", "licenses"] = Field(default="dependencies")


class CLIConfig(BaseModel):
    """Complete CLI configuration."""

    api_key: str = Field(default="", description="Analysis service API key")
    fetcher: str = Field(default="custom", description="Fetcher for the project's own locator")
    project: str = Field(default="", description="Project identifier")
    revision: str = Field(default="", description="Project revision")
    endpoint: str = Field(default="", description="Analysis service base URL")
    modules: list[ModuleConfig] = Field(default_factory=list)
    debug: bool = False

    default: DefaultConfig = Field(default_factory=DefaultConfig)
    analyze: AnalyzeConfig = Field(default_factory=AnalyzeConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    test: TestConfig = Field(default_factory=TestConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    def project_locator(self) -> Locator:
        """Locator identifying the analyzed project itself."""
        return Locator(self.fetcher, self.project, self.revision)


def load_cli_config(settings: SettingsManager | None = None, environ: Mapping[str, str] | None = None) -> CLIConfig:
    """Build the CLI configuration from settings files and environment.

    Args:
        settings: Settings manager (defaults to the standard scopes)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated CLIConfig

    Raises:
        ConfigError: Settings are not a valid configuration
    """
    if settings is None:
        settings = SettingsManager()
    if environ is None:
        environ = os.environ

    try:
        data = settings.get_merged_settings()
    except ValidationError as e:
        raise ConfigError(f"Invalid module declaration: {e}") from e

    if api_key := environ.get(ENV_API_KEY):
        data["api_key"] = api_key
    if endpoint := environ.get(ENV_ENDPOINT):
        data["endpoint"] = endpoint
    if (debug := environ.get(ENV_DEBUG)) is not None:
        data["debug"] = debug.strip().lower() in TRUTHY

    try:
        config = CLIConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.debug(f"Loaded configuration with {len(config.modules)} modules")
    return config
