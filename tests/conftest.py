"""Pytest configuration for depmap CLI tests."""

import posixpath
from pathlib import Path

import pytest

from depmap_cli.settings import SettingsManager


class FakeFileService:
    """FileService that resolves against a fixed working directory."""

    def __init__(self, cwd: str = "/work", fail_on: set[str] | None = None):
        self.cwd = cwd
        self.fail_on = fail_on or set()
        self.resolved: list[str] = []

    def resolve(self, path: str) -> str:
        self.resolved.append(path)
        if path in self.fail_on:
            raise PermissionError(f"permission denied: {path}")
        return posixpath.normpath(posixpath.join(self.cwd, path))

    def has_file(self, path):
        return False

    def has_folder(self, path):
        return False

    def read_file(self, path):
        raise FileNotFoundError(path)

    def read_json(self, path):
        raise FileNotFoundError(path)

    def read_unmarshal(self, path, unmarshal):
        raise FileNotFoundError(path)


@pytest.fixture
def fake_files() -> FakeFileService:
    return FakeFileService()


@pytest.fixture
def make_files():
    """Factory for FakeFileService with a custom cwd or failing paths."""
    return FakeFileService


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty project directory with an isolated home."""
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def settings(tmp_path: Path) -> SettingsManager:
    return SettingsManager(
        depmap_dir=tmp_path / ".depmap",
        user_settings_file=tmp_path / "user" / "settings.yaml",
    )
