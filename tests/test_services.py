"""Tests for the local filesystem service and environment snapshot."""

import json
import os

import yaml

from depmap_cli.environment import Environment
from depmap_cli.services import FileService
from depmap_cli.services import LocalFileService


def test_resolve_is_absolute_and_normalized(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    files = LocalFileService()

    assert files.resolve("web/../api/") == os.path.join(str(tmp_path), "api")
    assert files.resolve("/abs/path") == "/abs/path"


def test_resolve_does_not_follow_symlinks(tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "link"
    link.symlink_to(real)

    assert LocalFileService().resolve(str(link)) == str(link)


def test_file_and_folder_checks(tmp_path):
    (tmp_path / "package.json").write_text("{}")
    files = LocalFileService()

    assert files.has_file(tmp_path / "package.json")
    assert not files.has_folder(tmp_path / "package.json")
    assert files.has_folder(tmp_path)
    assert not files.has_file(tmp_path / "missing")


def test_read_json_and_unmarshal(tmp_path):
    (tmp_path / "bower.json").write_text(json.dumps({"name": "web"}))
    (tmp_path / "settings.yaml").write_text("modules: []\n")
    files = LocalFileService()

    assert files.read_json(tmp_path / "bower.json") == {"name": "web"}
    assert files.read_unmarshal(tmp_path / "settings.yaml", yaml.safe_load) == {"modules": []}
    assert files.read_file(tmp_path / "bower.json").startswith(b"{")


def test_local_service_satisfies_protocol():
    files: FileService = LocalFileService()
    assert callable(files.resolve)


def test_environment_from_env():
    assert Environment.from_env({"GOPATH": "/go"}).source_root == "/go"
    assert Environment.from_env({}).source_root == ""


def test_environment_defaults_to_process_env(monkeypatch):
    monkeypatch.setenv("GOPATH", "/opt/go")
    assert Environment.from_env().source_root == "/opt/go"
