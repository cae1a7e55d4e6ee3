"""Tests for the JSONL logging sink."""

import json
import logging

import pytest

from depmap_cli.logging_setup import JsonlHandler
from depmap_cli.logging_setup import init_json_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


def _lines(path):
    return [json.loads(line) for line in path.read_text().splitlines()]


def test_writes_structured_records(tmp_path, restore_root_logger):
    log_path = tmp_path / "logs" / "depmap.log.jsonl"
    init_json_logging(str(log_path), "debug")

    logging.getLogger("depmap_cli.test").info("resolved %s", "web", extra={"event": "module:new", "module_name": "web"})

    (record,) = _lines(log_path)
    assert record["lvl"] == "INFO"
    assert record["logger"] == "depmap_cli.test"
    assert record["message"] == "resolved web"
    assert record["event"] == "module:new"
    assert record["module_name"] == "web"
    assert record["schema"]["name"] == "depmap.log"


def test_dict_message_merged(tmp_path, restore_root_logger):
    log_path = tmp_path / "out.jsonl"
    init_json_logging(str(log_path), "INFO")

    logging.getLogger("depmap_cli.test").info({"locator": "npm+a$1"})

    (record,) = _lines(log_path)
    assert record["locator"] == "npm+a$1"


def test_level_filters(tmp_path, restore_root_logger):
    log_path = tmp_path / "out.jsonl"
    init_json_logging(str(log_path), "WARNING")

    logging.getLogger("depmap_cli.test").info("hidden")
    logging.getLogger("depmap_cli.test").warning("shown")

    assert [r["message"] for r in _lines(log_path)] == ["shown"]


def test_reinit_replaces_handler(tmp_path, restore_root_logger):
    init_json_logging(str(tmp_path / "a.jsonl"), "INFO")
    init_json_logging(str(tmp_path / "b.jsonl"), "INFO")

    handlers = [h for h in restore_root_logger.handlers if isinstance(h, JsonlHandler)]
    assert len(handlers) == 1
    assert handlers[0].path == tmp_path / "b.jsonl"
