"""
Tests for YAML configuration loading and the package logger setup.
"""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from bulkload import logger as log_module
from bulkload.helpers import config


def test_load_config_missing_file_gives_defaults(tmp_path: Path) -> None:
    cfg = config.load_config(tmp_path / "nope.yml")

    assert cfg == config.DEFAULTS
    assert cfg is not config.DEFAULTS


def test_load_config_merges_over_defaults(tmp_path: Path) -> None:
    p = tmp_path / "cfg.yml"
    p.write_text("writer:\n  buffer_size: 2048\ndb:\n  is_remote: false\n", encoding="utf-8")

    cfg = config.load_config(p)

    assert cfg["writer"]["buffer_size"] == 2048
    assert cfg["writer"]["eol"] == "\n"
    assert cfg["db"]["is_remote"] is False
    assert cfg["paths"]["tmp_dir"] is None


def test_load_config_empty_file(tmp_path: Path) -> None:
    p = tmp_path / "cfg.yml"
    p.write_text("", encoding="utf-8")

    assert config.load_config(p) == config.DEFAULTS


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    p = tmp_path / "cfg.yml"
    p.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError):
        config.load_config(p)


def test_configure_logger_writes_file(tmp_path: Path) -> None:
    log_module.shutdown_logger()
    try:
        log_module.configure_logger(tmp_path)
        assert log_module.is_configured()

        # second call is a no-op
        log_module.configure_logger(tmp_path / "other")
        assert not (tmp_path / "other").exists()

        log_module.logger.info("hello from test")
    finally:
        log_module.shutdown_logger()

    assert not log_module.is_configured()
    text = (tmp_path / log_module.LOG_FILE_NAME).read_text(encoding="utf-8")
    assert "[INFO]" in text
    assert "hello from test" in text
    log_module.logger.setLevel(logging.INFO)
