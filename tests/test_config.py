# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from cadence.global_config import (
    CadenceConfig,
    get_config_dir,
    get_global_config,
    resolve_log_file,
    save_global_config,
)
from cadence.logging_setup import _ConsoleNoiseFilter


@pytest.fixture()
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("CADENCE_HOME", str(tmp_path / "cfg"))
    return tmp_path / "cfg"


def test_missing_config_gives_defaults(home: Path) -> None:
    config = get_global_config()

    assert config == CadenceConfig()
    assert get_config_dir() == home
    assert resolve_log_file(config) == str(home / "events.log")


def test_saved_config_is_loaded(home: Path) -> None:
    save_global_config(CadenceConfig(log_file="/tmp/todo.log", default_every="1w"))

    config = get_global_config()
    assert config.default_every == "1w"
    assert resolve_log_file(config) == "/tmp/todo.log"


@pytest.mark.parametrize("content", ["{not json", '["a list"]', '{"log_level": 5}'])
def test_invalid_config_falls_back_to_defaults(home: Path, content: str) -> None:
    home.mkdir(parents=True)
    (home / "config.json").write_text(content, encoding="utf-8")

    assert get_global_config() == CadenceConfig()


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_noise_filter_keeps_own_logs_and_third_party_errors() -> None:
    noise = _ConsoleNoiseFilter()

    assert noise.filter(_record("cadence.application.engine", logging.DEBUG))
    assert not noise.filter(_record("urllib3", logging.WARNING))
    assert noise.filter(_record("urllib3", logging.ERROR))
    assert not noise.filter(_record("py.warnings", logging.WARNING))
