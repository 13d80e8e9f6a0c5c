# tests/test_config.py
import importlib

import pytest

import config


@pytest.fixture
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config).Config
    monkeypatch.undo()
    importlib.reload(config)


@pytest.mark.parametrize("value, expected", [("1", True), ("0", False), ("false", False), ("", False)])
def test_debug_flag(reload_config, monkeypatch, value, expected):
    monkeypatch.setenv("DEBUG", value)
    assert reload_config().DEBUG is expected


def test_thresholds_from_environment(reload_config, monkeypatch):
    monkeypatch.setenv("EASY_MIN_CLUES", "36")
    monkeypatch.setenv("MEDIUM_MIN_CLUES", "28")
    assert reload_config().DIFFICULTY_THRESHOLDS == (36, 28)
