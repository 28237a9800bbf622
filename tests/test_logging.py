from __future__ import annotations

import logging

from astrostations.boot import configure_logging, resolve_level
from astrostations.config import LoggingCfg


def test_default_level_is_warning() -> None:
    assert resolve_level() == logging.WARNING


def test_settings_level_applies() -> None:
    assert resolve_level(settings=LoggingCfg(level="info")) == logging.INFO


def test_environment_overrides_settings(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "error")
    assert resolve_level(settings=LoggingCfg(level="DEBUG")) == logging.ERROR


def test_explicit_level_wins(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert resolve_level("debug", LoggingCfg(level="INFO")) == logging.DEBUG
    assert resolve_level(15) == 15
    assert resolve_level("10") == logging.DEBUG


def test_unrecognised_values_fall_through(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert resolve_level("  ", LoggingCfg(level="INFO")) == logging.INFO


def test_configure_logging_sets_root_level() -> None:
    applied = configure_logging(level="INFO")
    assert applied == logging.INFO
    assert logging.getLogger().level == logging.INFO
