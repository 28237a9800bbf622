"""Configuration helpers exposed at :mod:`astrostations.config`."""

from __future__ import annotations

from .settings import (
    EphemerisCfg,
    LoggingCfg,
    ObserverCfg,
    SearchCfg,
    Settings,
    config_path,
    default_settings,
    ensure_default_config,
    get_config_home,
    load_settings,
    save_settings,
)

__all__ = [
    "Settings",
    "EphemerisCfg",
    "LoggingCfg",
    "ObserverCfg",
    "SearchCfg",
    "config_path",
    "get_config_home",
    "default_settings",
    "load_settings",
    "save_settings",
    "ensure_default_config",
]
