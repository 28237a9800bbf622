"""Configuration models and helpers for astrostations settings."""

from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


CURRENT_SETTINGS_SCHEMA_VERSION = 1

# -------------------- Settings Schema --------------------


class ObserverCfg(BaseModel):
    """Observer location used for topocentric longitudes."""

    latitude_deg: float = Field(default=0.0, ge=-90.0, le=90.0)
    longitude_deg: float = Field(default=0.0, ge=-180.0, le=180.0)
    elevation_m: float = 0.0


class EphemerisCfg(BaseModel):
    """Swiss Ephemeris source configuration for the default oracle."""

    path: Optional[str] = None
    prefer_moshier: bool = False
    topocentric: bool = False
    observer: Optional[ObserverCfg] = None

    @model_validator(mode="after")
    def _require_observer_when_topocentric(self) -> "EphemerisCfg":
        if self.topocentric and self.observer is None:
            raise ValueError("ephemeris.topocentric requires an observer location")
        return self


class SearchCfg(BaseModel):
    """Station and moment search limits."""

    # ``None`` keeps the date phase unbounded.
    max_days: Optional[int] = None

    @field_validator("max_days", mode="before")
    @classmethod
    def _positive_limit(cls, value: object) -> object:
        if value is None:
            return None
        numeric = int(value)  # type: ignore[arg-type]
        if numeric <= 0:
            raise ValueError("search.max_days must be a positive number of days")
        return numeric


class LoggingCfg(BaseModel):
    """Root logger configuration applied by the CLI."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


class Settings(BaseModel):
    """Top-level settings model persisted on disk."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    ephemeris: EphemerisCfg = Field(default_factory=EphemerisCfg)
    search: SearchCfg = Field(default_factory=SearchCfg)
    logging: LoggingCfg = Field(default_factory=LoggingCfg)


# -------------------- I/O Helpers --------------------

CONFIG_FILENAME = "config.yaml"


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    if os.name == "nt":
        base = Path(
            os.environ.get(
                "LOCALAPPDATA", str(Path.home() / "AppData" / "Local")
            )
        )
        return base / "astrostations"
    return Path(
        os.environ.get("ASTROSTATIONS_HOME", str(Path.home() / ".astrostations"))
    )


def config_path() -> Path:
    """Return the full path to the configuration file."""

    return get_config_home() / CONFIG_FILENAME


def default_settings() -> Settings:
    """Instantiate a Settings object populated with defaults."""

    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def _upgrade_settings_payload(
    data: dict[str, object], *, schema_version: int
) -> dict[str, object]:
    """Stamp older payloads with the current schema version."""

    upgraded = deepcopy(data)
    upgraded["schema_version"] = min(
        max(1, schema_version), CURRENT_SETTINGS_SCHEMA_VERSION
    )
    return upgraded


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, falling back to defaults when absent.

    A missing file is not created; use :func:`ensure_default_config` for that.
    """

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        return default_settings()
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"settings file {source_path} must contain a mapping")
    schema_version = _coerce_schema_version(raw.get("schema_version"))
    data = _upgrade_settings_payload(raw, schema_version=schema_version)
    return Settings(**data)


def ensure_default_config() -> Path:
    """Ensure a configuration file exists on disk and return its path."""

    target = config_path()
    if not target.exists():
        save_settings(default_settings(), target)
    return target
