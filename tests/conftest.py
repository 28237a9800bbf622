"""Shared fixtures for the astrostations test-suite."""

from __future__ import annotations

import logging

import pytest

from astrostations.ephemeris import FunctionOracle
from tests.helpers import CountingOracle, days_since_origin, synthetic_longitude


@pytest.fixture
def synthetic_oracle() -> FunctionOracle:
    return FunctionOracle({"mercury": synthetic_longitude}, label="synthetic")


@pytest.fixture
def counting_oracle(synthetic_oracle: FunctionOracle) -> CountingOracle:
    return CountingOracle(synthetic_oracle)


@pytest.fixture
def steady_oracle() -> FunctionOracle:
    """A body that only ever moves direct, half a degree per day."""

    return FunctionOracle(
        {"sun": lambda moment: 280.0 + 0.5 * days_since_origin(moment)},
        label="steady",
    )


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch):
    """Keep settings lookups away from the real home directory."""

    monkeypatch.setenv("ASTROSTATIONS_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo ``configure_logging`` calls made by CLI and logging tests."""

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
