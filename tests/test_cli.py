from __future__ import annotations

import importlib
import json

import pytest
from typer.testing import CliRunner

from astrostations.cli import app, main
from astrostations.core.time import parse_instant
from tests.helpers import direct_station, retrograde_station

cli_app = importlib.import_module("astrostations.cli.app")

runner = CliRunner()


@pytest.fixture(autouse=True)
def _synthetic_default_oracle(monkeypatch, synthetic_oracle):
    monkeypatch.setattr(cli_app, "default_oracle", lambda settings=None: synthetic_oracle)


def _within(ts: str, expected, seconds: int = 2) -> bool:
    return abs((parse_instant(ts) - expected).total_seconds()) <= seconds


def test_station_json() -> None:
    result = runner.invoke(
        app, ["station", "mercury", "--at", "2020-01-01T00:00:00Z", "--json"]
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["body"] == "mercury"
    assert payload["resolution"] == "second"
    assert _within(payload["ts"], retrograde_station(0))


def test_moment_text_output() -> None:
    result = runner.invoke(
        app,
        [
            "moment",
            "mercury",
            "--at",
            "2020-01-06T00:00:00Z",
            "--direction",
            "next",
            "--regime",
            "direct",
        ],
    )
    assert result.exit_code == 0, result.output
    ts, body, _longitude, motion = result.stdout.split()
    assert body == "mercury"
    assert motion == "direct"
    assert _within(ts, direct_station(0))


def test_stations_count() -> None:
    result = runner.invoke(
        app, ["stations", "mercury", "--at", "2020-01-01", "--count", "3", "--json"]
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [item["motion"] for item in payload] == ["retrograde", "direct", "retrograde"]


def test_longitude_command() -> None:
    result = runner.invoke(
        app, ["longitude", "mercury", "--at", "2020-01-01T00:00:00Z", "--json"]
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["longitude"] == pytest.approx(100.0)


def test_invalid_direction_is_usage_error() -> None:
    result = runner.invoke(
        app, ["station", "mercury", "--at", "2020-01-01", "--direction", "up"]
    )
    assert result.exit_code == 2
    assert "direction must be one of" in result.output


def test_invalid_timestamp_is_usage_error() -> None:
    result = runner.invoke(app, ["station", "mercury", "--at", "yesterday"])
    assert result.exit_code == 2


def test_unknown_body_exits_with_error() -> None:
    result = runner.invoke(app, ["station", "vulcan", "--at", "2020-01-01"])
    assert result.exit_code == 1
    assert "Station search failed" in result.output


def test_max_days_from_settings(tmp_path, steady_oracle, monkeypatch) -> None:
    monkeypatch.setattr(cli_app, "default_oracle", lambda settings=None: steady_oracle)
    config = tmp_path / "config.yaml"
    config.write_text("search:\n  max_days: 20\n", encoding="utf-8")
    result = runner.invoke(
        app, ["--config", str(config), "station", "sun", "--at", "2020-01-01"]
    )
    assert result.exit_code == 1
    assert "within 20 days" in result.output


def test_init_config_writes_file() -> None:
    result = runner.invoke(app, ["init-config"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip().endswith("config.yaml")


def test_main_returns_exit_codes(capsys) -> None:
    assert main(["station", "mercury", "--at", "2020-01-01", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["body"] == "mercury"
    assert main(["station", "vulcan", "--at", "2020-01-01"]) == 1
    assert main(["station", "mercury", "--at", "2020-01-01", "--regime", "x"]) == 2


@pytest.mark.parametrize(
    "argv",
    [
        ["station", "mercury", "--at", "2020-01-01", "--direction", "sideways"],
        ["moment", "mercury", "--at", "2020-01-01", "--regime", "stationary"],
        ["stations", "mercury", "--at", "not-a-date"],
    ],
)
def test_main_reports_usage_errors(capsys, argv) -> None:
    assert main(argv) == 2
    assert "Invalid value" in capsys.readouterr().err
