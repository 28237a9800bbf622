"""Primary Typer application for the astrostations CLI."""

from __future__ import annotations

import datetime as _dt
import json
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Optional, TypeVar

import typer

from ..api import default_oracle
from ..boot import configure_logging
from ..config import Settings, ensure_default_config, load_settings
from ..core.stepping import SearchArgumentError, coerce_direction, coerce_regime
from ..core.time import format_instant, parse_instant
from ..detectors import (
    StationNotFoundError,
    find_next_moment,
    find_next_station,
    iter_stations,
)
from ..ephemeris import BodyNotFoundError, LongitudeOracle
from ..events import MotionMoment

app = typer.Typer(help="Find retrograde and direct stations of the planets.")

_T = TypeVar("_T")

_AT_HELP = "Search origin (ISO-8601, UTC when no offset is given)."


def _settings(ctx: typer.Context) -> Settings:
    obj = ctx.obj
    return obj if isinstance(obj, Settings) else load_settings()


def _oracle(ctx: typer.Context) -> LongitudeOracle:
    try:
        return default_oracle(_settings(ctx))
    except (RuntimeError, FileNotFoundError) as exc:
        typer.secho(f"Ephemeris unavailable: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc


def _parse_at(value: str) -> _dt.datetime:
    try:
        return parse_instant(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--at") from exc


def _run(label: str, func: Callable[[], _T]) -> _T:
    try:
        return func()
    except SearchArgumentError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except (BodyNotFoundError, StationNotFoundError, RuntimeError) as exc:
        typer.secho(f"{label} failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc


def _moment_line(moment: MotionMoment) -> str:
    return (
        f"{moment.ts}  {moment.body:<8}  {moment.longitude:08.4f}  "
        f"{moment.motion.value}"
    )


def _emit(moments: Sequence[MotionMoment], json_output: bool) -> None:
    if json_output:
        payload = [moment.as_dict() for moment in moments]
        typer.echo(json.dumps(payload if len(payload) != 1 else payload[0], indent=2))
        return
    for moment in moments:
        typer.echo(_moment_line(moment))


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", help="Settings file to load instead of the default."
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Root log level (overrides LOG_LEVEL and settings)."
    ),
) -> None:
    """Load settings and configure logging before executing subcommands."""

    try:
        settings = load_settings(config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    configure_logging(level=log_level, settings=settings.logging)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("longitude")
def longitude(
    ctx: typer.Context,
    body: str = typer.Argument(..., help="Body name, e.g. mercury."),
    at: str = typer.Option(..., "--at", help=_AT_HELP),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON."),
) -> None:
    """Print the apparent ecliptic longitude of BODY."""

    instant = _parse_at(at)
    oracle = _oracle(ctx)
    value = _run("Longitude lookup", lambda: oracle.apparent_longitude(body, instant))
    if json_output:
        payload = {"body": body, "ts": format_instant(instant), "longitude": value}
        typer.echo(json.dumps(payload, indent=2))
    else:
        typer.echo(f"{format_instant(instant)}  {body:<8}  {value:08.4f}")


@app.command("moment")
def moment(
    ctx: typer.Context,
    body: str = typer.Argument(..., help="Body name, e.g. mercury."),
    at: str = typer.Option(..., "--at", help=_AT_HELP),
    direction: str = typer.Option("next", "--direction", help="next or prev."),
    regime: str = typer.Option(
        "retrograde", "--regime", help="direct or retrograde."
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON."),
) -> None:
    """Find the nearest instant BODY moves in the given regime."""

    instant = _parse_at(at)
    resolved = _run(
        "Argument check",
        lambda: (coerce_direction(direction), coerce_regime(regime)),
    )
    oracle = _oracle(ctx)
    limit = _settings(ctx).search.max_days
    found = _run(
        "Moment search",
        lambda: find_next_moment(
            oracle, body, instant, resolved[0], resolved[1], max_days=limit
        ),
    )
    _emit([found], json_output)


@app.command("station")
def station(
    ctx: typer.Context,
    body: str = typer.Argument(..., help="Body name, e.g. mercury."),
    at: str = typer.Option(..., "--at", help=_AT_HELP),
    direction: str = typer.Option("next", "--direction", help="next or prev."),
    regime: str = typer.Option(
        "retrograde", "--regime", help="direct or retrograde."
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON."),
) -> None:
    """Find the station at which BODY turns to the given regime."""

    instant = _parse_at(at)
    resolved = _run(
        "Argument check",
        lambda: (coerce_direction(direction), coerce_regime(regime)),
    )
    oracle = _oracle(ctx)
    limit = _settings(ctx).search.max_days
    found = _run(
        "Station search",
        lambda: find_next_station(
            oracle, body, instant, resolved[0], resolved[1], max_days=limit
        ),
    )
    _emit([found], json_output)


@app.command("stations")
def stations(
    ctx: typer.Context,
    body: str = typer.Argument(..., help="Body name, e.g. mercury."),
    at: str = typer.Option(..., "--at", help=_AT_HELP),
    count: int = typer.Option(4, "--count", min=1, help="Number of stations."),
    direction: str = typer.Option("next", "--direction", help="next or prev."),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON."),
) -> None:
    """List successive stations of BODY, alternating retrograde and direct."""

    instant = _parse_at(at)
    resolved_direction = _run("Argument check", lambda: coerce_direction(direction))
    oracle = _oracle(ctx)
    limit = _settings(ctx).search.max_days
    found = _run(
        "Station search",
        lambda: list(
            iter_stations(
                oracle,
                body,
                instant,
                direction=resolved_direction,
                count=count,
                max_days=limit,
            )
        ),
    )
    if json_output:
        typer.echo(json.dumps([item.as_dict() for item in found], indent=2))
        return
    _emit(found, json_output=False)


@app.command("init-config")
def init_config() -> None:
    """Write a default settings file when none exists and print its path."""

    typer.echo(str(ensure_default_config()))
