"""High level entry points wiring settings, oracles and detectors together."""

from __future__ import annotations

import datetime as _dt
from collections.abc import Iterator
from itertools import islice

from .config import Settings, load_settings
from .core.angles import Motion
from .core.stepping import Direction
from .core.time import ensure_utc
from .detectors import find_next_moment, find_next_station, iter_stations
from .ephemeris import CachedOracle, LongitudeOracle, SwissLongitudeOracle
from .events import MotionMoment

__all__ = [
    "apparent_longitude",
    "default_oracle",
    "next_moment",
    "next_station",
    "upcoming_stations",
]


def default_oracle(settings: Settings | None = None) -> LongitudeOracle:
    """Return a cached Swiss Ephemeris oracle configured from ``settings``."""

    resolved = settings if settings is not None else load_settings()
    return CachedOracle(SwissLongitudeOracle.from_settings(resolved.ephemeris))


def _resolve(
    oracle: LongitudeOracle | None,
    settings: Settings | None,
    max_days: int | None,
) -> tuple[LongitudeOracle, int | None]:
    if oracle is not None and max_days is not None:
        return oracle, max_days
    resolved = settings if settings is not None else load_settings()
    if oracle is None:
        oracle = default_oracle(resolved)
    if max_days is None:
        max_days = resolved.search.max_days
    return oracle, max_days


def apparent_longitude(
    body: str,
    instant: _dt.datetime,
    *,
    oracle: LongitudeOracle | None = None,
    settings: Settings | None = None,
) -> float:
    """Return the apparent ecliptic longitude of ``body`` at ``instant``."""

    resolved = oracle if oracle is not None else default_oracle(settings)
    return resolved.apparent_longitude(body, ensure_utc(instant))


def next_moment(
    body: str,
    instant: _dt.datetime,
    direction: Direction | str,
    regime: Motion | str,
    known_longitude: float | None = None,
    *,
    oracle: LongitudeOracle | None = None,
    settings: Settings | None = None,
    max_days: int | None = None,
) -> MotionMoment:
    """Find the next instant ``body`` moves in ``regime``.

    When ``max_days`` is omitted the value from ``settings.search`` applies.
    """

    resolved_oracle, limit = _resolve(oracle, settings, max_days)
    return find_next_moment(
        resolved_oracle,
        body,
        instant,
        direction,
        regime,
        known_longitude,
        max_days=limit,
    )


def next_station(
    body: str,
    instant: _dt.datetime,
    direction: Direction | str,
    regime: Motion | str,
    known_longitude: float | None = None,
    *,
    oracle: LongitudeOracle | None = None,
    settings: Settings | None = None,
    max_days: int | None = None,
) -> MotionMoment:
    """Find the station at which ``body`` turns ``regime``."""

    resolved_oracle, limit = _resolve(oracle, settings, max_days)
    return find_next_station(
        resolved_oracle,
        body,
        instant,
        direction,
        regime,
        known_longitude,
        max_days=limit,
    )


def upcoming_stations(
    body: str,
    instant: _dt.datetime,
    count: int,
    *,
    direction: Direction | str = Direction.NEXT,
    oracle: LongitudeOracle | None = None,
    settings: Settings | None = None,
    max_days: int | None = None,
) -> list[MotionMoment]:
    """Return ``count`` successive stations of alternating type."""

    if count < 0:
        raise ValueError(f"count must be non-negative; got {count}")
    resolved_oracle, limit = _resolve(oracle, settings, max_days)
    stations: Iterator[MotionMoment] = iter_stations(
        resolved_oracle,
        body,
        instant,
        direction=direction,
        count=count,
        max_days=limit,
    )
    return list(islice(stations, count))
