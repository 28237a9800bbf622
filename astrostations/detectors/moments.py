"""Moment search: the next (or last) instant a body moves in a given regime.

The search is a directed linear scan with resolution refinement rather than a
bisection.  Motion reversals are rare and roughly periodic, so the scan first
walks whole calendar days until the daily motion matches the regime, then
narrows the transition by hours, minutes and finally seconds.

Every refinement phase walks *forward* in time from an anchor on the past
side of the transition, even when the caller searches backwards.  Approaching
a transition from the future can settle on a different second, and results
are standardised on the past-side approach.
"""

from __future__ import annotations

import datetime as _dt
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from ..core.angles import Motion, angular_difference, matches_regime
from ..core.stepping import (
    Direction,
    Resolution,
    coerce_direction,
    coerce_regime,
    step,
    truncate,
)
from ..core.time import ensure_utc, format_instant
from ..ephemeris.oracle import LongitudeOracle
from ..events import MotionMoment
from ..observability import SEARCH_DURATION

__all__ = ["REFINEMENT_CHAIN", "StationNotFoundError", "find_next_moment"]

LOG = logging.getLogger(__name__)

REFINEMENT_CHAIN: Final[tuple[Resolution, ...]] = (
    Resolution.HOUR,
    Resolution.MINUTE,
    Resolution.SECOND,
)


class StationNotFoundError(RuntimeError):
    """Raised when the day-by-day scan exceeds its ``max_days`` budget."""


@dataclass(frozen=True)
class _Sample:
    instant: _dt.datetime
    longitude: float


@dataclass(frozen=True)
class _Bracket:
    """Last sample before a stop condition and the sample that triggered it."""

    last: _Sample
    last_delta: float
    stop: _Sample
    stop_delta: float


def _sample(oracle: LongitudeOracle, body: str, instant: _dt.datetime) -> _Sample:
    return _Sample(instant, oracle.apparent_longitude(body, instant))


def _date_phase_anchor(
    oracle: LongitudeOracle,
    body: str,
    start: _Sample,
    direction: Direction,
    regime: Motion,
    max_days: int | None,
) -> _dt.datetime:
    """Walk whole days until the daily motion matches ``regime``.

    Each day sample is classified by its forward one-day delta.  Returns the
    instant the hour phase should start from: one day before the flip when
    scanning forward, the flip sample itself when scanning backward.
    """

    days = 0
    if direction is Direction.NEXT:
        current = start
        while True:
            following = _sample(oracle, body, step(Direction.NEXT, Resolution.DATE, current.instant))
            if matches_regime(angular_difference(current.longitude, following.longitude), regime):
                return step(Direction.PREV, Resolution.DATE, current.instant)
            current = following
            days += 1
            _check_budget(body, regime, start.instant, days, max_days)

    later = start
    while True:
        earlier = _sample(oracle, body, step(Direction.PREV, Resolution.DATE, later.instant))
        if matches_regime(angular_difference(earlier.longitude, later.longitude), regime):
            return earlier.instant
        later = earlier
        days += 1
        _check_budget(body, regime, start.instant, days, max_days)


def _check_budget(
    body: str,
    regime: Motion,
    origin: _dt.datetime,
    days: int,
    max_days: int | None,
) -> None:
    if max_days is not None and days >= max_days:
        raise StationNotFoundError(
            f"{body} did not turn {regime.value} within {max_days} days "
            f"of {format_instant(origin)}"
        )


def _scan_forward(
    oracle: LongitudeOracle,
    body: str,
    anchor: _dt.datetime,
    unit: Resolution,
    stop_when: Callable[[float], bool],
) -> _Bracket:
    """Step forward by ``unit`` from ``anchor`` until ``stop_when(delta)`` holds."""

    current = _sample(oracle, body, truncate(anchor, unit))
    previous: tuple[_Sample, float] | None = None
    while True:
        following = _sample(oracle, body, step(Direction.NEXT, unit, current.instant))
        delta = angular_difference(current.longitude, following.longitude)
        if stop_when(delta):
            break
        previous = (current, delta)
        current = following

    if previous is not None:
        return _Bracket(previous[0], previous[1], current, delta)

    # The anchor itself already satisfied the stop condition: back up one
    # unit at a time until the bracket opens.
    later, later_delta = current, delta
    while True:
        before = _sample(oracle, body, step(Direction.PREV, unit, later.instant))
        before_delta = angular_difference(before.longitude, later.longitude)
        if not stop_when(before_delta):
            return _Bracket(before, before_delta, later, later_delta)
        later, later_delta = before, before_delta


def find_next_moment(
    oracle: LongitudeOracle,
    body: str,
    instant: _dt.datetime,
    direction: Direction | str,
    regime: Motion | str,
    known_longitude: float | None = None,
    *,
    max_days: int | None = None,
) -> MotionMoment:
    """Locate the next instant, scanning in ``direction``, moving in ``regime``.

    Parameters
    ----------
    oracle:
        Source of apparent longitudes.
    body:
        Body key understood by ``oracle``; unknown keys fail inside the oracle.
    instant:
        Search origin. Naive datetimes are treated as UTC.
    direction:
        ``"next"`` finds the first instant at or after ``instant`` moving in
        ``regime``; ``"prev"`` finds the last such instant at or before it.
    regime:
        ``"direct"`` or ``"retrograde"``.
    known_longitude:
        Apparent longitude at ``instant`` when the caller already has it.
    max_days:
        Optional bound on the day-by-day scan. ``None`` scans until the
        regime is found, which never returns for a body that cannot move in
        ``regime``.

    Returns
    -------
    MotionMoment
        Always at ``second`` resolution. ``delta`` is the one-second
        longitude change from the returned instant.
    """

    resolved_direction = coerce_direction(direction)
    resolved_regime = coerce_regime(regime)
    origin = ensure_utc(instant)

    with SEARCH_DURATION.labels(operation="moment").time():
        longitude = (
            oracle.apparent_longitude(body, origin)
            if known_longitude is None
            else float(known_longitude)
        )
        probe = _sample(oracle, body, step(Direction.NEXT, Resolution.SECOND, origin))
        current_delta = angular_difference(longitude, probe.longitude)
        if matches_regime(current_delta, resolved_regime):
            LOG.debug(
                "%s already %s at %s", body, resolved_regime.value, format_instant(origin)
            )
            return MotionMoment(
                body=body,
                instant=origin,
                longitude=longitude,
                delta=current_delta,
                resolution=Resolution.SECOND,
            )

        anchor = _date_phase_anchor(
            oracle,
            body,
            _Sample(origin, longitude),
            resolved_direction,
            resolved_regime,
            max_days,
        )
        LOG.debug(
            "%s date phase (%s %s) anchored at %s",
            body,
            resolved_direction.value,
            resolved_regime.value,
            format_instant(anchor),
        )

        if resolved_direction is Direction.NEXT:
            def stop_when(delta: float) -> bool:
                return matches_regime(delta, resolved_regime)
        else:
            def stop_when(delta: float) -> bool:
                return not matches_regime(delta, resolved_regime)

        bracket: _Bracket | None = None
        for unit in REFINEMENT_CHAIN:
            bracket = _scan_forward(oracle, body, anchor, unit, stop_when)
            anchor = bracket.last.instant
            LOG.debug(
                "%s %s phase stopped at %s",
                body,
                unit.value,
                format_instant(bracket.stop.instant),
            )
        assert bracket is not None

    if resolved_direction is Direction.NEXT:
        found, delta = bracket.stop, bracket.stop_delta
    else:
        found, delta = bracket.last, bracket.last_delta
    return MotionMoment(
        body=body,
        instant=found.instant,
        longitude=found.longitude,
        delta=delta,
        resolution=Resolution.SECOND,
    )
