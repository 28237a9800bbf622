"""Station search built from conditionally chained moment searches.

A *station* is the instant apparent motion turns into the target regime.
When the search origin already sits inside that regime (or, scanning
backwards, outside it) the current occurrence has to be traversed first, so
a station search is a short plan of moment searches.  The plans live in
:data:`STATION_PLANS`, keyed by the regime state at the origin and the
search direction:

================  =========  =============================================
state             direction  legs
================  =========  =============================================
in_regime         next       next opposite, then next target
in_regime         prev       prev opposite, then next target
out_of_regime     next       next target
out_of_regime     prev       prev target, prev opposite, then next target
================  =========  =============================================

Each leg starts where the previous one stopped and strictly moves away from
it, and every plan finishes with a forward search so stations are always
approached from the past.
"""

from __future__ import annotations

import datetime as _dt
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Final

from ..core.angles import Motion, angular_difference, matches_regime, opposite_regime
from ..core.stepping import Direction, Resolution, coerce_direction, coerce_regime, step
from ..core.time import ensure_utc, format_instant
from ..ephemeris.oracle import LongitudeOracle
from ..events import MotionMoment
from ..observability import SEARCH_DURATION
from .moments import find_next_moment

__all__ = [
    "STATION_PLANS",
    "RegimeState",
    "SearchLeg",
    "find_next_station",
    "iter_stations",
    "station_plan",
]

LOG = logging.getLogger(__name__)


class RegimeState(str, Enum):
    IN_REGIME = "in_regime"
    OUT_OF_REGIME = "out_of_regime"


@dataclass(frozen=True)
class SearchLeg:
    """One moment search within a station plan."""

    direction: Direction
    opposite: bool  # search for the opposite of the target regime

    def regime_for(self, target: Motion) -> Motion:
        return opposite_regime(target) if self.opposite else target


_NEXT_TARGET = SearchLeg(Direction.NEXT, opposite=False)
_NEXT_OPPOSITE = SearchLeg(Direction.NEXT, opposite=True)
_PREV_TARGET = SearchLeg(Direction.PREV, opposite=False)
_PREV_OPPOSITE = SearchLeg(Direction.PREV, opposite=True)

STATION_PLANS: Final[dict[tuple[RegimeState, Direction], tuple[SearchLeg, ...]]] = {
    (RegimeState.IN_REGIME, Direction.NEXT): (_NEXT_OPPOSITE, _NEXT_TARGET),
    (RegimeState.IN_REGIME, Direction.PREV): (_PREV_OPPOSITE, _NEXT_TARGET),
    (RegimeState.OUT_OF_REGIME, Direction.NEXT): (_NEXT_TARGET,),
    (RegimeState.OUT_OF_REGIME, Direction.PREV): (
        _PREV_TARGET,
        _PREV_OPPOSITE,
        _NEXT_TARGET,
    ),
}


def station_plan(
    state: RegimeState | str, direction: Direction | str
) -> tuple[SearchLeg, ...]:
    """Return the moment-search legs for ``state`` and ``direction``."""

    return STATION_PLANS[(RegimeState(state), coerce_direction(direction))]


def _current_motion(
    oracle: LongitudeOracle,
    body: str,
    instant: _dt.datetime,
    known_longitude: float | None,
) -> tuple[float, float]:
    """Return ``(longitude, one-second delta)`` at ``instant``."""

    longitude = (
        oracle.apparent_longitude(body, instant)
        if known_longitude is None
        else float(known_longitude)
    )
    probe = oracle.apparent_longitude(
        body, step(Direction.NEXT, Resolution.SECOND, instant)
    )
    return longitude, angular_difference(longitude, probe)


def find_next_station(
    oracle: LongitudeOracle,
    body: str,
    instant: _dt.datetime,
    direction: Direction | str,
    regime: Motion | str,
    known_longitude: float | None = None,
    *,
    max_days: int | None = None,
) -> MotionMoment:
    """Find the station where ``body`` turns ``regime``, scanning in ``direction``.

    ``next`` returns the first station after the origin even when the origin
    already lies inside a ``regime`` occurrence; ``prev`` returns the start of
    the enclosing or most recent occurrence.
    """

    resolved_direction = coerce_direction(direction)
    target = coerce_regime(regime)
    origin = ensure_utc(instant)

    with SEARCH_DURATION.labels(operation="station").time():
        longitude, delta = _current_motion(oracle, body, origin, known_longitude)
        state = (
            RegimeState.IN_REGIME
            if matches_regime(delta, target)
            else RegimeState.OUT_OF_REGIME
        )
        plan = station_plan(state, resolved_direction)
        LOG.debug(
            "%s %s station search from %s: %s, %d leg(s)",
            body,
            target.value,
            format_instant(origin),
            state.value,
            len(plan),
        )

        result: MotionMoment | None = None
        cursor, cursor_longitude = origin, longitude
        for leg in plan:
            result = find_next_moment(
                oracle,
                body,
                cursor,
                leg.direction,
                leg.regime_for(target),
                cursor_longitude,
                max_days=max_days,
            )
            cursor, cursor_longitude = result.instant, result.longitude
        assert result is not None
    return result


def iter_stations(
    oracle: LongitudeOracle,
    body: str,
    instant: _dt.datetime,
    *,
    direction: Direction | str = Direction.NEXT,
    count: int | None = None,
    max_days: int | None = None,
) -> Iterator[MotionMoment]:
    """Yield successive stations of alternating type starting from ``instant``.

    Scanning forward the first station is the one that ends the current
    motion; scanning backward it is the one that started it.  ``count=None``
    yields indefinitely.
    """

    resolved_direction = coerce_direction(direction)
    if count is not None and count < 0:
        raise ValueError(f"count must be non-negative; got {count}")
    cursor = ensure_utc(instant)
    cursor_longitude, delta = _current_motion(oracle, body, cursor, None)
    current = Motion.DIRECT if delta >= 0.0 else Motion.RETROGRADE
    regime = opposite_regime(current) if resolved_direction is Direction.NEXT else current

    produced = 0
    while count is None or produced < count:
        station = find_next_station(
            oracle,
            body,
            cursor,
            resolved_direction,
            regime,
            cursor_longitude,
            max_days=max_days,
        )
        yield station
        produced += 1
        cursor, cursor_longitude = station.instant, station.longitude
        regime = opposite_regime(regime)
