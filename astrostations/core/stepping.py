"""Calendar-unit stepping of UTC instants.

Searches move through time one calendar unit at a time: a day, an hour, a
minute or a second.  In UTC there is no daylight saving and leap seconds are
ignored, so each unit is a fixed :class:`~datetime.timedelta` and ``datetime``
arithmetic performs the month/year carries.

:func:`step` preserves every finer field of the instant.  Callers that refine
at a finer unit call :func:`truncate` first so drift does not accumulate
between refinement phases.
"""

from __future__ import annotations

import datetime as _dt
from enum import Enum
from typing import Final

from .angles import Motion

__all__ = [
    "Direction",
    "Resolution",
    "SearchArgumentError",
    "coerce_direction",
    "coerce_regime",
    "coerce_resolution",
    "step",
    "truncate",
]


class SearchArgumentError(ValueError):
    """Raised when a direction, resolution or regime value is not recognised."""


class Direction(str, Enum):
    NEXT = "next"
    PREV = "prev"

    @property
    def sign(self) -> int:
        return 1 if self is Direction.NEXT else -1


class Resolution(str, Enum):
    """Step sizes, coarsest first."""

    DATE = "date"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"

    @property
    def span(self) -> _dt.timedelta:
        return _SPANS[self]


_SPANS: Final[dict[Resolution, _dt.timedelta]] = {
    Resolution.DATE: _dt.timedelta(days=1),
    Resolution.HOUR: _dt.timedelta(hours=1),
    Resolution.MINUTE: _dt.timedelta(minutes=1),
    Resolution.SECOND: _dt.timedelta(seconds=1),
}

_REGIMES: Final[tuple[Motion, ...]] = (Motion.DIRECT, Motion.RETROGRADE)


def _allowed(values: tuple[Enum, ...] | type[Enum]) -> str:
    return ", ".join(repr(item.value) for item in values)


def coerce_direction(value: Direction | str) -> Direction:
    if isinstance(value, Direction):
        return value
    try:
        return Direction(str(value).strip().lower())
    except ValueError:
        raise SearchArgumentError(
            f"direction must be one of {_allowed(Direction)}; got {value!r}"
        ) from None


def coerce_resolution(value: Resolution | str) -> Resolution:
    if isinstance(value, Resolution):
        return value
    try:
        return Resolution(str(value).strip().lower())
    except ValueError:
        raise SearchArgumentError(
            f"unit must be one of {_allowed(Resolution)}; got {value!r}"
        ) from None


def coerce_regime(value: Motion | str) -> Motion:
    """Return a searchable regime: ``direct`` or ``retrograde``."""

    try:
        regime = value if isinstance(value, Motion) else Motion(str(value).strip().lower())
    except ValueError:
        regime = None
    if regime not in _REGIMES:
        raise SearchArgumentError(
            f"regime must be one of {_allowed(_REGIMES)}; got {value!r}"
        )
    return regime


def step(
    direction: Direction | str,
    unit: Resolution | str,
    instant: _dt.datetime,
) -> _dt.datetime:
    """Move ``instant`` one ``unit`` forward (``next``) or backward (``prev``)."""

    resolved_direction = coerce_direction(direction)
    resolved_unit = coerce_resolution(unit)
    return instant + resolved_direction.sign * resolved_unit.span


def truncate(instant: _dt.datetime, unit: Resolution | str) -> _dt.datetime:
    """Zero every field of ``instant`` finer than ``unit``."""

    resolved = coerce_resolution(unit)
    if resolved is Resolution.DATE:
        return instant.replace(hour=0, minute=0, second=0, microsecond=0)
    if resolved is Resolution.HOUR:
        return instant.replace(minute=0, second=0, microsecond=0)
    if resolved is Resolution.MINUTE:
        return instant.replace(second=0, microsecond=0)
    return instant.replace(microsecond=0)
