"""Angular utilities used to classify apparent motion.

Longitude samples live on a circle, so two samples are never compared by raw
subtraction.  :func:`angular_difference` reduces both values into ``[0, 360)``
and returns the signed short-path step from one sample to the next, which is
what the station detectors use to decide whether a body is moving direct or
retrograde.

A delta of exactly ``0`` is treated as *stationary* and satisfies both
:func:`is_direct` and :func:`is_retrograde`.  Downstream search code relies on
that double-closed boundary, so it must not be tightened.
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "Motion",
    "angular_difference",
    "classify_motion",
    "is_direct",
    "is_retrograde",
    "matches_regime",
    "normalize_degrees",
    "opposite_regime",
]


class Motion(str, Enum):
    """Apparent motion of a body along the ecliptic."""

    DIRECT = "direct"
    RETROGRADE = "retrograde"
    STATIONARY = "stationary"


def normalize_degrees(angle: float) -> float:
    """Return ``angle`` wrapped into the ``[0, 360)`` interval."""

    wrapped = float(angle) % 360.0
    # ``-1e-17 % 360.0`` rounds to 360.0 in binary floating point.
    return 0.0 if wrapped >= 360.0 else wrapped


def angular_difference(current: float, next_: float) -> float:
    """Return the signed shortest step from ``current`` to ``next_`` in degrees.

    The result lies in ``(-180, 180]``.  A body that appears to have moved
    from 359° to 1° has advanced by ``+2``, not regressed by ``358``.

    >>> angular_difference(359.0, 1.0)
    2.0
    >>> angular_difference(1.0, 359.0)
    -2.0
    """

    raw = (normalize_degrees(next_) - normalize_degrees(current)) % 360.0
    if raw > 180.0:
        raw -= 360.0
    return raw


def is_direct(delta: float) -> bool:
    return delta >= 0.0


def is_retrograde(delta: float) -> bool:
    return delta <= 0.0


def classify_motion(delta: float) -> Motion:
    """Map a signed longitude delta to a :class:`Motion` value."""

    if delta > 0.0:
        return Motion.DIRECT
    if delta < 0.0:
        return Motion.RETROGRADE
    return Motion.STATIONARY


def matches_regime(delta: float, regime: Motion) -> bool:
    """Return ``True`` when ``delta`` satisfies the ``regime`` predicate.

    ``regime`` must be :attr:`Motion.DIRECT` or :attr:`Motion.RETROGRADE`;
    a stationary delta matches either.
    """

    if regime is Motion.DIRECT:
        return is_direct(delta)
    if regime is Motion.RETROGRADE:
        return is_retrograde(delta)
    raise ValueError(
        f"regime must be one of 'direct', 'retrograde'; got {regime.value!r}"
    )


def opposite_regime(regime: Motion) -> Motion:
    if regime is Motion.DIRECT:
        return Motion.RETROGRADE
    if regime is Motion.RETROGRADE:
        return Motion.DIRECT
    raise ValueError(
        f"regime must be one of 'direct', 'retrograde'; got {regime.value!r}"
    )
