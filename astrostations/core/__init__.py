"""Core helpers: angle arithmetic, calendar stepping and UTC instants."""

from __future__ import annotations

from .angles import (
    Motion,
    angular_difference,
    classify_motion,
    is_direct,
    is_retrograde,
    matches_regime,
    normalize_degrees,
    opposite_regime,
)
from .stepping import (
    Direction,
    Resolution,
    SearchArgumentError,
    coerce_direction,
    coerce_regime,
    coerce_resolution,
    step,
    truncate,
)
from .time import ensure_utc, format_instant, parse_instant

__all__ = [
    "Direction",
    "Motion",
    "Resolution",
    "SearchArgumentError",
    "angular_difference",
    "classify_motion",
    "coerce_direction",
    "coerce_regime",
    "coerce_resolution",
    "ensure_utc",
    "format_instant",
    "is_direct",
    "is_retrograde",
    "matches_regime",
    "normalize_degrees",
    "opposite_regime",
    "parse_instant",
    "step",
    "truncate",
]
