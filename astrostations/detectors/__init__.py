"""Moment and station detectors."""

from __future__ import annotations

from .moments import REFINEMENT_CHAIN, StationNotFoundError, find_next_moment
from .stations import (
    STATION_PLANS,
    RegimeState,
    SearchLeg,
    find_next_station,
    iter_stations,
    station_plan,
)

__all__ = [
    "REFINEMENT_CHAIN",
    "STATION_PLANS",
    "RegimeState",
    "SearchLeg",
    "StationNotFoundError",
    "find_next_moment",
    "find_next_station",
    "iter_stations",
    "station_plan",
]
