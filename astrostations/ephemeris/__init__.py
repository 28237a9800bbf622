"""Ephemeris oracles exposed by :mod:`astrostations`."""

from __future__ import annotations

from .oracle import (
    BODY_CODES,
    BodyNotFoundError,
    CachedOracle,
    FunctionOracle,
    LongitudeOracle,
    ObserverLocation,
    SwissLongitudeOracle,
)
from .swe import get_swisseph, has_swisseph
from .utils import get_se_ephe_path

__all__ = [
    "BODY_CODES",
    "BodyNotFoundError",
    "CachedOracle",
    "FunctionOracle",
    "LongitudeOracle",
    "ObserverLocation",
    "SwissLongitudeOracle",
    "get_se_ephe_path",
    "get_swisseph",
    "has_swisseph",
]
