"""astrostations package bootstrap and curated public API surface."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version as _get_version

LOG = logging.getLogger(__name__)

try:
    __version__ = _get_version("astrostations")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0"

from .api import (  # noqa: E402
    apparent_longitude,
    default_oracle,
    next_moment,
    next_station,
    upcoming_stations,
)
from .core import (  # noqa: E402
    Direction,
    Motion,
    Resolution,
    SearchArgumentError,
    angular_difference,
    is_direct,
    is_retrograde,
    step,
)
from .detectors import (  # noqa: E402
    StationNotFoundError,
    find_next_moment,
    find_next_station,
    iter_stations,
)
from .ephemeris import (  # noqa: E402
    BodyNotFoundError,
    CachedOracle,
    FunctionOracle,
    LongitudeOracle,
    SwissLongitudeOracle,
)
from .events import MotionMoment  # noqa: E402


def get_version() -> str:
    """Return the resolved astrostations package version."""

    return __version__


__all__ = [
    "__version__",
    "get_version",
    "BodyNotFoundError",
    "CachedOracle",
    "Direction",
    "FunctionOracle",
    "LongitudeOracle",
    "Motion",
    "MotionMoment",
    "Resolution",
    "SearchArgumentError",
    "StationNotFoundError",
    "SwissLongitudeOracle",
    "angular_difference",
    "apparent_longitude",
    "default_oracle",
    "find_next_moment",
    "find_next_station",
    "is_direct",
    "is_retrograde",
    "iter_stations",
    "next_moment",
    "next_station",
    "step",
    "upcoming_stations",
]
