"""Result records returned by the moment and station searches."""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import Any

from .core.angles import Motion, classify_motion
from .core.stepping import Resolution
from .core.time import format_instant

__all__ = ["MotionMoment"]


@dataclass(frozen=True)
class MotionMoment:
    """Located instant of a moment or station search.

    ``delta`` is the signed longitude change from ``instant`` to one
    ``resolution`` unit later; its sign is the classification that stopped
    the search.
    """

    body: str
    instant: _dt.datetime
    longitude: float
    delta: float
    resolution: Resolution

    @property
    def ts(self) -> str:
        return format_instant(self.instant)

    @property
    def motion(self) -> Motion:
        return classify_motion(self.delta)

    def as_dict(self) -> dict[str, Any]:
        return {
            "body": self.body,
            "ts": self.ts,
            "longitude": self.longitude,
            "delta": self.delta,
            "motion": self.motion.value,
            "resolution": self.resolution.value,
        }
