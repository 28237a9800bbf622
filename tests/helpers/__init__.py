"""Synthetic longitude curves with analytically known stations."""

from .synthetic import (
    ORIGIN,
    CountingOracle,
    at_day,
    days_since_origin,
    direct_station,
    retrograde_station,
    synthetic_longitude,
)

__all__ = [
    "ORIGIN",
    "CountingOracle",
    "at_day",
    "days_since_origin",
    "direct_station",
    "retrograde_station",
    "synthetic_longitude",
]
