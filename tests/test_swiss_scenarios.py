"""Mercury stations of late 2019 and early 2020 against the Swiss ephemeris."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from astrostations.detectors import find_next_station, iter_stations
from astrostations.ephemeris import CachedOracle, SwissLongitudeOracle, has_swisseph

pytestmark = pytest.mark.skipif(not has_swisseph(), reason="pyswisseph not installed")

TOLERANCE = timedelta(minutes=3)


@pytest.fixture(scope="module")
def oracle() -> CachedOracle:
    return CachedOracle(SwissLongitudeOracle(prefer_moshier=True))


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=UTC)


def test_mercury_retrograde_station_october_2019(oracle) -> None:
    found = find_next_station(
        oracle, "mercury", _utc(2019, 10, 31), "next", "retrograde"
    )
    assert abs(found.instant - _utc(2019, 10, 31, 15, 43)) <= TOLERANCE
    assert found.longitude == pytest.approx(237.638, abs=1e-3)


def test_mercury_direct_station_november_2019(oracle) -> None:
    found = find_next_station(oracle, "mercury", _utc(2019, 10, 31), "next", "direct")
    assert abs(found.instant - _utc(2019, 11, 20, 19, 13)) <= TOLERANCE
    assert found.longitude == pytest.approx(221.586, abs=1e-3)


def test_next_retrograde_station_skips_current_one(oracle) -> None:
    found = find_next_station(
        oracle, "mercury", _utc(2019, 10, 31, 20), "next", "retrograde"
    )
    assert abs(found.instant - _utc(2020, 2, 17, 0, 55)) <= TOLERANCE


def test_prev_retrograde_station_from_inside_the_occurrence(oracle) -> None:
    found = find_next_station(
        oracle, "mercury", _utc(2019, 11, 10), "prev", "retrograde"
    )
    assert abs(found.instant - _utc(2019, 10, 31, 15, 43)) <= TOLERANCE


def test_station_sequence(oracle) -> None:
    found = list(iter_stations(oracle, "mercury", _utc(2019, 10, 1), count=3))
    expected = [
        _utc(2019, 10, 31, 15, 43),
        _utc(2019, 11, 20, 19, 13),
        _utc(2020, 2, 17, 0, 55),
    ]
    for item, target in zip(found, expected):
        assert abs(item.instant - target) <= TOLERANCE
