from __future__ import annotations

from datetime import timedelta
from itertools import islice

import pytest

from astrostations.core.angles import Motion
from astrostations.core.stepping import Direction
from astrostations.detectors import (
    RegimeState,
    SearchLeg,
    StationNotFoundError,
    find_next_moment,
    find_next_station,
    iter_stations,
    station_plan,
)
from tests.helpers import at_day, direct_station, retrograde_station

TOLERANCE = timedelta(seconds=2)


def _close(found, expected) -> bool:
    return abs(found - expected) <= TOLERANCE


def test_station_plans() -> None:
    assert station_plan("out_of_regime", "next") == (
        SearchLeg(Direction.NEXT, opposite=False),
    )
    assert station_plan(RegimeState.IN_REGIME, Direction.NEXT) == (
        SearchLeg(Direction.NEXT, opposite=True),
        SearchLeg(Direction.NEXT, opposite=False),
    )
    assert station_plan("in_regime", "prev") == (
        SearchLeg(Direction.PREV, opposite=True),
        SearchLeg(Direction.NEXT, opposite=False),
    )
    assert station_plan("out_of_regime", "prev") == (
        SearchLeg(Direction.PREV, opposite=False),
        SearchLeg(Direction.PREV, opposite=True),
        SearchLeg(Direction.NEXT, opposite=False),
    )


def test_every_plan_ends_with_a_forward_target_search() -> None:
    for state in RegimeState:
        for direction in Direction:
            assert station_plan(state, direction)[-1] == SearchLeg(
                Direction.NEXT, opposite=False
            )


def test_next_station_from_opposite_regime(synthetic_oracle) -> None:
    found = find_next_station(synthetic_oracle, "mercury", at_day(0), "next", "retrograde")
    assert _close(found.instant, retrograde_station(0))
    assert found.motion in (Motion.RETROGRADE, Motion.STATIONARY)


def test_next_station_skips_current_occurrence(synthetic_oracle) -> None:
    origin = at_day(5)
    found = find_next_station(synthetic_oracle, "mercury", origin, "next", "retrograde")
    assert _close(found.instant, retrograde_station(1))

    moment = find_next_moment(synthetic_oracle, "mercury", origin, "next", "retrograde")
    assert moment.instant == origin
    assert found.instant > moment.instant


def test_prev_station_inside_occurrence_returns_its_start(synthetic_oracle) -> None:
    found = find_next_station(synthetic_oracle, "mercury", at_day(5), "prev", "retrograde")
    assert _close(found.instant, retrograde_station(0))


def test_prev_station_after_occurrence_returns_its_start(synthetic_oracle) -> None:
    found = find_next_station(synthetic_oracle, "mercury", at_day(8), "prev", "retrograde")
    assert _close(found.instant, retrograde_station(0))
    assert found.delta <= 0.0


def test_prev_direct_station(synthetic_oracle) -> None:
    found = find_next_station(synthetic_oracle, "mercury", at_day(8), "prev", "direct")
    assert _close(found.instant, direct_station(0))
    assert found.delta >= 0.0


def test_next_direct_station(synthetic_oracle) -> None:
    found = find_next_station(synthetic_oracle, "mercury", at_day(1), "next", "direct")
    assert _close(found.instant, direct_station(0))


def test_prev_station_is_never_after_prev_moment(synthetic_oracle) -> None:
    origin = at_day(8)
    moment = find_next_moment(synthetic_oracle, "mercury", origin, "prev", "retrograde")
    station = find_next_station(synthetic_oracle, "mercury", origin, "prev", "retrograde")
    assert station.instant <= moment.instant <= origin


def test_iter_stations_alternates_forward(synthetic_oracle) -> None:
    found = list(iter_stations(synthetic_oracle, "mercury", at_day(0), count=4))

    expected = [
        retrograde_station(0),
        direct_station(0),
        retrograde_station(1),
        direct_station(1),
    ]
    assert [item.delta <= 0.0 for item in found] == [True, False, True, False]
    for item, target in zip(found, expected):
        assert _close(item.instant, target)


def test_iter_stations_backward_starts_with_current_motion(synthetic_oracle) -> None:
    found = list(
        iter_stations(
            synthetic_oracle, "mercury", at_day(18), direction="prev", count=3
        )
    )

    assert _close(found[0].instant, direct_station(1))
    assert _close(found[1].instant, retrograde_station(1))
    assert _close(found[2].instant, direct_station(0))


def test_iter_stations_is_lazy(counting_oracle) -> None:
    stations = iter_stations(counting_oracle, "mercury", at_day(0))
    first = list(islice(stations, 1))
    assert len(first) == 1
    assert len(counting_oracle.calls) < 400


def test_iter_stations_rejects_negative_count(synthetic_oracle) -> None:
    with pytest.raises(ValueError):
        next(iter_stations(synthetic_oracle, "mercury", at_day(0), count=-1))


def test_station_respects_max_days(steady_oracle) -> None:
    with pytest.raises(StationNotFoundError):
        find_next_station(
            steady_oracle, "sun", at_day(0), "next", "retrograde", max_days=10
        )
