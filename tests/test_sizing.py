"""Tests for the base radius schedule."""

import pytest

from royale.sizing import RadiusSchedule, diameter_for, size_thresholds


@pytest.mark.parametrize(
    "count,diameter",
    [
        (1, 135.0),
        (5, 135.0),
        (6, 105.0),
        (10, 105.0),
        (11, 95.0),
        (21, 75.0),
        (101, 55.0),
        (501, 35.0),
        (701, 15.0),
        (2000, 15.0),
        (2001, 10.0),
    ],
)
def test_diameter_bands(count, diameter):
    assert diameter_for(count, animation_cap=2000) == diameter


def test_thresholds_include_cap_offsets():
    assert size_thresholds(2000) == (52000, 12000, 2000, 500, 100, 20, 10, 5, 1)


class TestRadiusSchedule:
    def test_initial_radius(self):
        assert RadiusSchedule(120, 2000).radius == 27.5

    def test_only_recomputes_on_threshold_crossing(self):
        schedule = RadiusSchedule(120, 2000)
        assert schedule.update(101) is False
        assert schedule.radius == 27.5

        assert schedule.update(100) is True
        assert schedule.radius == 37.5
        assert schedule.update(100) is False
        assert schedule.update(21) is False
        assert schedule.radius == 37.5

    def test_grows_as_field_thins(self):
        schedule = RadiusSchedule(50, 2000)
        radii = []
        for live in (40, 15, 8, 3):
            schedule.update(live)
            radii.append(schedule.radius)
        assert radii == [37.5, 47.5, 52.5, 67.5]
        assert schedule.diameter == 135.0
