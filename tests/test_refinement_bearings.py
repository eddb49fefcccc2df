"""Tests for bearing assignment and adaptive smoothing."""

from __future__ import annotations

from typing import List

import pytest

from streetview_journey.bearing import Bearing
from streetview_journey.config import RefinementConfig
from streetview_journey.errors import RangeError
from streetview_journey.models import Coordinate
from streetview_journey.refinement import (
    adaptive_window,
    assign_bearings,
    bearing_differences,
    safe_windows,
    smooth_bearings,
    smooth_bearings_adaptive,
    track_point,
)
from streetview_journey.refinement.resampling import trim
from streetview_journey.route import Route


def _route_with_bearings(values: List[float]) -> Route:
    route = Route.from_coordinates([(0.0, i * 0.001) for i in range(len(values))])
    return route.with_bearings([Bearing(v) for v in values])


def _values(route: Route) -> List[float]:
    return [b.value for b in route.bearings()]


def test_assign_bearings_northward_collinear_points() -> None:
    route = Route.from_coordinates([(0.0, 0.0), (0.001, 0.0), (0.002, 0.0)])
    result = assign_bearings(route)
    values = _values(result)
    assert values[0] == pytest.approx(0.0)
    assert values[1] == pytest.approx(0.0)
    assert values[2] == values[1]


def test_assign_bearings_last_point_copies_previous() -> None:
    route = Route.from_coordinates([(0.0, 0.0), (0.0, 0.001), (0.001, 0.001)])
    values = _values(assign_bearings(route))
    assert values[0] == pytest.approx(90.0)
    assert values[1] == pytest.approx(0.0)
    assert values[2] == values[1]


def test_assign_bearings_returns_new_route() -> None:
    route = Route.from_coordinates([(0.0, 0.0), (0.0, 0.001)])
    result = assign_bearings(route)
    assert _values(route) == [0.0, 0.0]
    assert _values(result) == pytest.approx([90.0, 90.0])


def test_assign_bearings_repeated_points_face_next_distinct_point() -> None:
    east = Route.from_coordinates([(0.0, 0.0), (0.0, 0.001), (0.0, 0.002)])
    result = assign_bearings(trim(east, 6))
    assert len(result) == 6
    assert _values(result) == pytest.approx([90.0] * 6)


def test_assign_bearings_trailing_duplicates_keep_previous_bearing() -> None:
    route = Route.from_coordinates([(0.0, 0.0), (0.001, 0.0), (0.001, 0.0), (0.001, 0.0)])
    assert _values(assign_bearings(route)) == pytest.approx([0.0] * 4)
    west = Route.from_coordinates([(0.0, 0.001), (0.0, 0.0), (0.0, 0.0)])
    assert _values(assign_bearings(west)) == pytest.approx([270.0] * 3)


def test_assign_bearings_stationary_route_faces_north() -> None:
    route = Route.from_coordinates([(5.0, 5.0)] * 3)
    assert _values(assign_bearings(route)) == [0.0, 0.0, 0.0]


def test_assign_bearings_short_routes_unchanged() -> None:
    single = Route.from_coordinates([(1.0, 1.0)])
    assert assign_bearings(single) is single
    assert len(assign_bearings(Route())) == 0


def test_track_point_faces_target() -> None:
    route = Route.from_coordinates([(0.0, -0.01), (0.0, 0.01), (-0.01, 0.0)])
    result = track_point(route, Coordinate(0.0, 0.0))
    assert _values(result) == pytest.approx([90.0, 270.0, 0.0])


def test_bearing_differences_last_entry_is_zero() -> None:
    route = _route_with_bearings([350, 10, 100, 100])
    assert bearing_differences(route) == pytest.approx([20.0, 90.0, 0.0, 0.0])


def test_safe_windows_stop_at_right_angle() -> None:
    # One 90 degree turn between index 4 and 5 of a 20 point route.
    route = _route_with_bearings([0.0] * 5 + [90.0] * 15)
    assert safe_windows(route, 10) == [4, 3, 2, 1, 0, 10, 10, 10, 10, 10]
    assert adaptive_window(route, 10) == 6


def test_adaptive_window_for_short_route_is_one() -> None:
    route = _route_with_bearings([0.0, 45.0, 90.0])
    assert safe_windows(route, 10) == []
    assert adaptive_window(route, 10) == 1


def test_adaptive_window_is_at_least_one() -> None:
    # Every step is a right angle, so every safe window is 0.
    route = _route_with_bearings([0.0, 90.0] * 8)
    assert set(safe_windows(route, 4)) == {0}
    assert adaptive_window(route, 4) == 1


def test_smooth_bearings_averages_forward_window() -> None:
    route = _route_with_bearings([10, 20, 30, 40, 50])
    result = smooth_bearings(route, 2)
    assert _values(result) == pytest.approx([15.0, 25.0, 35.0, 40.0, 50.0])


def test_smooth_bearings_uses_naive_average() -> None:
    route = _route_with_bearings([300, 200, 200])
    result = smooth_bearings(route, 2)
    # (300 + 200) % 360 / 2, where a circular mean would give 250.
    assert _values(result)[0] == pytest.approx(70.0)


def test_smooth_bearings_rejects_empty_window() -> None:
    with pytest.raises(RangeError):
        smooth_bearings(_route_with_bearings([1.0, 2.0]), 0)


def test_smooth_bearings_adaptive_straight_north_route_is_stable() -> None:
    route = _route_with_bearings([0.0] * 30)
    result = smooth_bearings_adaptive(route)
    assert _values(result) == [0.0] * 30


def test_smooth_bearings_adaptive_skips_short_routes() -> None:
    route = _route_with_bearings([0.0, 30.0, 60.0])
    assert smooth_bearings_adaptive(route) is route


def test_smooth_bearings_adaptive_uses_configured_maximum() -> None:
    values = [0.0] * 5 + [90.0] * 15
    route = _route_with_bearings(values)
    result = smooth_bearings_adaptive(route, RefinementConfig(maximum_smooth=10))
    # window 6: the tail keeps its bearings, index 0 averages five zeros and one 90.
    assert _values(result)[-6:] == [90.0] * 6
    assert _values(result)[0] == pytest.approx(15.0)
    assert _values(result)[4] == pytest.approx((90.0 * 5 % 360) / 6)
