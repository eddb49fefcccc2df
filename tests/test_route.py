"""Tests for the Route model."""

from __future__ import annotations

import math

import pytest

from streetview_journey.bearing import Bearing
from streetview_journey.errors import RangeError
from streetview_journey.geodesy import EARTH_RADIUS_M
from streetview_journey.models import Coordinate, RoutePoint
from streetview_journey.route import Route

ONE_DEGREE_M = EARTH_RADIUS_M * math.radians(1.0)


def _equator_route(*lons: float) -> Route:
    return Route.from_coordinates([(0.0, lon) for lon in lons])


def test_from_coordinates_accepts_pairs_and_coordinates() -> None:
    route = Route.from_coordinates([(1.0, 2.0), Coordinate(3.0, 4.0), [5, 6]])
    assert route.coordinates() == [
        Coordinate(1.0, 2.0),
        Coordinate(3.0, 4.0),
        Coordinate(5.0, 6.0),
    ]
    assert all(b.value == 0.0 for b in route.bearings())


@pytest.mark.parametrize("pair", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.1)])
def test_coordinate_range_is_validated(pair) -> None:
    with pytest.raises(RangeError):
        Coordinate(*pair)


def test_distances_along_equator() -> None:
    route = _equator_route(0.0, 1.0, 3.0)
    assert route.total_distance == pytest.approx(3 * ONE_DEGREE_M)
    assert route.average_distance == pytest.approx(ONE_DEGREE_M)
    assert list(route.cumulative_distances()) == pytest.approx(
        [0.0, ONE_DEGREE_M, 3 * ONE_DEGREE_M]
    )


def test_empty_route_measurements() -> None:
    route = Route()
    assert len(route) == 0
    assert route.total_distance == 0.0
    assert route.average_distance == 0.0


def test_remove_duplicates_is_stable_and_ignores_bearing() -> None:
    a, b = Coordinate(0, 0), Coordinate(0, 1)
    route = Route.from_points(
        [
            RoutePoint(a, Bearing(10)),
            RoutePoint(b, Bearing(20)),
            RoutePoint(a, Bearing(30)),
            RoutePoint(b, Bearing(40)),
        ]
    )
    deduped = route.remove_duplicates()
    assert deduped.coordinates() == [a, b]
    assert [bb.value for bb in deduped.bearings()] == [10.0, 20.0]


def test_consecutive_duplicates_survive_until_removed() -> None:
    route = _equator_route(0.0, 0.0, 1.0)
    assert len(route) == 3
    assert len(route.remove_duplicates()) == 2


def test_reversed_keeps_bearings_with_their_points() -> None:
    route = Route.from_points(
        [
            RoutePoint(Coordinate(0, 0), Bearing(90)),
            RoutePoint(Coordinate(0, 1), Bearing(45)),
        ]
    )
    backwards = route.reversed()
    assert backwards.coordinates() == [Coordinate(0, 1), Coordinate(0, 0)]
    assert [b.value for b in backwards.bearings()] == [45.0, 90.0]
    assert route.coordinates() == [Coordinate(0, 0), Coordinate(0, 1)]


def test_without_unusable_filters_marked_points() -> None:
    route = Route.from_points(
        [
            RoutePoint(Coordinate(0, 0)),
            RoutePoint(Coordinate(0, 1), usable=False),
            RoutePoint(Coordinate(0, 2)),
        ]
    )
    assert route.without_unusable().coordinates() == [Coordinate(0, 0), Coordinate(0, 2)]


def test_journey_pairs_coordinates_with_bearings() -> None:
    route = _equator_route(0.0, 1.0).with_bearings([Bearing(90), Bearing(90)])
    journey = route.journey()
    assert journey[0] == (Coordinate(0.0, 0.0), Bearing(90))
    assert len(journey) == 2


def test_with_bearings_requires_matching_length() -> None:
    with pytest.raises(ValueError):
        _equator_route(0.0, 1.0).with_bearings([Bearing(0)])
