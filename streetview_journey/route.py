"""Ordered point sequences that make up a journey."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .bearing import Bearing
from .geodesy import distance
from .models import Coordinate, LatLon, RoutePoint

CoordinateLike = Union[Coordinate, LatLon, Sequence[float]]


def as_coordinate(value: CoordinateLike) -> Coordinate:
    """Convert a ``(lat, lon)`` pair into a :class:`Coordinate`."""

    if isinstance(value, Coordinate):
        return value
    lat, lon = value[0], value[1]
    return Coordinate(float(lat), float(lon))


@dataclass(slots=True, frozen=True)
class Route:
    """Immutable, ordered sequence of route points.

    Order is the direction of travel. Refinement operations never mutate a
    route; they return a new one.
    """

    points: Tuple[RoutePoint, ...] = ()

    @classmethod
    def from_coordinates(cls, coordinates: Iterable[CoordinateLike]) -> Route:
        return cls(tuple(RoutePoint(as_coordinate(c)) for c in coordinates))

    @classmethod
    def from_points(cls, points: Iterable[RoutePoint]) -> Route:
        return cls(tuple(points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[RoutePoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> RoutePoint:
        return self.points[index]

    def __str__(self) -> str:
        return "".join(f"{pt.coordinate}\n" for pt in self.points)

    @property
    def length(self) -> int:
        return len(self.points)

    @property
    def total_distance(self) -> float:
        """Distance in metres covered walking every point in order."""

        return float(self.cumulative_distances()[-1]) if self.points else 0.0

    @property
    def average_distance(self) -> float:
        """Total distance divided by the number of points."""

        if not self.points:
            return 0.0
        return self.total_distance / len(self.points)

    def coordinates(self) -> List[Coordinate]:
        return [pt.coordinate for pt in self.points]

    def bearings(self) -> List[Bearing]:
        return [pt.bearing for pt in self.points]

    def journey(self) -> List[Tuple[Coordinate, Bearing]]:
        """Return ``(coordinate, bearing)`` pairs for the image pipeline."""

        return [(pt.coordinate, pt.bearing) for pt in self.points]

    def cumulative_distances(self) -> NDArray[np.float64]:
        """Return distance travelled up to each point (first entry is 0)."""

        if not self.points:
            return np.zeros(1, dtype=float)
        steps = [
            distance(prev.coordinate, cur.coordinate)
            for prev, cur in zip(self.points, self.points[1:])
        ]
        return np.concatenate(([0.0], np.cumsum(np.asarray(steps, dtype=float))))

    def with_bearings(self, bearings: Sequence[Bearing]) -> Route:
        """Return a copy whose points carry ``bearings`` (same length required)."""

        if len(bearings) != len(self.points):
            raise ValueError("bearings and points must be the same length")
        return Route(
            tuple(replace(pt, bearing=b) for pt, b in zip(self.points, bearings))
        )

    def reversed(self) -> Route:
        """Reverse travel order. Bearings are kept; recompute them afterwards."""

        return Route(tuple(reversed(self.points)))

    def remove_duplicates(self) -> Route:
        """Drop repeated coordinates, keeping the first occurrence of each."""

        seen: set[Coordinate] = set()
        kept: List[RoutePoint] = []
        for pt in self.points:
            if pt.coordinate in seen:
                continue
            seen.add(pt.coordinate)
            kept.append(pt)
        return Route(tuple(kept))

    def without_unusable(self) -> Route:
        return Route(tuple(pt for pt in self.points if pt.usable))


__all__ = ["Route", "CoordinateLike", "as_coordinate"]
