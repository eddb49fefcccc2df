"""Dataclasses describing coordinates and route points."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Tuple

from .bearing import Bearing
from .errors import RangeError

LatLon = Tuple[float, float]


@dataclass(slots=True, frozen=True)
class Coordinate:
    """Latitude/longitude pair in degrees."""

    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise RangeError(f"Latitude {self.lat} outside [-90, 90]")
        if not -180.0 <= self.lon <= 180.0:
            raise RangeError(f"Longitude {self.lon} outside [-180, 180]")

    def __iter__(self) -> Iterator[float]:
        yield self.lat
        yield self.lon

    def __str__(self) -> str:
        return f"{self.lat}, {self.lon}"

    def as_tuple(self) -> LatLon:
        return (self.lat, self.lon)


@dataclass(slots=True)
class RoutePoint:
    """A coordinate with the camera bearing used when imaging it.

    ``usable`` is a transient flag set during bulk filtering; points marked
    unusable are dropped by :meth:`Route.without_unusable`.
    """

    coordinate: Coordinate
    bearing: Bearing = field(default_factory=Bearing)
    usable: bool = True

    @property
    def lat(self) -> float:
        return self.coordinate.lat

    @property
    def lon(self) -> float:
        return self.coordinate.lon
