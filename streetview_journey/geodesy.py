"""Great-circle helpers on a spherical Earth.

All functions take and return :class:`Coordinate` values in degrees and
distances in metres. Formulas follow the standard spherical haversine /
forward-azimuth / direct-problem derivations.
"""

from __future__ import annotations

import math
import random
from typing import Optional

from .bearing import Bearing
from .errors import RangeError
from .models import Coordinate

EARTH_RADIUS_M = 6_371_000.0

# Half the equatorial circumference; used to bound random destinations.
_HALF_MERIDIAN_M = 10_018_750.0


def distance(a: Coordinate, b: Coordinate) -> float:
    """Return the haversine distance in metres between two coordinates."""

    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lon - a.lon)
    h = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def initial_bearing(a: Coordinate, b: Coordinate) -> Bearing:
    """Return the forward azimuth from ``a`` towards ``b``.

    Undefined when ``a == b``; callers must special-case zero distance.
    """

    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_lambda = math.radians(b.lon - a.lon)
    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(
        phi2
    ) * math.cos(d_lambda)
    return Bearing(math.degrees(math.atan2(y, x)))


def destination(a: Coordinate, distance_m: float, bearing: Bearing) -> Coordinate:
    """Return the point reached travelling ``distance_m`` from ``a`` along ``bearing``."""

    phi1 = math.radians(a.lat)
    lambda1 = math.radians(a.lon)
    theta = math.radians(bearing.value)
    delta = distance_m / EARTH_RADIUS_M
    phi2 = math.asin(
        math.sin(phi1) * math.cos(delta)
        + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    )
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2),
    )
    return _to_coordinate(phi2, lambda2)


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    """Return the point halfway along the great-circle arc between ``a`` and ``b``."""

    phi1 = math.radians(a.lat)
    lambda1 = math.radians(a.lon)
    phi2 = math.radians(b.lat)
    d_lambda = math.radians(b.lon - a.lon)
    bx = math.cos(phi2) * math.cos(d_lambda)
    by = math.cos(phi2) * math.sin(d_lambda)
    phi3 = math.atan2(
        math.sin(phi1) + math.sin(phi2),
        math.sqrt((math.cos(phi1) + bx) ** 2 + by**2),
    )
    lambda3 = lambda1 + math.atan2(by, math.cos(phi1) + bx)
    return _to_coordinate(phi3, lambda3)


def intermediate(a: Coordinate, b: Coordinate, fraction: float) -> Coordinate:
    """Return the point ``fraction`` of the way along the arc from ``a`` to ``b``.

    Raises:
        RangeError: If ``fraction`` lies outside ``[0, 1]``.
    """

    if not 0.0 <= fraction <= 1.0:
        raise RangeError(f"fraction must be between 0 and 1 (got {fraction})")
    if fraction == 0.0:
        return a
    if fraction == 1.0:
        return b
    ang_dist = distance(a, b) / EARTH_RADIUS_M
    if ang_dist == 0.0:
        return a
    phi1, lambda1 = math.radians(a.lat), math.radians(a.lon)
    phi2, lambda2 = math.radians(b.lat), math.radians(b.lon)
    wa = math.sin((1 - fraction) * ang_dist) / math.sin(ang_dist)
    wb = math.sin(fraction * ang_dist) / math.sin(ang_dist)
    x = wa * math.cos(phi1) * math.cos(lambda1) + wb * math.cos(phi2) * math.cos(
        lambda2
    )
    y = wa * math.cos(phi1) * math.sin(lambda1) + wb * math.cos(phi2) * math.sin(
        lambda2
    )
    z = wa * math.sin(phi1) + wb * math.sin(phi2)
    phi3 = math.atan2(z, math.sqrt(x**2 + y**2))
    lambda3 = math.atan2(y, x)
    return _to_coordinate(phi3, lambda3)


def random_point(rng: Optional[random.Random] = None) -> Coordinate:
    """Return a random coordinate, used to seed panorama discovery."""

    rng = rng or random.Random()  # nosec B311 - not security sensitive
    start = Coordinate(0.0, rng.random() * 360.0 - 180.0)
    heading = Bearing(0.0 if rng.random() <= 0.5 else 180.0)
    return destination(start, rng.random() * _HALF_MERIDIAN_M, heading)


def _to_coordinate(phi: float, lam: float) -> Coordinate:
    """Build a coordinate from radians, wrapping longitude into [-180, 180]."""

    lat = max(-90.0, min(90.0, math.degrees(phi)))
    lon = math.degrees(lam)
    if lon > 180.0 or lon < -180.0:
        lon = (lon + 540.0) % 360.0 - 180.0
    return Coordinate(lat, lon)


__all__ = [
    "EARTH_RADIUS_M",
    "distance",
    "initial_bearing",
    "destination",
    "midpoint",
    "intermediate",
    "random_point",
]
