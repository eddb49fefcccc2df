"""Resample a route to an exact number of points."""

from __future__ import annotations

import numpy as np

from ..errors import RangeError
from ..route import Route


def trim(route: Route, count: int) -> Route:
    """Pick ``count`` points at evenly spaced indices.

    No positions are interpolated. When ``count`` exceeds the route length
    some points are picked more than once.
    """

    _check_count(route, count)
    length = len(route)
    step = length / count
    indices = [min(int(round(i * step)), length - 1) for i in range(count)]
    return Route(tuple(route[i] for i in indices))


def smooth_trim(route: Route, count: int) -> Route:
    """Pick ``count`` points at evenly spaced distances along the route.

    Dense stretches of the source keep more points, so the pace of the
    original track survives the resample.
    """

    _check_count(route, count)
    cumulative = route.cumulative_distances()
    spacing = float(cumulative[-1]) / count
    targets = np.arange(count, dtype=float) * spacing
    # argmin picks the first index on ties, matching a forward scan.
    indices = [int(np.argmin(np.abs(cumulative - target))) for target in targets]
    return Route(tuple(route[i] for i in indices))


def smoothen(route: Route) -> Route:
    """Even out point spacing without changing the point count."""

    return smooth_trim(route, len(route))


def _check_count(route: Route, count: int) -> None:
    if count < 1:
        raise RangeError(f"count must be >= 1 (got {count})")
    if not route.points:
        raise RangeError("Cannot resample an empty route")


__all__ = ["trim", "smooth_trim", "smoothen"]
