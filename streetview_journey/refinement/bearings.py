"""Camera bearing assignment and adaptive smoothing."""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from ..bearing import Bearing, average
from ..config import RefinementConfig
from ..errors import RangeError
from ..geodesy import initial_bearing
from ..models import Coordinate
from ..route import Route

LOGGER = logging.getLogger(__name__)

# Aggregate turn (degrees) that ends a safe smoothing window.
SHARP_TURN_DEGREES = 90.0


def assign_bearings(route: Route) -> Route:
    """Point every camera at the next point along the route.

    Repeated coordinates look past themselves to the next distinct point, so
    a stationary stretch keeps facing the direction of travel. Points with no
    distinct successor (including the last) copy the bearing before them.
    """

    count = len(route)
    if count < 2:
        return route
    coords = route.coordinates()
    ahead = _next_distinct(coords)
    bearings: List[Bearing] = []
    for i in range(count - 1):
        j = ahead[i]
        if j is not None:
            bearings.append(initial_bearing(coords[i], coords[j]))
        else:
            bearings.append(bearings[-1] if bearings else Bearing())
    bearings.append(bearings[-1])
    return route.with_bearings(bearings)


def _next_distinct(coords: List[Coordinate]) -> List[Optional[int]]:
    """Index of the first later coordinate that differs, per position."""

    ahead: List[Optional[int]] = [None] * len(coords)
    for i in range(len(coords) - 2, -1, -1):
        if coords[i + 1] != coords[i]:
            ahead[i] = i + 1
        else:
            ahead[i] = ahead[i + 1]
    return ahead


def track_point(route: Route, target: Coordinate) -> Route:
    """Point every camera at a fixed ``target`` coordinate."""

    return route.with_bearings(
        [initial_bearing(pt.coordinate, target) for pt in route]
    )


def bearing_differences(route: Route) -> List[float]:
    """Turn (0 to 180 degrees) between each bearing and the next; last is 0."""

    bearings = route.bearings()
    if not bearings:
        return []
    diffs = [a.difference(b).value for a, b in zip(bearings, bearings[1:])]
    diffs.append(0.0)
    return diffs


def safe_windows(route: Route, maximum_smooth: int) -> List[int]:
    """Return, per start index, how many bearings fit under a right-angle swing.

    Only indices in ``[0, n - maximum_smooth)`` get an entry.
    """

    if maximum_smooth < 1:
        raise RangeError("maximum_smooth must be >= 1")
    diffs = bearing_differences(route)
    windows: List[int] = []
    for a in range(len(diffs) - maximum_smooth):
        total = 0.0
        window = maximum_smooth
        for b in range(maximum_smooth):
            total += diffs[a + b]
            if total >= SHARP_TURN_DEGREES:
                window = b
                break
        windows.append(window)
    return windows


def adaptive_window(route: Route, maximum_smooth: int) -> int:
    """Return the rounded mean safe window, at least 1.

    Routes no longer than ``maximum_smooth`` have no safe windows and get 1,
    which leaves bearings untouched.
    """

    windows = safe_windows(route, maximum_smooth)
    if not windows:
        return 1
    return max(1, int(round(float(np.mean(windows)))))


def smooth_bearings(route: Route, window: int) -> Route:
    """Replace each bearing with the average of it and the next ``window - 1``.

    The last ``window`` points keep their bearings.
    """

    if window < 1:
        raise RangeError(f"window must be >= 1 (got {window})")
    original = route.bearings()
    smoothed = list(original)
    for a in range(len(original) - window):
        smoothed[a] = average(original[a : a + window])
    return route.with_bearings(smoothed)


def smooth_bearings_adaptive(
    route: Route, config: Optional[RefinementConfig] = None
) -> Route:
    """Smooth bearings with a window sized from the route's typical curvature."""

    config = config or RefinementConfig()
    window = adaptive_window(route, config.maximum_smooth)
    if window == 1:
        LOGGER.debug("Skipping bearing smoothing for %d points", len(route))
        return route
    LOGGER.debug("Smoothing %d bearings with window=%d", len(route), window)
    return smooth_bearings(route, window)


__all__ = [
    "SHARP_TURN_DEGREES",
    "assign_bearings",
    "track_point",
    "bearing_differences",
    "safe_windows",
    "adaptive_window",
    "smooth_bearings",
    "smooth_bearings_adaptive",
]
