"""Snapping and gap-filling interpolation against a panorama lookup.

Every consecutive pair of snapped points is subdivided independently on a
worker thread. Each worker returns its own list and the results are stitched
back together in input order, so concurrency never changes the output.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
import logging
from typing import List, Optional

from ..config import RefinementConfig
from ..errors import RangeError, ZeroResultsError
from ..geodesy import distance, midpoint
from ..lookup.base import PanoramaLookup, resolve_snap
from ..models import Coordinate, RoutePoint
from ..route import Route

LOGGER = logging.getLogger(__name__)


def snap_coordinate(
    lookup: PanoramaLookup, coordinate: Coordinate, radius_m: int
) -> Optional[Coordinate]:
    """Return the nearest panorama position, or ``None`` when none exists.

    Raises:
        MetadataQueryError: When the lookup fails for any other reason.
    """

    try:
        result = lookup.snap(coordinate, radius_m)
    except ZeroResultsError:
        return None
    return resolve_snap(result)


def snap_route(
    route: Route, lookup: PanoramaLookup, config: Optional[RefinementConfig] = None
) -> Route:
    """Move every point onto its nearest panorama, dropping points with none."""

    config = config or RefinementConfig()
    if not route.points:
        return route

    def snap_point(point: RoutePoint) -> RoutePoint:
        snapped = snap_coordinate(lookup, point.coordinate, config.search_radius_m)
        if snapped is None:
            return replace(point, usable=False)
        return replace(point, coordinate=snapped)

    with ThreadPoolExecutor(max_workers=_worker_count(config, len(route))) as executor:
        marked = Route(tuple(executor.map(snap_point, route.points)))
    result = marked.without_unusable()
    dropped = len(route) - len(result)
    if dropped:
        LOGGER.info(
            "Dropped %d of %d points with no panorama within %dm",
            dropped,
            len(route),
            config.search_radius_m,
        )
    return result


def all_usable(
    route: Route, lookup: PanoramaLookup, config: Optional[RefinementConfig] = None
) -> bool:
    """Return True when every point has a panorama within the search radius."""

    config = config or RefinementConfig()
    if not route.points:
        return True
    with ThreadPoolExecutor(max_workers=_worker_count(config, len(route))) as executor:
        futures = [
            executor.submit(lookup.is_usable, pt.coordinate, config.search_radius_m)
            for pt in route
        ]
        for future in as_completed(futures):
            if not future.result():
                for pending in futures:
                    pending.cancel()
                return False
    return True


def interpolate_segment(
    start: Coordinate,
    end: Coordinate,
    lookup: PanoramaLookup,
    mpp: float,
    radius_m: int,
    *,
    max_depth: int,
    depth: int = 0,
) -> List[Coordinate]:
    """Bisect ``start``-``end`` until every gap is at most ``mpp`` metres.

    Subdivision stops early when the midpoint has no panorama, when it snaps
    back onto an endpoint, or when ``max_depth`` is reached. The returned
    list always begins with ``start`` and ends with ``end``.
    """

    if distance(start, end) <= mpp:
        return [start, end]
    if depth >= max_depth:
        LOGGER.warning(
            "Interpolation depth cap (%d) reached between %s and %s",
            max_depth,
            start,
            end,
        )
        return [start, end]
    mid = snap_coordinate(lookup, midpoint(start, end), radius_m)
    if mid is None or mid == start or mid == end:
        return [start, end]
    left = interpolate_segment(
        start, mid, lookup, mpp, radius_m, max_depth=max_depth, depth=depth + 1
    )
    right = interpolate_segment(
        mid, end, lookup, mpp, radius_m, max_depth=max_depth, depth=depth + 1
    )
    return left + right[1:]


def interpolate(
    route: Route,
    lookup: PanoramaLookup,
    mpp: float,
    config: Optional[RefinementConfig] = None,
) -> Route:
    """Snap the route and fill gaps so points are at most ``mpp`` metres apart.

    Gaps remain wider than ``mpp`` only where no further panorama exists
    between two points. Repeated coordinates are removed from the result.
    """

    if mpp <= 0:
        raise RangeError(f"mpp must be greater than zero (got {mpp})")
    config = config or RefinementConfig()
    snapped = snap_route(route, lookup, config)
    coords = snapped.coordinates()
    if len(coords) < 2:
        return snapped.remove_duplicates()

    def fill(index: int) -> List[Coordinate]:
        return interpolate_segment(
            coords[index],
            coords[index + 1],
            lookup,
            mpp,
            config.search_radius_m,
            max_depth=config.max_depth,
        )

    pair_count = len(coords) - 1
    with ThreadPoolExecutor(max_workers=_worker_count(config, pair_count)) as executor:
        segments = list(executor.map(fill, range(pair_count)))

    flat = [coord for segment in segments for coord in segment]
    result = Route.from_coordinates(flat).remove_duplicates()
    LOGGER.info(
        "Interpolated %d points into %d (target %.1fm per point)",
        len(route),
        len(result),
        mpp,
    )
    return result


def _worker_count(config: RefinementConfig, tasks: int) -> int:
    return max(1, min(config.max_workers, tasks))


__all__ = [
    "snap_coordinate",
    "snap_route",
    "all_usable",
    "interpolate_segment",
    "interpolate",
]
