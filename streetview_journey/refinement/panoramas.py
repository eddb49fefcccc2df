"""Panorama id helpers: collect ids along a route, drop user uploads, and
rebuild a route from ids.

Lookups fan out on a thread pool like snapping does; results keep route order.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
import logging
import random
from typing import List, Optional, Sequence

from ..config import RANDOM_MAX_ATTEMPTS, RANDOM_SEARCH_RADIUS_M, RefinementConfig
from ..errors import MetadataQueryError, RangeError, ZeroResultsError
from ..geodesy import random_point
from ..lookup.base import (
    LookupFailed,
    NotFound,
    PanoramaLocator,
    PanoramaLookup,
    Snapped,
    is_third_party,
    resolve_snap,
)
from ..models import Coordinate, RoutePoint
from ..route import Route
from .interpolation import _worker_count

LOGGER = logging.getLogger(__name__)


def _snap_result(
    lookup: PanoramaLookup, point: RoutePoint, radius_m: int
) -> Optional[Snapped]:
    try:
        result = lookup.snap(point.coordinate, radius_m)
    except ZeroResultsError:
        return None
    if isinstance(result, Snapped):
        return result
    # Raises for anything other than "not found".
    resolve_snap(result)
    return None


def pano_ids(
    route: Route, lookup: PanoramaLookup, config: Optional[RefinementConfig] = None
) -> List[str]:
    """Return the nearest panorama id for every point that has one, in order."""

    config = config or RefinementConfig()
    if not route.points:
        return []
    with ThreadPoolExecutor(max_workers=_worker_count(config, len(route))) as executor:
        results = list(
            executor.map(
                lambda pt: _snap_result(lookup, pt, config.search_radius_m), route.points
            )
        )
    ids = [r.pano_id for r in results if r is not None and r.pano_id]
    if len(ids) != len(route):
        LOGGER.info("Found panorama ids for %d of %d points", len(ids), len(route))
    return ids


def remove_third_party(
    route: Route, lookup: PanoramaLookup, config: Optional[RefinementConfig] = None
) -> Route:
    """Drop points whose nearest panorama is a user upload or does not exist.

    Kept points retain their own coordinates and bearings.
    """

    config = config or RefinementConfig()
    if not route.points:
        return route

    def mark(point: RoutePoint) -> RoutePoint:
        found = _snap_result(lookup, point, config.search_radius_m)
        if found is None or (found.pano_id and is_third_party(found.pano_id)):
            return replace(point, usable=False)
        return point

    with ThreadPoolExecutor(max_workers=_worker_count(config, len(route))) as executor:
        marked = Route(tuple(executor.map(mark, route.points)))
    result = marked.without_unusable()
    dropped = len(route) - len(result)
    if dropped:
        LOGGER.info("Removed %d third party or missing panoramas", dropped)
    return result


def route_from_pano_ids(
    ids: Sequence[str],
    locator: PanoramaLocator,
    config: Optional[RefinementConfig] = None,
) -> Route:
    """Build a route from the capture positions of ``ids``.

    Ids the service no longer knows are skipped.
    """

    config = config or RefinementConfig()
    if not ids:
        return Route()

    def position(pano_id: str) -> Optional[Coordinate]:
        coordinate = resolve_snap(locator.locate(pano_id))
        if coordinate is None:
            LOGGER.debug("Panorama %s could not be found", pano_id)
        return coordinate

    with ThreadPoolExecutor(max_workers=_worker_count(config, len(ids))) as executor:
        positions = list(executor.map(position, ids))
    return Route.from_coordinates(c for c in positions if c is not None)


def random_usable(
    lookup: PanoramaLookup,
    rng: Optional[random.Random] = None,
    *,
    radius_m: int = RANDOM_SEARCH_RADIUS_M,
    max_attempts: int = RANDOM_MAX_ATTEMPTS,
) -> Snapped:
    """Snap random points on Earth until one lands near a panorama.

    Raises:
        ZeroResultsError: When ``max_attempts`` random points found nothing.
        MetadataQueryError: When the lookup fails for any other reason.
    """

    if max_attempts < 1:
        raise RangeError(f"max_attempts must be >= 1 (got {max_attempts})")
    rng = rng or random.Random()  # nosec B311 - not security sensitive
    for attempt in range(1, max_attempts + 1):
        result = lookup.snap(random_point(rng), radius_m)
        if isinstance(result, Snapped):
            LOGGER.debug("Random panorama found after %d attempt(s)", attempt)
            return result
        if isinstance(result, LookupFailed):
            raise MetadataQueryError(result.status, result.message)
        if not isinstance(result, NotFound):
            raise TypeError(f"Unexpected lookup result {result!r}")
    raise ZeroResultsError(f"No panorama found near {max_attempts} random points")


__all__ = [
    "pano_ids",
    "remove_third_party",
    "route_from_pano_ids",
    "random_usable",
]
