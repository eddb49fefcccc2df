"""Journey preparation service.

Turns a sparse route into an evenly sampled journey ready for image capture:
interpolate against the panorama lookup when points are too far apart,
optionally drop user uploaded panoramas, resample to an exact frame count,
drop repeated points, then assign and smooth camera bearings. The service
also collects panorama ids along a route and rebuilds routes from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import List, Optional, Sequence

from ..config import DRIVE_METRES_PER_POINT, HIKE_METRES_PER_POINT, RefinementConfig
from ..errors import RangeError
from ..lookup.base import PanoramaLocator, PanoramaLookup
from ..refinement import (
    assign_bearings,
    interpolate,
    pano_ids,
    remove_third_party,
    route_from_pano_ids,
    smooth_bearings_adaptive,
    smooth_trim,
    trim,
)
from ..route import Route


class JourneyType(str, Enum):
    DRIVE = "drive"
    HIKE = "hike"

    @property
    def metres_per_point(self) -> float:
        if self is JourneyType.HIKE:
            return HIKE_METRES_PER_POINT
        return DRIVE_METRES_PER_POINT


@dataclass(slots=True)
class JourneyServiceConfig:
    lookup: Optional[PanoramaLookup] = None
    refinement: RefinementConfig = field(default_factory=RefinementConfig)
    logger: logging.Logger | None = None


class JourneyService:
    def __init__(self, config: JourneyServiceConfig | None = None):
        self.config = config or JourneyServiceConfig()
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)

    def build(
        self,
        route: Route,
        journey_type: JourneyType = JourneyType.DRIVE,
        *,
        metres_per_point: float | None = None,
        trim_to: int | None = None,
        maintain_speed: bool = False,
        keep_duplicates: bool = False,
        smooth: bool = True,
        drop_third_party: bool = False,
    ) -> Route:
        """Return ``route`` refined into a journey with camera bearings."""

        if trim_to is not None and trim_to < 1:
            raise RangeError(f"trim_to must be >= 1 (got {trim_to})")
        if metres_per_point is None:
            mpp = journey_type.metres_per_point
        elif metres_per_point <= 0:
            raise RangeError(f"metres_per_point must be > 0 (got {metres_per_point})")
        else:
            mpp = metres_per_point
        refined = route
        if len(refined) >= 2 and refined.average_distance > mpp:
            refined = self._interpolate(refined, mpp)
        else:
            self._log.info(
                "Average spacing %.1fm within target %.1fm; skipping interpolation",
                refined.average_distance,
                mpp,
            )

        if drop_third_party:
            lookup = self._require_lookup("Dropping third party panoramas")
            refined = remove_third_party(refined, lookup, self.config.refinement)

        if trim_to is not None and refined.points:
            if maintain_speed or trim_to > len(refined):
                refined = smooth_trim(refined, trim_to)
            else:
                refined = trim(refined, trim_to)
            self._log.info("Resampled journey to %d points", len(refined))

        if not keep_duplicates:
            before = len(refined)
            refined = refined.remove_duplicates()
            if len(refined) != before:
                self._log.info("Removed %d duplicate points", before - len(refined))

        refined = assign_bearings(refined)
        if smooth:
            refined = smooth_bearings_adaptive(refined, self.config.refinement)
        return refined

    def pano_ids(self, route: Route) -> List[str]:
        """Return the panorama id nearest each point of ``route``."""

        lookup = self._require_lookup("Collecting panorama ids")
        return pano_ids(route, lookup, self.config.refinement)

    def from_pano_ids(self, ids: Sequence[str]) -> Route:
        """Rebuild a route from panorama ids (the lookup must resolve ids)."""

        lookup = self._require_lookup("Resolving panorama ids")
        if not isinstance(lookup, PanoramaLocator):
            raise RuntimeError("The configured lookup cannot resolve panorama ids")
        return route_from_pano_ids(ids, lookup, self.config.refinement)

    def _require_lookup(self, action: str) -> PanoramaLookup:
        if self.config.lookup is None:
            raise RuntimeError(f"{action} requires a panorama lookup")
        return self.config.lookup

    def _interpolate(self, route: Route, mpp: float) -> Route:
        if self.config.lookup is None:
            raise RuntimeError(
                "Interpolation requires a panorama lookup; configure one or "
                "raise metres_per_point"
            )
        lookup = self.config.lookup
        self._log.info(
            "Interpolating %d points (avg %.1fm) to %.1fm per point",
            len(route),
            route.average_distance,
            mpp,
        )
        return interpolate(route, lookup, mpp, self.config.refinement)
