"""Route refinement: bearings, smoothing, interpolation and resampling."""

from .bearings import (
    adaptive_window,
    assign_bearings,
    bearing_differences,
    safe_windows,
    smooth_bearings,
    smooth_bearings_adaptive,
    track_point,
)
from .interpolation import (
    all_usable,
    interpolate,
    interpolate_segment,
    snap_coordinate,
    snap_route,
)
from .panoramas import pano_ids, random_usable, remove_third_party, route_from_pano_ids
from .resampling import smooth_trim, smoothen, trim

__all__ = [
    "pano_ids",
    "random_usable",
    "remove_third_party",
    "route_from_pano_ids",
    "adaptive_window",
    "assign_bearings",
    "bearing_differences",
    "safe_windows",
    "smooth_bearings",
    "smooth_bearings_adaptive",
    "track_point",
    "all_usable",
    "interpolate",
    "interpolate_segment",
    "snap_coordinate",
    "snap_route",
    "smooth_trim",
    "smoothen",
    "trim",
]
