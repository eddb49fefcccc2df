"""Panorama lookup collaborators.

The refinement engine only depends on :class:`PanoramaLookup`; the Street
View metadata client and the cache are concrete implementations.
"""

from .base import (
    LookupFailed,
    LookupResult,
    NotFound,
    PanoramaLookup,
    PanoramaLocator,
    THIRD_PARTY_ID_LENGTH,
    is_third_party,
    Snapped,
    resolve_snap,
    usable_from_result,
)
from .cache import CachedLookup
from .metadata import StreetViewMetadataLookup
from .rate_limiter import RateLimiter

__all__ = [
    "LookupFailed",
    "LookupResult",
    "NotFound",
    "PanoramaLookup",
    "PanoramaLocator",
    "THIRD_PARTY_ID_LENGTH",
    "is_third_party",
    "Snapped",
    "resolve_snap",
    "usable_from_result",
    "CachedLookup",
    "StreetViewMetadataLookup",
    "RateLimiter",
]
