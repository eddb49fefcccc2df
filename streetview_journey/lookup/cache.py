"""Caching decorator for panorama lookups."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable, Tuple

from cachetools import TTLCache

from ..config import LOOKUP_CACHE_SIZE, LOOKUP_CACHE_TTL_SECONDS
from ..models import Coordinate
from .base import LookupFailed, LookupResult, PanoramaLookup, usable_from_result

LOGGER = logging.getLogger(__name__)

_CacheKey = Tuple[Any, ...]


class CachedLookup:
    """Wrap a lookup with a thread-safe TTL+LRU cache of snap results.

    Failures are never cached so a transient error can be retried.
    """

    def __init__(
        self,
        inner: PanoramaLookup,
        *,
        maxsize: int = LOOKUP_CACHE_SIZE,
        ttl: float = LOOKUP_CACHE_TTL_SECONDS,
    ) -> None:
        self._inner = inner
        self._cache: TTLCache[_CacheKey, LookupResult] = TTLCache(
            maxsize=max(1, maxsize), ttl=ttl
        )
        self._lock = RLock()
        self.hits = 0
        self.misses = 0

    def snap(self, coordinate: Coordinate, radius_m: int) -> LookupResult:
        key: _CacheKey = (coordinate.lat, coordinate.lon, int(radius_m))
        return self._cached(key, lambda: self._inner.snap(coordinate, radius_m))

    def locate(self, pano_id: str) -> LookupResult:
        """Resolve a panorama id; ``inner`` must also be a locator."""

        return self._cached(("pano", pano_id), lambda: self._inner.locate(pano_id))  # type: ignore[attr-defined]

    def _cached(self, key: _CacheKey, fetch: Callable[[], LookupResult]) -> LookupResult:
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self.hits += 1
                return cached
            self.misses += 1
        result = fetch()
        if not isinstance(result, LookupFailed):
            with self._lock:
                self._cache[key] = result
        return result

    def is_usable(self, coordinate: Coordinate, radius_m: int) -> bool:
        return usable_from_result(self.snap(coordinate, radius_m))

    def clear(self) -> None:
        """Empty the cache (primarily for testing)."""
        with self._lock:
            self._cache.clear()
            LOGGER.debug("Cleared lookup cache")


__all__ = ["CachedLookup"]
