"""Tests for the cached lookup wrapper."""

from __future__ import annotations

from streetview_journey.lookup import CachedLookup, LookupFailed, NotFound
from streetview_journey.models import Coordinate


def test_repeated_snaps_are_served_from_cache(identity_lookup) -> None:
    cached = CachedLookup(identity_lookup)
    point = Coordinate(51.0, -1.0)
    first = cached.snap(point, 50)
    second = cached.snap(point, 50)
    assert first == second
    assert len(identity_lookup.calls) == 1
    assert (cached.hits, cached.misses) == (1, 1)


def test_cache_key_includes_radius(identity_lookup) -> None:
    cached = CachedLookup(identity_lookup)
    point = Coordinate(51.0, -1.0)
    cached.snap(point, 50)
    cached.snap(point, 100)
    assert len(identity_lookup.calls) == 2


def test_not_found_is_cached_but_failures_are_not(scripted_lookup) -> None:
    missing = Coordinate(1.0, 1.0)
    lookup = scripted_lookup(
        lambda c: NotFound() if c == missing else LookupFailed("UNKNOWN_ERROR")
    )
    cached = CachedLookup(lookup)
    assert cached.is_usable(missing, 50) is False
    assert cached.is_usable(missing, 50) is False
    assert len(lookup.calls) == 1

    broken = Coordinate(2.0, 2.0)
    cached.snap(broken, 50)
    cached.snap(broken, 50)
    assert len(lookup.calls) == 3


def test_clear_empties_cache(identity_lookup) -> None:
    cached = CachedLookup(identity_lookup)
    point = Coordinate(0.0, 0.0)
    cached.snap(point, 50)
    cached.clear()
    cached.snap(point, 50)
    assert len(identity_lookup.calls) == 2


class _CountingLocator:
    def __init__(self) -> None:
        self.calls = 0

    def locate(self, pano_id: str):
        self.calls += 1
        if pano_id == "flaky":
            return LookupFailed("UNKNOWN_ERROR")
        return NotFound()


def test_locate_results_are_cached_separately_from_snaps() -> None:
    locator = _CountingLocator()
    cached = CachedLookup(locator)  # type: ignore[arg-type]
    assert cached.locate("gone") == NotFound()
    assert cached.locate("gone") == NotFound()
    assert locator.calls == 1
    cached.locate("flaky")
    cached.locate("flaky")
    assert locator.calls == 3
