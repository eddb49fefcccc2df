"""Global pytest fixtures & helpers.

Adds project root to path and provides fake panorama lookups so refinement
tests never touch the network.
"""
from __future__ import annotations

import os
import sys
import threading
from typing import Callable, List, Optional

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from streetview_journey.lookup.base import LookupResult, NotFound, Snapped, usable_from_result
from streetview_journey.models import Coordinate


# --- Fake lookups ----------------------------------------------------
class IdentityLookup:
    """Snaps every coordinate onto itself, so midpoints are exact."""

    def __init__(self) -> None:
        self.calls: List[Coordinate] = []
        self._lock = threading.Lock()

    def snap(self, coordinate: Coordinate, radius_m: int) -> LookupResult:
        with self._lock:
            self.calls.append(coordinate)
        return Snapped(coordinate)

    def is_usable(self, coordinate: Coordinate, radius_m: int) -> bool:
        return usable_from_result(self.snap(coordinate, radius_m))


class ScriptedLookup(IdentityLookup):
    """Delegates each snap to a callable; ``None`` means "snap onto itself"."""

    def __init__(self, rule: Callable[[Coordinate], Optional[LookupResult]]) -> None:
        super().__init__()
        self._rule = rule

    def snap(self, coordinate: Coordinate, radius_m: int) -> LookupResult:
        with self._lock:
            self.calls.append(coordinate)
        result = self._rule(coordinate)
        return Snapped(coordinate) if result is None else result


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def identity_lookup():
    return IdentityLookup()


@pytest.fixture
def scripted_lookup():
    return ScriptedLookup


@pytest.fixture
def not_found():
    return NotFound()
