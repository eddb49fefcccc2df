"""Panorama lookup interface and its typed results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Union, runtime_checkable

from ..errors import MetadataQueryError
from ..models import Coordinate


@dataclass(slots=True, frozen=True)
class Snapped:
    """The nearest panorama position (and its id, when known)."""

    coordinate: Coordinate
    pano_id: Optional[str] = None


@dataclass(slots=True, frozen=True)
class NotFound:
    """No panorama exists within the search radius."""


@dataclass(slots=True, frozen=True)
class LookupFailed:
    """The lookup service answered with an unexpected status."""

    status: str
    message: Optional[str] = None


LookupResult = Union[Snapped, NotFound, LookupFailed]

# User uploaded (third party) panoramas carry 64 character ids.
THIRD_PARTY_ID_LENGTH = 64


def is_third_party(pano_id: str) -> bool:
    return len(pano_id) == THIRD_PARTY_ID_LENGTH


@runtime_checkable
class PanoramaLookup(Protocol):
    """Maps arbitrary coordinates onto real, imaged locations."""

    def snap(self, coordinate: Coordinate, radius_m: int) -> LookupResult:
        """Return the nearest panorama to ``coordinate`` within ``radius_m``."""
        ...

    def is_usable(self, coordinate: Coordinate, radius_m: int) -> bool:
        """Return True when a panorama exists within ``radius_m``."""
        ...


@runtime_checkable
class PanoramaLocator(Protocol):
    """Resolves a panorama id back to the position it was captured at."""

    def locate(self, pano_id: str) -> LookupResult:
        ...


def resolve_snap(result: LookupResult) -> Optional[Coordinate]:
    """Return the snapped coordinate, ``None`` when not found.

    Raises:
        MetadataQueryError: For any failure other than "not found".
    """

    if isinstance(result, Snapped):
        return result.coordinate
    if isinstance(result, NotFound):
        return None
    if isinstance(result, LookupFailed):
        raise MetadataQueryError(result.status, result.message)
    raise TypeError(f"Unexpected lookup result {result!r}")


def usable_from_result(result: LookupResult) -> bool:
    """Translate a lookup result into the ``is_usable`` contract."""

    return resolve_snap(result) is not None


__all__ = [
    "Snapped",
    "NotFound",
    "LookupFailed",
    "LookupResult",
    "PanoramaLookup",
    "PanoramaLocator",
    "THIRD_PARTY_ID_LENGTH",
    "is_third_party",
    "resolve_snap",
    "usable_from_result",
]
