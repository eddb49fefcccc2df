"""Central error types used across the application."""

from __future__ import annotations

from typing import Optional


class RangeError(ValueError):
    """Raised when a caller passes a parameter outside its valid domain."""


class RouteFormatError(RuntimeError):
    """Raised when a route file cannot be recognised or parsed."""


class PanoramaLookupError(RuntimeError):
    """Base error for panorama lookup failures."""


class ZeroResultsError(PanoramaLookupError):
    """Raised when no panorama exists within the search radius."""


class MetadataQueryError(PanoramaLookupError):
    """Raised when the metadata service reports an unexpected status."""

    def __init__(self, status: str, detail: Optional[str] = None) -> None:
        self.status = status
        self.detail = detail
        message = f"{status}, {detail}" if detail else status
        super().__init__(message)


__all__ = [
    "RangeError",
    "RouteFormatError",
    "PanoramaLookupError",
    "ZeroResultsError",
    "MetadataQueryError",
]
