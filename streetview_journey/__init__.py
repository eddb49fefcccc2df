"""Streetview Journey: densify GPS routes into evenly spaced camera journeys."""

from .bearing import Bearing
from .errors import (
    MetadataQueryError,
    PanoramaLookupError,
    RangeError,
    RouteFormatError,
    ZeroResultsError,
)
from .main import main
from .models import Coordinate, RoutePoint
from .route import Route

__all__ = [
    "main",
    "Bearing",
    "Coordinate",
    "RoutePoint",
    "Route",
    "MetadataQueryError",
    "PanoramaLookupError",
    "RangeError",
    "RouteFormatError",
    "ZeroResultsError",
]
