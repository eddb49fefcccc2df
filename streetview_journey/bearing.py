"""Compass bearing value type with wrap-around arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .errors import RangeError


def normalize(value: float) -> float:
    """Wrap ``value`` degrees into ``[0, 360)``."""

    wrapped = ((value % 360.0) + 360.0) % 360.0
    # Tiny negative inputs round up to exactly 360.0 in float arithmetic.
    if wrapped >= 360.0:
        return 0.0
    return wrapped


@dataclass(slots=True, frozen=True)
class Bearing:
    """Direction in degrees clockwise from north, always stored in ``[0, 360)``."""

    value: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", normalize(float(self.value)))

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __add__(self, other: Bearing) -> Bearing:
        return Bearing(self.value + other.value)

    def __sub__(self, other: Bearing) -> Bearing:
        return self.difference(other)

    def difference(self, other: Bearing) -> Bearing:
        """Return the shortest angular distance to ``other`` (0 to 180)."""

        return Bearing(abs((other.value - self.value + 540.0) % 360.0 - 180.0))

    def offset_to(self, desired: Bearing) -> Bearing:
        """Return the clockwise rotation needed to turn this bearing into ``desired``."""

        return Bearing(desired.value + 360.0 - self.value)


def average(bearings: Iterable[Bearing]) -> Bearing:
    """Average bearings by summing raw degrees, wrapping, then dividing.

    This is deliberately not a circular mean: ``average([270, 180, 0])`` is 30
    where the circular mean is 270.
    Bearing smoothing is tuned against this definition.
    """

    values = [b.value for b in bearings]
    if not values:
        raise RangeError("Cannot average an empty sequence of bearings")
    return Bearing((sum(values) % 360.0) / len(values))


__all__ = ["Bearing", "average", "normalize"]
