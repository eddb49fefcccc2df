"""Load and save routes as SVJ, GPX and journey JSON files.

SVJ is the tool's native format: latitude and longitude on alternating
lines. GPX input is read from track points (``trkpt``), falling back to
route points (``rtept``) when a file holds no track.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as ET

from .errors import RangeError, RouteFormatError
from .models import LatLon
from .route import Route

LOGGER = logging.getLogger(__name__)

GPX_NS = "http://www.topografix.com/GPX/1/1"


def read_svj(path: str | Path) -> Route:
    """Read a route from an SVJ file."""

    source = Path(path)
    lines = [line.strip() for line in source.read_text(encoding="utf-8").splitlines()]
    values = [line for line in lines if line]
    if len(values) % 2:
        raise RouteFormatError(
            f"{source} has an odd number of values ({len(values)}); expected lat/lon pairs"
        )
    try:
        pairs = [
            (float(values[i]), float(values[i + 1])) for i in range(0, len(values), 2)
        ]
        route = Route.from_coordinates(pairs)
    except (ValueError, RangeError) as exc:
        raise RouteFormatError(f"{source} contains an invalid coordinate: {exc}") from exc
    LOGGER.debug("Read %d points from %s", len(route), source)
    return route


def write_svj(route: Route, path: str | Path) -> Path:
    """Write ``route`` as alternating latitude / longitude lines."""

    target = Path(path)
    lines: List[str] = []
    for pt in route:
        lines.append(repr(pt.lat))
        lines.append(repr(pt.lon))
    target.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
    LOGGER.debug("Wrote %d points to %s", len(route), target)
    return target


def read_gpx(path: str | Path) -> Route:
    """Read track points (or route points) from a GPX file."""

    source = Path(path)
    try:
        tree = ET.parse(source)
    except (ParseError, DefusedXmlException) as exc:
        raise RouteFormatError(f"{source} is not valid GPX: {exc}") from exc
    root = tree.getroot()
    pairs = _collect_points(root, "trkpt") or _collect_points(root, "rtept")
    try:
        route = Route.from_coordinates(pairs)
    except RangeError as exc:
        raise RouteFormatError(f"{source} contains an invalid coordinate: {exc}") from exc
    LOGGER.debug("Read %d points from %s", len(route), source)
    return route


def write_gpx(route: Route, path: str | Path, *, name: str = "Streetview Journey") -> Path:
    """Write ``route`` as a single-segment GPX 1.1 track."""

    target = Path(path)
    gpx_lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<gpx version="1.1" creator="streetview_journey" xmlns="{GPX_NS}">',
        "  <trk>",
        f"    <name>{_escape_xml(name)}</name>",
        "    <trkseg>",
    ]
    for pt in route:
        gpx_lines.append(f'      <trkpt lat="{pt.lat!r}" lon="{pt.lon!r}"/>')
    gpx_lines.extend(["    </trkseg>", "  </trk>", "</gpx>"])
    target.write_text("\n".join(gpx_lines) + "\n", encoding="utf-8")
    return target


def read_route(path: str | Path) -> Route:
    """Read a route, choosing the parser from the file extension."""

    suffix = Path(path).suffix.lower()
    if suffix == ".gpx":
        return read_gpx(path)
    if suffix == ".svj":
        return read_svj(path)
    raise RouteFormatError(
        f"Unrecognised file type '{suffix}'. Use a .gpx or .svj file instead."
    )


def write_journey_json(route: Route, path: str | Path) -> Path:
    """Write ``[{lat, lon, bearing}, ...]`` for the image download pipeline."""

    target = Path(path)
    payload = [
        {"lat": coordinate.lat, "lon": coordinate.lon, "bearing": bearing.value}
        for coordinate, bearing in route.journey()
    ]
    target.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return target


def write_pano_ids(ids: Iterable[str], path: str | Path) -> Path:
    """Write one panorama id per line."""

    target = Path(path)
    lines = list(ids)
    target.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
    return target


def read_pano_ids(path: str | Path) -> List[str]:
    """Read panorama ids written by :func:`write_pano_ids`, skipping blank lines."""

    source = Path(path)
    return [
        line.strip()
        for line in source.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]


def _collect_points(root: Element, tag: str) -> List[LatLon]:
    pairs: List[LatLon] = []
    for element in root.iter():
        if not isinstance(element.tag, str) or _local_name(element.tag) != tag:
            continue
        try:
            pairs.append((float(element.attrib["lat"]), float(element.attrib["lon"])))
        except (KeyError, ValueError) as exc:
            raise RouteFormatError(f"<{tag}> with missing or bad lat/lon: {exc}") from exc
    return pairs


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def _escape_xml(text: str) -> str:
    """Escape special XML characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


__all__ = [
    "read_svj",
    "write_svj",
    "read_gpx",
    "write_gpx",
    "read_route",
    "write_journey_json",
    "write_pano_ids",
    "read_pano_ids",
]
