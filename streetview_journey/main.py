"""Command line entry point: turn a GPX/SVJ route into a journey file.

Usage examples:

    # Interpolate a drive to 5m spacing and write route.svj next to the input
    python -m streetview_journey route.gpx

    # Hike preset, exactly 600 frames keeping the original pace
    python -m streetview_journey route.gpx --type hike --trim-to 600 --maintain-speed

    # Also write the (coordinate, bearing) list for the image downloader
    python -m streetview_journey route.svj --journey-json journey.json

    # Skip user uploads and record the panorama id behind every frame
    python -m streetview_journey route.gpx --drop-third-party --pano-ids route.panoids

``STREETVIEW_API_KEY`` must be set (or stored in ``.env``) whenever the route
needs interpolating or panorama ids are read or written.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .config import (
    DEFAULT_SEARCH_RADIUS_M,
    MAXIMUM_SMOOTH,
    MAX_WORKERS,
    INTERPOLATION_MAX_DEPTH,
    STREETVIEW_API_KEY,
    STREETVIEW_FIRST_PARTY_ONLY,
    RefinementConfig,
)
from .errors import PanoramaLookupError, RangeError, RouteFormatError
from .lookup import CachedLookup, StreetViewMetadataLookup
from .route_io import (
    read_pano_ids,
    read_route,
    write_journey_json,
    write_pano_ids,
    write_svj,
)
from .services import JourneyService, JourneyServiceConfig, JourneyType

LOGGER = logging.getLogger(__name__)

# Input files with this suffix hold one panorama id per line.
PANO_ID_SUFFIX = ".panoids"


def _setup_logging(level: str) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=getattr(logging, level),
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )
    else:
        logging.getLogger().setLevel(getattr(logging, level))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streetview_journey",
        description="Densify a GPS route into an evenly spaced Street View journey",
    )
    parser.add_argument(
        "input", help="Route file (.gpx, .svj, or .panoids with one panorama id per line)"
    )
    parser.add_argument(
        "--type",
        choices=[t.value for t in JourneyType],
        default=JourneyType.DRIVE.value,
        help="Spacing preset: drive (5m) or hike (1m)",
    )
    parser.add_argument(
        "--metres-per-point",
        type=float,
        help="Override the preset target spacing in metres",
    )
    parser.add_argument(
        "--trim-to",
        type=int,
        help="Resample the journey to exactly this many points",
    )
    parser.add_argument(
        "--maintain-speed",
        action="store_true",
        help="Resample by distance travelled rather than by index",
    )
    parser.add_argument(
        "--keep-dupes",
        action="store_true",
        help="Keep repeated points after resampling",
    )
    parser.add_argument(
        "--search-radius",
        type=int,
        default=DEFAULT_SEARCH_RADIUS_M,
        help="Panorama search radius in metres (default: %(default)s)",
    )
    parser.add_argument(
        "--first-party",
        action="store_true",
        default=STREETVIEW_FIRST_PARTY_ONLY,
        help="Only snap to first party (outdoor) panoramas",
    )
    parser.add_argument(
        "--drop-third-party",
        action="store_true",
        help="Remove points whose nearest panorama is a user upload",
    )
    parser.add_argument(
        "--max-smooth",
        type=int,
        default=MAXIMUM_SMOOTH,
        help="Largest bearing smoothing window (default: %(default)s)",
    )
    parser.add_argument(
        "--no-smooth",
        action="store_true",
        help="Skip bearing smoothing",
    )
    parser.add_argument(
        "--output",
        help="Output .svj path (default: input path with .svj extension)",
    )
    parser.add_argument(
        "--journey-json",
        help="Also write [{lat, lon, bearing}] for the image pipeline",
    )
    parser.add_argument(
        "--pano-ids",
        help="Also write the panorama id of each journey point, one per line",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: %(default)s)",
    )
    return parser


def _resolve_output_path(input_path: Path, output: Optional[str]) -> Path:
    if output:
        return Path(output)
    if input_path.suffix.lower() == ".svj":
        return input_path.with_name(f"{input_path.stem}_journey.svj")
    return input_path.with_suffix(".svj")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the journey CLI. Returns a process exit code."""

    args = _build_parser().parse_args(argv)
    _setup_logging(args.log_level)

    refinement = RefinementConfig(
        search_radius_m=args.search_radius,
        maximum_smooth=args.max_smooth,
        max_workers=MAX_WORKERS,
        max_depth=INTERPOLATION_MAX_DEPTH,
    )
    lookup = None
    if STREETVIEW_API_KEY:
        lookup = CachedLookup(StreetViewMetadataLookup(first_party=args.first_party))
    else:
        LOGGER.warning("STREETVIEW_API_KEY is not set; panorama lookups are unavailable")
    service = JourneyService(JourneyServiceConfig(lookup=lookup, refinement=refinement))

    input_path = Path(args.input)
    try:
        if input_path.suffix.lower() == PANO_ID_SUFFIX:
            route = service.from_pano_ids(read_pano_ids(input_path))
        else:
            route = read_route(input_path)
    except (RouteFormatError, FileNotFoundError) as exc:
        LOGGER.error("Failed to load route '%s': %s", input_path, exc)
        return 1
    except (PanoramaLookupError, RuntimeError) as exc:
        LOGGER.error("Failed to resolve panorama ids in '%s': %s", input_path, exc)
        return 2
    LOGGER.info("Loaded %d points from %s", len(route), input_path)

    try:
        journey = service.build(
            route,
            JourneyType(args.type),
            metres_per_point=args.metres_per_point,
            trim_to=args.trim_to,
            maintain_speed=args.maintain_speed,
            keep_duplicates=args.keep_dupes,
            smooth=not args.no_smooth,
            drop_third_party=args.drop_third_party,
        )
        ids = service.pano_ids(journey) if args.pano_ids else None
    except PanoramaLookupError as exc:
        LOGGER.error("Panorama lookup failed: %s", exc)
        return 2
    except (RangeError, RuntimeError) as exc:
        LOGGER.error("Could not build journey: %s", exc)
        return 2

    output_path = write_svj(journey, _resolve_output_path(input_path, args.output))
    LOGGER.info("Journey with %d points saved to %s", len(journey), output_path)
    if args.journey_json:
        json_path = write_journey_json(journey, args.journey_json)
        LOGGER.info("Journey bearings saved to %s", json_path)
    if ids is not None:
        ids_path = write_pano_ids(ids, args.pano_ids)
        LOGGER.info("%d panorama ids saved to %s", len(ids), ids_path)
    return 0
