"""Central configuration for the Streetview Journey tool.

Values are module constants imported by the rest of the package. Adjust as
needed for your environment. Secrets are read from environment variables
(optionally via a local `.env`).

The refinement engine never reads these constants during a call. Entry points
take a :class:`RefinementConfig` whose defaults are derived from them.
"""

from __future__ import annotations

from dataclasses import dataclass
import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Street View metadata service
# ---------------------------------------------------------------------------
STREETVIEW_METADATA_URL = "https://maps.googleapis.com/maps/api/streetview/metadata"

# API key pulled from the environment. Do not hardcode secrets.
STREETVIEW_API_KEY = os.getenv("STREETVIEW_API_KEY", "")

# Only accept panoramas published by the imagery owner (source=outdoor).
STREETVIEW_FIRST_PARTY_ONLY = _env_bool("STREETVIEW_FIRST_PARTY_ONLY", False)

# Radius (metres) searched around each coordinate when snapping to a panorama.
DEFAULT_SEARCH_RADIUS_M = _env_int("DEFAULT_SEARCH_RADIUS_M", 50)

# Random panorama discovery: wide search radius around each random point and
# the number of random points tried before giving up.
RANDOM_SEARCH_RADIUS_M = _env_int("RANDOM_SEARCH_RADIUS_M", 500_000)
RANDOM_MAX_ATTEMPTS = _env_int("RANDOM_MAX_ATTEMPTS", 50)


# ---------------------------------------------------------------------------
# Route refinement
# ---------------------------------------------------------------------------
# Largest number of consecutive bearings that may be averaged together.
MAXIMUM_SMOOTH = _env_int("MAXIMUM_SMOOTH", 10)

# Recursion cap for midpoint subdivision. Guards against a lookup that keeps
# returning new points between the same two endpoints.
INTERPOLATION_MAX_DEPTH = _env_int("INTERPOLATION_MAX_DEPTH", 32)

# Target spacing presets used by the journey service.
DRIVE_METRES_PER_POINT = _env_float("DRIVE_METRES_PER_POINT", 5.0)
HIKE_METRES_PER_POINT = _env_float("HIKE_METRES_PER_POINT", 1.0)


# ---------------------------------------------------------------------------
# Performance tuning
# ---------------------------------------------------------------------------
# Threads used for snapping and per-segment interpolation.
MAX_WORKERS = _env_int("MAX_WORKERS", 8)

# HTTP session pool sizes for concurrent requests.
HTTP_POOL_CONNECTIONS = 20
HTTP_POOL_MAXSIZE = 20

# Request timeout in seconds.
REQUEST_TIMEOUT = 15

# Rate limiter settings.
# RATE_LIMIT_MAX_CONCURRENT caps total in-flight metadata requests.
RATE_LIMIT_MAX_CONCURRENT = _env_int("RATE_LIMIT_MAX_CONCURRENT", 8)
# RATE_LIMIT_JITTER_RANGE adds random delay (seconds) to smooth bursts.
RATE_LIMIT_JITTER_RANGE = (0.0, 0.05)
# RATE_LIMIT_THROTTLE_SECONDS is the pause applied on 429 / OVER_QUERY_LIMIT.
RATE_LIMIT_THROTTLE_SECONDS = 10

# Retry/backoff behaviour for metadata lookups.
# LOOKUP_MAX_RETRIES bounds both the transport retries (connection errors,
# 429 and 5xx, honouring Retry-After) and the application retries
# (OVER_QUERY_LIMIT or unparseable bodies).
LOOKUP_MAX_RETRIES = 3
# LOOKUP_BACKOFF_MAX_SECONDS caps the exponential backoff per attempt.
LOOKUP_BACKOFF_MAX_SECONDS = 4.0

# In-memory snap cache. Interpolation often re-queries the same coordinates.
LOOKUP_CACHE_SIZE = _env_int("LOOKUP_CACHE_SIZE", 4096)
LOOKUP_CACHE_TTL_SECONDS = _env_int("LOOKUP_CACHE_TTL_SECONDS", 3600)


@dataclass(slots=True, frozen=True)
class RefinementConfig:
    """Explicit settings threaded into refinement entry points."""

    search_radius_m: int = DEFAULT_SEARCH_RADIUS_M
    maximum_smooth: int = MAXIMUM_SMOOTH
    max_workers: int = MAX_WORKERS
    max_depth: int = INTERPOLATION_MAX_DEPTH
