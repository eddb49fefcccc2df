"""Street View metadata client implementing :class:`PanoramaLookup`.

The metadata endpoint is free to query and answers with a ``status`` field:
``OK`` (with ``location`` and ``pano_id``), ``ZERO_RESULTS`` when nothing is
imaged within the radius, or an error status such as ``REQUEST_DENIED``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Tuple

import requests

from ..config import (
    DEFAULT_SEARCH_RADIUS_M,
    LOOKUP_BACKOFF_MAX_SECONDS,
    LOOKUP_MAX_RETRIES,
    REQUEST_TIMEOUT,
    STREETVIEW_API_KEY,
    STREETVIEW_FIRST_PARTY_ONLY,
    STREETVIEW_METADATA_URL,
)
from ..errors import RangeError
from ..models import Coordinate
from .base import LookupFailed, LookupResult, NotFound, Snapped, usable_from_result
from .rate_limiter import RateLimiter
from .session import get_default_session

LOGGER = logging.getLogger(__name__)

_OVER_QUOTA_STATUSES = {"OVER_QUERY_LIMIT"}


class StreetViewMetadataLookup:
    """Snap coordinates to the nearest Street View panorama."""

    def __init__(
        self,
        api_key: str = STREETVIEW_API_KEY,
        *,
        first_party: bool = STREETVIEW_FIRST_PARTY_ONLY,
        session: requests.Session | None = None,
        limiter: RateLimiter | None = None,
        timeout: int = REQUEST_TIMEOUT,
        base_url: str = STREETVIEW_METADATA_URL,
        max_retries: int = LOOKUP_MAX_RETRIES,
    ) -> None:
        self._api_key = api_key
        self._first_party = first_party
        self._session = session or get_default_session()
        self._limiter = limiter or RateLimiter()
        self._timeout = timeout
        self._base_url = base_url
        self._max_retries = max(1, max_retries)

    def snap(
        self, coordinate: Coordinate, radius_m: int = DEFAULT_SEARCH_RADIUS_M
    ) -> LookupResult:
        payload = self._query(self.build_params(coordinate, radius_m))
        if isinstance(payload, LookupFailed):
            return payload
        return parse_metadata(payload)

    def is_usable(
        self, coordinate: Coordinate, radius_m: int = DEFAULT_SEARCH_RADIUS_M
    ) -> bool:
        return usable_from_result(self.snap(coordinate, radius_m))

    def locate(self, pano_id: str) -> LookupResult:
        """Return the capture position of ``pano_id``."""

        params: Dict[str, Any] = {"pano": pano_id}
        if self._api_key:
            params["key"] = self._api_key
        payload = self._query(params)
        if isinstance(payload, LookupFailed):
            return payload
        return parse_metadata(payload)

    def build_params(self, coordinate: Coordinate, radius_m: int) -> Dict[str, Any]:
        if radius_m < 1:
            raise RangeError(f"radius_m must be >= 1 (got {radius_m})")
        params: Dict[str, Any] = {
            "location": f"{coordinate.lat},{coordinate.lon}",
            "radius": int(radius_m),
        }
        if self._first_party:
            params["source"] = "outdoor"
        if self._api_key:
            params["key"] = self._api_key
        return params

    def _query(self, params: Dict[str, Any]) -> Dict[str, Any] | LookupFailed:
        """GET the metadata endpoint, returning the JSON body or a failure.

        Transport retries live in the session adapter. This loop only retries
        what arrives as a successful HTTP response: ``OVER_QUERY_LIMIT`` and
        bodies that are not JSON.
        """

        location = params.get("location") or params.get("pano")
        backoff = 1.0
        attempt = 0
        while True:
            attempt += 1
            can_retry = attempt < self._max_retries
            self._limiter.before_request()
            try:
                response = self._session.get(
                    self._base_url, params=params, timeout=self._timeout
                )
            except requests.RequestException as exc:
                self._limiter.after_response(None)
                LOGGER.error(
                    "Metadata network error location=%s: %s", location, exc
                )
                return LookupFailed("NETWORK_ERROR", exc.__class__.__name__)

            action, payload = classify_response(response, can_retry=can_retry)
            over_quota = (
                isinstance(payload, dict)
                and payload.get("status") in _OVER_QUOTA_STATUSES
            )
            self._limiter.after_response(response.status_code, over_quota=over_quota)
            if action == "retry" or (over_quota and can_retry):
                LOGGER.warning(
                    "Metadata lookup location=%s status=%s attempt=%s; retrying in %.1fs",
                    location,
                    payload.get("status") if isinstance(payload, dict) else payload.status,
                    attempt,
                    backoff,
                )
                time.sleep(backoff)
                backoff = min(backoff * 2, LOOKUP_BACKOFF_MAX_SECONDS)
                continue
            return payload


def classify_response(
    response: requests.Response, *, can_retry: bool
) -> Tuple[str, Dict[str, Any] | LookupFailed]:
    """Return ``("ok", payload)``, ``("retry", failure)`` or ``("fail", failure)``.

    HTTP errors are final here: by the time a 429 or 5xx reaches this point
    the session adapter has already spent its retries on it.
    """

    status = response.status_code
    if status >= 400:
        return "fail", LookupFailed(f"HTTP_{status}", _extract_error_text(response))
    try:
        data = response.json()
    except ValueError:
        failure = LookupFailed("INVALID_RESPONSE", _extract_error_text(response))
        return ("retry" if can_retry else "fail"), failure
    if not isinstance(data, dict):
        return "fail", LookupFailed("INVALID_RESPONSE", type(data).__name__)
    return "ok", data


def parse_metadata(data: Dict[str, Any]) -> LookupResult:
    """Translate a metadata JSON body into a typed lookup result."""

    status = str(data.get("status") or "UNKNOWN_ERROR")
    if status == "OK":
        location = data.get("location") or {}
        try:
            coordinate = Coordinate(float(location["lat"]), float(location["lng"]))
        except (KeyError, TypeError, ValueError):
            return LookupFailed("INVALID_RESPONSE", "OK response without location")
        pano_id = data.get("pano_id")
        return Snapped(coordinate, str(pano_id) if pano_id else None)
    if status == "ZERO_RESULTS":
        return NotFound()
    message = data.get("error_message")
    return LookupFailed(status, str(message) if message else None)


def _extract_error_text(resp: requests.Response) -> Optional[str]:
    """Best-effort plain-text extraction for error logging."""

    text = getattr(resp, "text", "")
    if not isinstance(text, str):
        return None
    trimmed = text.strip()
    if not trimmed:
        return None
    return (trimmed[:297] + "...") if len(trimmed) > 300 else trimmed


__all__ = ["StreetViewMetadataLookup", "classify_response", "parse_metadata"]
