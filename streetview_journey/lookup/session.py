"""HTTP session factory for Street View metadata calls.

Transport level failures (connection errors, HTTP 429 and 5xx) are retried
by the mounted adapter, which honours ``Retry-After``. When the retries run
out the last response is returned rather than raised, so the metadata client
can turn it into a typed lookup failure.
"""

from __future__ import annotations

import requests
from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import (
    HTTP_POOL_CONNECTIONS,
    HTTP_POOL_MAXSIZE,
    LOOKUP_BACKOFF_MAX_SECONDS,
    LOOKUP_MAX_RETRIES,
)

__all__ = [
    "RETRY_STATUSES",
    "build_retry",
    "create_default_session",
    "get_default_session",
]

RETRY_STATUSES = (429, 500, 502, 503, 504)


def build_retry(max_retries: int = LOOKUP_MAX_RETRIES) -> Retry:
    return Retry(
        total=max_retries,
        backoff_factor=0.5,
        backoff_max=LOOKUP_BACKOFF_MAX_SECONDS,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=frozenset({"GET"}),
        respect_retry_after_header=True,
        raise_on_status=False,
    )


def create_default_session(max_retries: int = LOOKUP_MAX_RETRIES) -> Session:
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=HTTP_POOL_CONNECTIONS,
        pool_maxsize=HTTP_POOL_MAXSIZE,
        max_retries=build_retry(max_retries),
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update({"Accept": "application/json"})
    return session


_DEFAULT_SESSION: Session | None = None


def get_default_session() -> Session:
    """Return the shared default session, creating it on first use."""

    global _DEFAULT_SESSION
    if _DEFAULT_SESSION is None:
        _DEFAULT_SESSION = create_default_session()
    return _DEFAULT_SESSION
