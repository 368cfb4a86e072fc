"""Network utilities for HTTP requests and file downloads.

Provides the HTTP session used for a whole crawl, a JSON GET helper that turns
non-success responses into exceptions, and a streamed file download. Retrying
is left to the callers: failures are raised, never swallowed, so the asset and
page retry loops can clean up and try again.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import get_network_config

logger = logging.getLogger(__name__)


class CatalogRequestError(Exception):
    """Raised when the remote side answers with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str, url: str = ""):
        self.status_code = int(status_code)
        self.reason = reason or ""
        self.url = url
        super().__init__(f"{self.reason} ({self.status_code})")


def build_session(net: Optional[Dict[str, Any]] = None) -> requests.Session:
    """Build a configured requests session with default headers.

    Args:
        net: Network configuration (defaults to get_network_config())

    Returns:
        Configured Session instance
    """
    if net is None:
        net = get_network_config()

    session = requests.Session()

    # Connection and status errors are surfaced to the crawler's own retry loops;
    # urllib3 only gets an optional small budget for read timeouts.
    retry = Retry(
        total=int(net.get("transport_retries", 0) or 0),
        connect=0,
        read=int(net.get("transport_retries", 0) or 0),
        status=0,
        backoff_factor=0.8,
        allowed_methods=frozenset(["GET"]),
        raise_on_status=False,
    )

    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({
        "User-Agent": "PolyDownloader/1.0 (+https://poly.googleapis.com)",
        "Accept": "*/*",
    })
    headers = net.get("headers") or {}
    session.headers.update({str(k): str(v) for k, v in headers.items() if v is not None})
    session.verify = bool(net.get("verify_ssl", True))

    return session


def _raise_for_status(resp: requests.Response, url: str) -> None:
    """Raise CatalogRequestError for any non-2xx response."""
    if not resp.ok:
        raise CatalogRequestError(resp.status_code, resp.reason, url)


def get_json(
    session: requests.Session,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: float = 30.0,
) -> Dict[str, Any]:
    """HTTP GET returning the decoded JSON body.

    Args:
        session: HTTP session to use
        url: URL to request
        params: Query parameters
        timeout: Request timeout in seconds

    Returns:
        Decoded JSON object

    Raises:
        CatalogRequestError: On a non-2xx status
        requests.exceptions.RequestException: On transport errors
        ValueError: If the body is not valid JSON
    """
    resp = session.get(url, params=params, timeout=timeout)
    _raise_for_status(resp, url)
    data = resp.json()
    return data or {}


def download_file(
    session: requests.Session,
    url: str,
    filepath: str,
    chunk_size: int = 8192,
    timeout: float = 30.0,
) -> str:
    """Stream a URL to a file on disk, creating parent directories as needed.

    Args:
        session: HTTP session to use
        url: URL to download
        filepath: Target file path
        chunk_size: Size of streamed chunks in bytes
        timeout: Request timeout in seconds

    Returns:
        The path written

    Raises:
        CatalogRequestError: On a non-2xx status
        requests.exceptions.RequestException: On transport errors
        OSError: On filesystem errors
    """
    parent = os.path.dirname(filepath)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with session.get(url, stream=True, timeout=timeout) as response:
        _raise_for_status(response, url)
        with open(filepath, "wb") as f:
            for chunk in response.iter_content(chunk_size=chunk_size):
                if not chunk:
                    continue
                f.write(chunk)

    logger.debug("Downloaded %s -> %s", url, filepath)
    return filepath
