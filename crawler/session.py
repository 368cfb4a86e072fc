"""Crawl session: the single owner of a run's mutable state.

A CrawlSession bundles the settings of one crawl with the objects whose state
lives for the whole run: the HTTP session, the shared request quota gate and
the summary recorder. Fetchers and crawlers receive the session explicitly
instead of reaching for module-level globals.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import requests

from catalog.core.config import (
    DEFAULT_API_BASE,
    DEFAULT_DESTINATION,
    get_crawl_config,
    get_excluded_format,
    get_network_config,
    get_preferred_formats,
)
from catalog.core.network import build_session
from catalog.core.quota import QuotaGate
from catalog.formats import EXCLUDED_FORMAT, PREFERRED_FORMATS

from .summary import SummaryRecorder


@dataclass
class CrawlSession:
    """Settings and shared state for one crawl."""

    api_key: str
    destination: str = DEFAULT_DESTINATION
    api_base: str = DEFAULT_API_BASE
    page_size: int = 100
    curated: bool = True
    max_retries: int = 3
    timeout_s: float = 30.0
    chunk_size: int = 8192
    preferred_formats: Sequence[str] = PREFERRED_FORMATS
    excluded_format: str = EXCLUDED_FORMAT
    quota: QuotaGate = field(default_factory=QuotaGate)
    summary: SummaryRecorder = field(default_factory=SummaryRecorder)
    http: Optional[requests.Session] = None

    def __post_init__(self) -> None:
        if self.http is None:
            self.http = build_session()

    @classmethod
    def from_config(cls, api_key: str, destination: Optional[str] = None) -> "CrawlSession":
        """Create a session from the loaded configuration.

        Args:
            api_key: Poly API key
            destination: Destination root overriding crawl.destination
        """
        crawl = get_crawl_config()
        net = get_network_config()
        return cls(
            api_key=api_key,
            destination=destination or str(crawl["destination"]),
            api_base=str(crawl["api_base"]),
            page_size=int(crawl["page_size"]),
            curated=bool(crawl["curated"]),
            max_retries=max(0, int(crawl["max_retries"])),
            timeout_s=float(net["timeout_s"]),
            chunk_size=int(net["chunk_size"]),
            preferred_formats=tuple(get_preferred_formats() or PREFERRED_FORMATS),
            excluded_format=get_excluded_format() or EXCLUDED_FORMAT,
            quota=QuotaGate.from_config(),
            http=build_session(net),
        )

    def close(self) -> None:
        """Release the HTTP connection pool."""
        if self.http is not None:
            self.http.close()
