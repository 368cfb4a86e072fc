"""Catalog pagination for a crawl.

Pages are fetched one after another by following the continuation token of
each response. Every asset of a page is processed to completion before the
next one starts, which keeps the whole crawl on a single stream of requests
metered by the session's quota gate.

A page that fails (listing request or anything else while processing it) is
retried from its first asset; assets already handled on an earlier attempt
are processed again. When a page can't be fetched after max_retries retries,
an ERROR line is recorded and the crawl ends, as there is no token to continue
with.
"""
from __future__ import annotations

import logging
from typing import Optional

from catalog import poly_api
from catalog.model import CatalogPage

from .asset_fetcher import AssetFetcher
from .session import CrawlSession
from .summary import page_error_line

logger = logging.getLogger(__name__)

# Sentinel returned by fetch_page when the page was given up on
PAGE_FAILED = object()


class PageCrawler:
    """Walks the catalog page by page and downloads every listed asset."""

    def __init__(self, session: CrawlSession, asset_fetcher: Optional[AssetFetcher] = None):
        self.session = session
        self.asset_fetcher = asset_fetcher or AssetFetcher(session)
        self.pages_processed = 0

    def _list_page(self, token: Optional[str]) -> CatalogPage:
        return poly_api.list_assets(
            self.session.http,
            self.session.api_key,
            page_token=token,
            api_base=self.session.api_base,
            page_size=self.session.page_size,
            curated=self.session.curated,
            timeout=self.session.timeout_s,
        )

    def fetch_page(self, token: Optional[str]):
        """Fetch one page and process its assets, retrying the whole page on failure.

        Args:
            token: Continuation token, or None for the first page

        Returns:
            The next page token (None when this was the last page), or PAGE_FAILED
        """
        attempts = self.session.max_retries + 1

        for attempt in range(1, attempts + 1):
            try:
                page = self.session.quota.gate(lambda: self._list_page(token))
                for asset in page.assets:
                    self.asset_fetcher.fetch(asset)
                self.pages_processed += 1
                return page.next_page_token
            except Exception as e:
                logger.error(
                    "Unable to load page %s (attempt %d/%d): %s",
                    token, attempt, attempts, e
                )

        self.session.summary.record(page_error_line(token))
        return PAGE_FAILED

    def crawl(self) -> int:
        """Process every page of the catalog, starting from the first.

        Returns:
            Number of pages fully processed
        """
        token: Optional[str] = None
        while True:
            next_token = self.fetch_page(token)
            if next_token is PAGE_FAILED or not next_token:
                break
            token = next_token
        return self.pages_processed


def crawl(session: CrawlSession) -> int:
    """Crawl the whole catalog using the given session."""
    return PageCrawler(session).crawl()
