"""Crawler package for PolyDownloader.

This package contains:
- session: CrawlSession holding settings, HTTP session, quota gate and summary
- page_crawler: Catalog pagination and per-page retry
- asset_fetcher: Per-asset download with cleanup-then-retry
- summary: Manifest lines and summary.txt writer
- downloader: CLI entry point
"""

__all__ = [
    "session",
    "page_crawler",
    "asset_fetcher",
    "summary",
    "downloader",
]
