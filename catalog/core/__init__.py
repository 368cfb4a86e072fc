"""Core utilities for the PolyDownloader catalog client.

This package contains the small building blocks shared by the crawler:
- config: Configuration loading and section defaults
- network: HTTP session, JSON requests and streamed file downloads
- naming: Filename sanitization and asset folder naming
- quota: Request quota gate with cooldown
"""

__all__ = [
    "config",
    "network",
    "naming",
    "quota",
]
