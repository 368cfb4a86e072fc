"""Manifest of what a crawl obtained.

Collects one line per terminal outcome (an asset downloaded, an asset or page
given up on) and writes them to summary.txt once the crawl is over. Lines are
kept in completion order.
"""
from __future__ import annotations

import logging
import os
from typing import List

logger = logging.getLogger(__name__)

SUMMARY_FILENAME = "summary.txt"

# A summary to put at the start of the summary file.
SUMMARY_HEADING = """SUMMARY

This folder contains a collection of 3D models from Poly. \
Poly was a website by Google that provided 3D models to game developers. \
All of these models where provided by the Poly team and are licensed under the Creative Commons CC-BY license \
("You're free to use this as long as you credit the author" - Google).
The CC-BY license is available at: https://creativecommons.org/licenses/by/3.0/

Below is a list of what was downloaded in the format: path. name - description by author

"""


def downloaded_line(path: str, display_name: str, description: str | None, author_name: str) -> str:
    """Format the manifest line for a successfully downloaded asset."""
    return f"DOWNLOADED\t{path}. {display_name} - {description or ''} by {author_name}"


def asset_error_line(asset_name: str) -> str:
    """Format the manifest line for an asset that could not be downloaded."""
    return f"ERROR\tUnable to download asset: {asset_name}"


def page_error_line(page_token: str | None) -> str:
    """Format the manifest line for a catalog page that could not be fetched."""
    return f"ERROR\tUnable to fetch the next page: {page_token}"


class SummaryRecorder:
    """Accumulates manifest lines and writes the summary file."""

    def __init__(self, heading: str = SUMMARY_HEADING):
        self.heading = heading
        self._entries: List[str] = []

    def record(self, line: str) -> None:
        """Record an entry for the summary file."""
        self._entries.append(line)

    @property
    def entries(self) -> List[str]:
        """Recorded lines, in completion order (a copy)."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def flush(self, folder_path: str, filename: str = SUMMARY_FILENAME) -> str:
        """Write the heading and every recorded line to the summary file.

        Args:
            folder_path: Destination root of the crawl
            filename: Name of the summary file

        Returns:
            Path of the written file
        """
        os.makedirs(folder_path, exist_ok=True)
        filepath = os.path.join(folder_path, filename)
        with open(filepath, "w", encoding="utf-8", newline="\n") as f:
            f.write(self.heading)
            for entry in self._entries:
                f.write(entry + "\n")
        logger.info("Wrote %d summary entr%s to %s",
                    len(self._entries), "y" if len(self._entries) == 1 else "ies", filepath)
        return filepath
