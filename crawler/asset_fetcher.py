"""Download of a single catalog asset.

For each asset the best available format is chosen and its primary file is
downloaded to a per-asset folder, followed by any resource files (textures,
material libraries, ...). A failed attempt removes the folder completely before
the next attempt so that files from different attempts are never mixed.

The flow for one asset:
1. Pick the format and compute the destination folder
2. Inside one quota-gated unit: skip (no supported format / Tilt Brush) or
   create the folder, download the root file, then the resources as a second
   gated unit, and record the DOWNLOADED line
3. On failure: delete the folder and retry immediately, up to max_retries times
4. When every attempt failed: record an ERROR line
"""
from __future__ import annotations

import enum
import logging
import os
import shutil
from typing import Optional

from catalog.core.naming import asset_folder_name
from catalog.core.network import download_file
from catalog.formats import is_excluded_format, pick_format
from catalog.model import Asset, FileRef, FormatEntry

from .session import CrawlSession
from .summary import asset_error_line, downloaded_line

logger = logging.getLogger(__name__)


class AssetOutcome(enum.Enum):
    """Terminal result of processing one asset."""

    DOWNLOADED = "downloaded"
    NO_FORMAT = "no_format"
    EXCLUDED = "excluded"
    FAILED = "failed"


def _path_in_folder(folder: str, relative_path: str) -> str:
    """Join a relative file path onto a folder, refusing paths that escape it."""
    target = os.path.normpath(os.path.join(folder, relative_path))
    root = os.path.normpath(folder)
    if os.path.commonpath([root, target]) != root or target == root:
        raise ValueError(f"Refusing to write outside asset folder: {relative_path!r}")
    return target


class AssetFetcher:
    """Downloads assets for a crawl session."""

    def __init__(self, session: CrawlSession):
        self.session = session

    def destination_for(self, asset: Asset) -> str:
        """Folder an asset is downloaded into."""
        return os.path.join(self.session.destination, asset_folder_name(asset.display_name, asset.name))

    def fetch(self, asset: Asset) -> AssetOutcome:
        """Download one asset, retrying with folder cleanup between attempts.

        Args:
            asset: Asset listed in a catalog page

        Returns:
            The outcome; FAILED means every attempt failed and an ERROR line was recorded
        """
        fmt = pick_format(asset.formats, self.session.preferred_formats)
        dest = self.destination_for(asset)
        attempts = self.session.max_retries + 1

        for attempt in range(1, attempts + 1):
            try:
                return self.session.quota.gate(lambda: self._download(asset, fmt, dest))
            except Exception as e:
                logger.error(
                    "Unable to load asset %s (attempt %d/%d): %s",
                    asset.name, attempt, attempts, e
                )
                self._cleanup(dest)

        self.session.summary.record(asset_error_line(asset.name))
        return AssetOutcome.FAILED

    def _download(self, asset: Asset, fmt: Optional[FormatEntry], dest: str) -> AssetOutcome:
        """Gated unit of work for one attempt at an asset."""
        if fmt is None:
            logger.info("Unable to download asset (no supported formats): %s (%s)", dest, asset.name)
            return AssetOutcome.NO_FORMAT

        if is_excluded_format(asset.formats, self.session.excluded_format):
            logger.info("Ignoring Tilt Brush model: %s (%s)", dest, asset.name)
            return AssetOutcome.EXCLUDED

        root_path = _path_in_folder(dest, fmt.root.relative_path)
        logger.info("Downloading asset: %s (%s)", root_path, asset.name)
        os.makedirs(dest, exist_ok=True)
        self._download_file(fmt.root, root_path)

        if fmt.resources:
            self.session.quota.gate(lambda: self._download_resources(asset, fmt, dest))

        self.session.summary.record(
            downloaded_line(root_path, asset.display_name, asset.description, asset.author_name)
        )
        return AssetOutcome.DOWNLOADED

    def _download_resources(self, asset: Asset, fmt: FormatEntry, dest: str) -> None:
        for res in fmt.resources:
            res_path = _path_in_folder(dest, res.relative_path)
            logger.info("Downloading asset resource: %s (%s)", res_path, asset.name)
            self._download_file(res, res_path)

    def _download_file(self, ref: FileRef, filepath: str) -> None:
        download_file(
            self.session.http,
            ref.url,
            filepath,
            chunk_size=self.session.chunk_size,
            timeout=self.session.timeout_s,
        )

    @staticmethod
    def _cleanup(dest: str) -> None:
        """Remove a partially downloaded asset folder."""
        if os.path.isdir(dest):
            logger.debug("Removing partial download: %s", dest)
            shutil.rmtree(dest)


def fetch_asset(session: CrawlSession, asset: Asset) -> AssetOutcome:
    """Download one asset using the given session."""
    return AssetFetcher(session).fetch(asset)
