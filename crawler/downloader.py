"""CLI entry point for PolyDownloader.

Downloads every curated asset of the Poly catalog into a destination folder and
writes a summary.txt manifest describing what was obtained.

The run:
1. Check that the GOOGLE_POLY_KEY environment variable is set (fatal otherwise)
2. Clear and recreate the destination folder (unless --keep-existing)
3. Crawl every catalog page, downloading each asset
4. Write the summary file once the crawl is over
"""
from __future__ import annotations

import argparse
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import List, Optional

# Ensure parent directory is in path for direct script execution
if __package__ is None or __package__ == "":
    sys.path.append(str(Path(__file__).resolve().parents[1]))

from catalog.core.config import API_KEY_ENV, get_api_key, get_config, get_crawl_config
from crawler.page_crawler import crawl
from crawler.session import CrawlSession

logger = logging.getLogger(__name__)

SHUTDOWN_NOTICE = """WARNING

Now that Google Poly has been fully shutdown, this tool is no longer being maintained.
It may stop working at any time and should not be relied on."""


def create_cli_parser() -> argparse.ArgumentParser:
    """Create argument parser for the downloader.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="PolyDownloader - Download the curated Poly 3D model catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
The API key is read from the {API_KEY_ENV} environment variable.

Examples:
  # Download everything into the default folder
  python crawler/downloader.py

  # Use another folder and keep what is already there
  python crawler/downloader.py --output_dir my_models --keep-existing
        """
    )

    parser.add_argument(
        "--output_dir",
        default=None,
        help="Directory to save downloaded assets (default: crawl.destination from config)."
    )

    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: general.log_level from config, or INFO)"
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to JSON config file."
    )

    parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Do not remove an existing destination directory before downloading."
    )

    return parser


def configure_logging(level_name: str) -> None:
    """Configure base logging and quiet urllib3."""
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    # Reduce noisy retry logs from urllib3
    logging.getLogger("urllib3").setLevel(logging.ERROR)
    logging.getLogger("urllib3.connectionpool").setLevel(logging.ERROR)


def prepare_destination(destination: str, clear: bool = True) -> None:
    """Create the destination directory, removing a previous one if requested."""
    if clear and os.path.exists(destination):
        logger.info("Removing existing directory...")
        shutil.rmtree(destination)
    os.makedirs(destination, exist_ok=True)


def run(args: argparse.Namespace) -> int:
    """Run a full crawl.

    Args:
        args: Parsed command-line arguments

    Returns:
        Process exit code
    """
    if args.config:
        os.environ["POLY_CONFIG_PATH"] = args.config
    config = get_config(force_reload=True)

    configure_logging(args.log_level or str(config.get("general", {}).get("log_level", "INFO")))

    api_key = get_api_key()
    if not api_key:
        logger.error("The environment variable %s must be set first.", API_KEY_ENV)
        return 1

    logger.warning(SHUTDOWN_NOTICE)

    crawl_cfg = get_crawl_config()
    session = CrawlSession.from_config(api_key, destination=args.output_dir)
    clear = bool(crawl_cfg.get("clear_destination", True)) and not args.keep_existing

    try:
        prepare_destination(session.destination, clear=clear)
        logger.info("Downloading assets...")
        pages = crawl(session)
        logger.info("Processed %d catalog page(s).", pages)
        session.summary.flush(session.destination)
    finally:
        session.close()

    logger.info("Complete!")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    try:
        args = create_cli_parser().parse_args(argv)
        sys.exit(run(args))
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user.")
        sys.exit(0)
    except Exception as e:
        logger.exception("Unexpected error occurred: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
