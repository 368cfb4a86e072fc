"""Configuration management for PolyDownloader.

Handles loading and caching of the JSON configuration file with environment
variable support (POLY_CONFIG_PATH) and the section getters used by the crawler.

The configuration system provides:
- Centralized config loading with caching
- Crawl settings (endpoint, page size, quota, retries, destination)
- Network settings (timeouts, chunk size, headers)
- Access to the API credential from the environment
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# Environment variable holding the Poly API key
API_KEY_ENV = "GOOGLE_POLY_KEY"

DEFAULT_API_BASE = "https://poly.googleapis.com/v1/"
DEFAULT_DESTINATION = "Poly Assets"

_CONFIG_CACHE: Optional[Dict[str, Any]] = None


def get_config(force_reload: bool = False) -> Dict[str, Any]:
    """Load project configuration JSON.

    Looks for the path in POLY_CONFIG_PATH env var; falls back to 'config.json' in CWD.
    Caches the result unless force_reload is True.

    Returns:
        Configuration dictionary (empty dict if file not found or invalid)
    """
    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None and not force_reload:
        return _CONFIG_CACHE

    path = os.environ.get("POLY_CONFIG_PATH", "config.json")
    try:
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                _CONFIG_CACHE = json.load(f) or {}
        else:
            _CONFIG_CACHE = {}
    except (OSError, ValueError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        _CONFIG_CACHE = {}

    return _CONFIG_CACHE


def get_crawl_config() -> Dict[str, Any]:
    """Get crawl-related configuration section.

    Returns:
        Crawl configuration dictionary with defaults
    """
    cfg = get_config()
    crawl = dict(cfg.get("crawl", {}) or {})

    # Apply defaults
    crawl.setdefault("api_base", DEFAULT_API_BASE)
    crawl.setdefault("page_size", 100)
    crawl.setdefault("curated", True)
    crawl.setdefault("max_requests", 3000)
    crawl.setdefault("cooldown_ms", 60000)
    crawl.setdefault("max_retries", 3)
    crawl.setdefault("destination", DEFAULT_DESTINATION)
    crawl.setdefault("clear_destination", True)

    return crawl


def get_network_config() -> Dict[str, Any]:
    """Return the network policy with sensible defaults.

    Returns:
        Network configuration dictionary with all fields populated
    """
    cfg = get_config()
    net = dict(cfg.get("network", {}) or {})

    net.setdefault("timeout_s", 30.0)
    net.setdefault("chunk_size", 8192)
    net.setdefault("verify_ssl", True)
    net.setdefault("transport_retries", 0)

    # Ensure headers is a dict if provided
    if not isinstance(net.get("headers", {}), dict):
        net["headers"] = {}

    return net


def get_preferred_formats() -> Optional[List[str]]:
    """Get the configured format preference order, or None to use the built-in order."""
    val = get_crawl_config().get("preferred_formats")
    if isinstance(val, list) and val:
        return [str(v) for v in val]
    return None


def get_excluded_format() -> Optional[str]:
    """Get the configured excluded format type, or None to use the built-in one."""
    val = get_crawl_config().get("excluded_format")
    return str(val) if val else None


def get_api_key() -> str | None:
    """Get the Poly API key from the environment."""
    # Read at call time so keys exported after import are picked up
    return os.getenv(API_KEY_ENV) or None
