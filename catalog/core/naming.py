"""Filename sanitization and naming conventions for PolyDownloader.

Provides utilities for converting arbitrary asset titles to names that are safe
on common filesystems, and the folder naming rule used for downloaded assets.
"""
from __future__ import annotations

import re

# Catalog identifiers look like "assets/<id>"; this prefix is dropped in folder names
ASSET_NAME_PREFIX_LEN = len("assets/")

# Longest file name most filesystems accept, in bytes
MAX_NAME_BYTES = 255

_ILLEGAL_RE = re.compile(r'[/?<>\\:*|"]')
_CONTROL_RE = re.compile(r"[\x00-\x1f\x80-\x9f]")
_RESERVED_RE = re.compile(r"^\.+$")
_WINDOWS_RESERVED_RE = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)
_WINDOWS_TRAILING_RE = re.compile(r"[. ]+$")


def _truncate_utf8(value: str, max_bytes: int) -> str:
    """Truncate a string so its UTF-8 encoding fits in max_bytes without splitting a character."""
    encoded = value.encode("utf-8")
    if len(encoded) <= max_bytes:
        return value
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def sanitize_filename(name: str, replacement: str = "") -> str:
    """Sanitize a string for use as a single file or folder name.

    - Removes path separators and characters illegal on Windows.
    - Removes control characters.
    - Rejects "." / ".." and Windows device names (CON, PRN, COM1, ...).
    - Strips trailing dots and spaces.
    - Truncates to 255 bytes of UTF-8.

    Unlike a slug, spaces, case and punctuation such as '-' are preserved.

    Args:
        name: Input string
        replacement: Text substituted for each removed character

    Returns:
        Sanitized name (may be empty if nothing usable remains)
    """
    if name is None:
        return ""

    s = str(name)
    s = _ILLEGAL_RE.sub(replacement, s)
    s = _CONTROL_RE.sub(replacement, s)
    s = _RESERVED_RE.sub(replacement, s)
    s = _WINDOWS_RESERVED_RE.sub(replacement, s)
    s = _WINDOWS_TRAILING_RE.sub(replacement, s)
    return _truncate_utf8(s, MAX_NAME_BYTES)


def truncate_asset_id(asset_name: str) -> str:
    """Drop the namespace prefix from a catalog identifier ("assets/abc" -> "abc")."""
    return (asset_name or "")[ASSET_NAME_PREFIX_LEN:]


def asset_folder_name(display_name: str, asset_name: str) -> str:
    """Build the destination folder name for an asset.

    Combines the display name and the truncated identifier following the
    pattern: <display_name>-<id>, then sanitizes the result as a whole.

    Args:
        display_name: Human-readable asset title
        asset_name: Catalog identifier (e.g. "assets/5vbJ5vildOq")

    Returns:
        Filesystem-safe folder name
    """
    return sanitize_filename(f"{display_name}-{truncate_asset_id(asset_name)}")
