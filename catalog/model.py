"""Data models for the Poly catalog.

Provides immutable dataclasses for catalog pages, assets and their file
representations, plus conversion from the camelCase JSON returned by the API.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class FileRef:
    """A downloadable file.

    Attributes:
        url: Absolute download URL
        relative_path: Path relative to the asset's destination folder
    """

    url: str
    relative_path: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileRef":
        return cls(
            url=str(data.get("url", "")),
            relative_path=str(data.get("relativePath", "")),
        )


@dataclass(frozen=True)
class FormatEntry:
    """One encoding of an asset: a primary file plus optional resource files."""

    format_type: str
    root: FileRef
    resources: Tuple[FileRef, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormatEntry":
        return cls(
            format_type=str(data.get("formatType", "")),
            root=FileRef.from_dict(data.get("root") or {}),
            resources=tuple(FileRef.from_dict(r) for r in (data.get("resources") or [])),
        )


@dataclass(frozen=True)
class Asset:
    """A catalog item (a 3D model) with its metadata and available formats.

    Attributes:
        name: Catalog identifier, e.g. "assets/5vbJ5vildOq"
        display_name: Human-readable title
        author_name: Name of the creator
        description: Optional free-text description
        formats: Available file representations, in API order
    """

    name: str
    display_name: str
    author_name: str
    description: Optional[str] = None
    formats: Tuple[FormatEntry, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Asset":
        return cls(
            name=str(data.get("name", "")),
            display_name=str(data.get("displayName", "")),
            author_name=str(data.get("authorName", "")),
            description=data.get("description"),
            formats=tuple(FormatEntry.from_dict(f) for f in (data.get("formats") or [])),
        )


@dataclass
class CatalogPage:
    """One page of the asset listing."""

    assets: List[Asset] = field(default_factory=list)
    next_page_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogPage":
        """Build a page from the decoded JSON of a list-assets response.

        A missing "assets" key means an empty page; an empty token means no more pages.
        """
        return cls(
            assets=[Asset.from_dict(a) for a in (data.get("assets") or [])],
            next_page_token=data.get("nextPageToken") or None,
        )


__all__ = [
    "Asset",
    "CatalogPage",
    "FileRef",
    "FormatEntry",
]
