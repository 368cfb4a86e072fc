"""PolyDownloader catalog package.

This package provides everything needed to talk to the Poly asset catalog:
listing pages, describing assets, choosing a file format, and pacing requests.

Key modules:
- core: Modular core utilities (config, network, naming, quota)
- model: CatalogPage/Asset/FormatEntry/FileRef dataclasses parsed from API JSON
- formats: Format preference policy and excluded-format detection
- poly_api: Catalog endpoint request building and page fetching

Usage:
    from catalog import poly_api
    from catalog.formats import pick_format
    from catalog.model import Asset, CatalogPage
"""

from . import poly_api
from .formats import EXCLUDED_FORMAT, PREFERRED_FORMATS, is_excluded_format, pick_format
from .model import Asset, CatalogPage, FileRef, FormatEntry

__all__ = [
    "poly_api",
    "Asset",
    "CatalogPage",
    "FileRef",
    "FormatEntry",
    "PREFERRED_FORMATS",
    "EXCLUDED_FORMAT",
    "pick_format",
    "is_excluded_format",
]
