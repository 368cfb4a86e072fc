import logging
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from .core.config import DEFAULT_API_BASE
from .core.network import get_json
from .model import CatalogPage

logger = logging.getLogger(__name__)

ASSETS_ENDPOINT = "assets"
PAGE_SIZE = 100


def assets_url(api_base: str = DEFAULT_API_BASE) -> str:
    """Return the list-assets endpoint for an API base URL."""
    if not api_base.endswith("/"):
        api_base += "/"
    return urljoin(api_base, ASSETS_ENDPOINT)


def build_list_params(
    api_key: str,
    page_token: Optional[str] = None,
    page_size: int = PAGE_SIZE,
    curated: bool = True,
) -> Dict[str, Any]:
    """Build query parameters for one page of the curated asset listing.

    The page token is only sent when continuing past the first page.
    """
    params: Dict[str, Any] = {
        "key": api_key,
        "pageSize": str(page_size),
    }
    if curated:
        params["curated"] = "true"
    if page_token is not None:
        params["pageToken"] = page_token
    return params


def list_assets(
    session: requests.Session,
    api_key: str,
    page_token: Optional[str] = None,
    api_base: str = DEFAULT_API_BASE,
    page_size: int = PAGE_SIZE,
    curated: bool = True,
    timeout: float = 30.0,
) -> CatalogPage:
    """Fetch one page of the Poly asset catalog.

    Raises:
        CatalogRequestError: On a non-2xx status
        requests.exceptions.RequestException: On transport errors
    """
    url = assets_url(api_base)
    logger.info("Fetching catalog page: %s", page_token or "<first>")
    data = get_json(
        session,
        url,
        params=build_list_params(api_key, page_token, page_size, curated),
        timeout=timeout,
    )
    page = CatalogPage.from_dict(data)
    logger.debug(
        "Catalog page %s: %d asset(s), next=%s",
        page_token or "<first>", len(page.assets), page.next_page_token
    )
    return page
