"""Pytest configuration and shared fixtures for PolyDownloader tests."""
from __future__ import annotations

import json
import os
import shutil
import tempfile
from typing import Any, Dict, Generator, List, Optional
from unittest.mock import patch

import pytest


# ============================================================================
# Path and Directory Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for test files."""
    dirpath = tempfile.mkdtemp(prefix="poly_test_")
    yield dirpath
    shutil.rmtree(dirpath, ignore_errors=True)


@pytest.fixture
def destination(temp_dir: str) -> str:
    """Destination root for a crawl (not created up front)."""
    return os.path.join(temp_dir, "Poly Assets")


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Return a sample configuration dictionary."""
    return {
        "general": {
            "log_level": "DEBUG"
        },
        "crawl": {
            "api_base": "https://poly.example.test/v1/",
            "page_size": 50,
            "curated": True,
            "max_requests": 500,
            "cooldown_ms": 1500,
            "max_retries": 2,
            "destination": "models",
            "preferred_formats": ["OBJ", "FBX"],
            "excluded_format": "BLOCKS"
        },
        "network": {
            "timeout_s": 5,
            "chunk_size": 1024,
            "headers": {"X-Test": "1"}
        }
    }


@pytest.fixture
def config_file(temp_dir: str, sample_config: Dict[str, Any]) -> str:
    """Create a temporary config file."""
    config_path = os.path.join(temp_dir, "config.json")
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(sample_config, f)
    return config_path


@pytest.fixture
def mock_config(sample_config: Dict[str, Any]):
    """Mock the config module to return sample config."""
    with patch("catalog.core.config._CONFIG_CACHE", sample_config):
        yield sample_config


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Reset config cache before each test."""
    import catalog.core.config as config_module
    original_cache = config_module._CONFIG_CACHE
    config_module._CONFIG_CACHE = None
    yield
    config_module._CONFIG_CACHE = original_cache


# ============================================================================
# Catalog JSON Fixtures
# ============================================================================

def make_format_json(format_type: str, asset_id: str, resources: int = 0) -> Dict[str, Any]:
    """Build the JSON for one format entry of an asset."""
    ext = format_type.lower()
    data: Dict[str, Any] = {
        "formatType": format_type,
        "root": {
            "url": f"https://files.example.test/{asset_id}/{ext}/model.{ext}",
            "relativePath": f"model.{ext}",
        },
    }
    if resources:
        data["resources"] = [
            {
                "url": f"https://files.example.test/{asset_id}/{ext}/tex{i}.png",
                "relativePath": f"textures/tex{i}.png",
            }
            for i in range(resources)
        ]
    return data


def make_asset_json(
    asset_id: str,
    display_name: str = "Chair",
    formats: Optional[List[Dict[str, Any]]] = None,
    description: Optional[str] = "A wooden chair",
    author_name: str = "Poly by Google",
) -> Dict[str, Any]:
    """Build the JSON for one asset as returned by the list-assets endpoint."""
    data: Dict[str, Any] = {
        "name": f"assets/{asset_id}",
        "displayName": display_name,
        "authorName": author_name,
        "formats": formats if formats is not None else [make_format_json("GLTF2", asset_id)],
    }
    if description is not None:
        data["description"] = description
    return data


@pytest.fixture
def asset_json():
    """Factory fixture for asset JSON."""
    return make_asset_json


@pytest.fixture
def format_json():
    """Factory fixture for format JSON."""
    return make_format_json


# ============================================================================
# Network Mocking Fixtures
# ============================================================================

class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, json_data: Any = None, content: bytes = b"", reason: str = "OK"):
        self.status_code = status_code
        self.reason = reason
        self._json = json_data
        self._content = content

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return self._json

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self._content), chunk_size):
            yield self._content[i:i + chunk_size]

    def close(self) -> None:
        pass

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc) -> bool:
        return False


class FakeHttp:
    """Fake HTTP session serving catalog pages and files from memory.

    Pages are keyed by their pageToken (None for the first page), files by URL.
    Failures can be queued per key: each queued item is consumed by one request
    and is either an exception to raise or an HTTP status code to answer with.
    """

    def __init__(self):
        self.pages: Dict[Optional[str], Dict[str, Any]] = {}
        self.files: Dict[str, bytes] = {}
        self.failures: Dict[Any, List[Any]] = {}
        self.calls: List[tuple] = []
        self.closed = False

    def add_page(self, token: Optional[str], assets: List[Dict[str, Any]], next_token: Optional[str] = None) -> None:
        data: Dict[str, Any] = {"assets": assets}
        if next_token:
            data["nextPageToken"] = next_token
        self.pages[token] = data

    def add_files_for(self, asset: Dict[str, Any], content: bytes = b"data") -> None:
        for fmt in asset.get("formats", []):
            self.files[fmt["root"]["url"]] = content
            for res in fmt.get("resources", []):
                self.files[res["url"]] = content

    def fail(self, key: Any, *outcomes: Any) -> None:
        self.failures.setdefault(key, []).extend(outcomes)

    def page_requests(self) -> List[Optional[str]]:
        return [params.get("pageToken") for url, params in self.calls if url.endswith("/assets")]

    def file_requests(self) -> List[str]:
        return [url for url, params in self.calls if not url.endswith("/assets")]

    def get(self, url: str, params: Optional[Dict[str, Any]] = None, stream: bool = False, timeout: Any = None):
        params = dict(params or {})
        self.calls.append((url, params))
        is_page = url.endswith("/assets")
        key = ("page", params.get("pageToken")) if is_page else url

        queued = self.failures.get(key)
        if queued:
            outcome = queued.pop(0)
            if isinstance(outcome, BaseException):
                raise outcome
            return FakeResponse(status_code=int(outcome), reason="Internal Server Error")

        if is_page:
            token = params.get("pageToken")
            if token not in self.pages:
                return FakeResponse(status_code=404, reason="Not Found")
            return FakeResponse(json_data=self.pages[token])

        if url not in self.files:
            return FakeResponse(status_code=404, reason="Not Found")
        return FakeResponse(content=self.files[url])

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_http() -> FakeHttp:
    """Return an empty fake HTTP session."""
    return FakeHttp()


@pytest.fixture
def crawl_session(destination: str, fake_http: FakeHttp):
    """Return a CrawlSession wired to the fake HTTP session, with no real cooldown."""
    from catalog.core.quota import QuotaGate
    from crawler.session import CrawlSession

    return CrawlSession(
        api_key="test-key",
        destination=destination,
        api_base="https://poly.example.test/v1/",
        max_retries=3,
        quota=QuotaGate(max_requests=10_000, cooldown_s=0),
        http=fake_http,
    )
