"""
Pytest configuration and fixtures for tezwallet tests.
"""
from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx
import pytest

# Add package source to path
package_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(package_src))

# Keep tests independent of the developer's environment
os.environ.setdefault("TEZWALLET_DEFAULT_NETWORK", "mainnet")
os.environ.setdefault("TEZWALLET_LOG_LEVEL", "DEBUG")

from tezwallet.network import NetworkConfig, NetworkType  # noqa: E402
from tezwallet.settings import TezWalletSettings  # noqa: E402


@dataclass
class _MockEntry:
    method: str
    url: str
    response: Optional[httpx.Response] = None
    exception: Optional[Exception] = None


class _LocalHTTPXMock:
    """Minimal pytest-httpx-compatible mock."""

    def __init__(self) -> None:
        self._entries: list[_MockEntry] = []
        self.requests: list[tuple[str, str]] = []

    def add_response(
        self,
        *,
        url: str,
        method: str = "GET",
        status_code: int = 200,
        json: Any = None,
        content: bytes | None = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        if content is None and json is not None:
            content = json_dumps_bytes(json)
            response_headers = {"content-type": "application/json"}
            if headers:
                response_headers.update(headers)
        else:
            response_headers = headers or {}

        request = httpx.Request(method.upper(), url)
        response = httpx.Response(
            status_code=status_code,
            headers=response_headers,
            content=content or b"",
            request=request,
        )
        self._entries.append(
            _MockEntry(method=method.upper(), url=url, response=response)
        )

    def add_exception(
        self,
        exception: Exception,
        *,
        url: str,
        method: str = "GET",
    ) -> None:
        self._entries.append(
            _MockEntry(method=method.upper(), url=url, exception=exception)
        )

    def _pop_match(self, method: str, url: str) -> _MockEntry:
        normalized_method = method.upper()
        normalized_url = _normalize_url(url)
        self.requests.append((normalized_method, normalized_url))
        for idx, entry in enumerate(self._entries):
            if entry.method == normalized_method and _normalize_url(entry.url) == normalized_url:
                return self._entries.pop(idx)
        raise AssertionError(
            f"No mocked response for {normalized_method} {url}. "
            f"Available: {[f'{e.method} {e.url}' for e in self._entries]}"
        )


def json_dumps_bytes(payload: Any) -> bytes:
    return json.dumps(payload, default=str).encode("utf-8")


def _append_query_params(url: str, params: Optional[dict[str, Any]]) -> str:
    if not params:
        return url
    query = urlencode(params, doseq=True)
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def _normalize_url(url: str) -> str:
    parts = urlsplit(url)
    normalized_query = urlencode(sorted(parse_qsl(parts.query, keep_blank_values=True)), doseq=True)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, normalized_query, parts.fragment))


@pytest.fixture
def httpx_mock(monkeypatch):
    """`httpx_mock` fixture that intercepts AsyncClient requests."""
    mock = _LocalHTTPXMock()

    async def _async_request(self, method, url, params=None, **kwargs):
        full_url = _append_query_params(str(url), params)
        match = mock._pop_match(method, full_url)
        if match.exception is not None:
            raise match.exception
        assert match.response is not None
        return match.response

    async def _no_sleep(_delay):
        return None

    monkeypatch.setattr(httpx.AsyncClient, "request", _async_request)
    monkeypatch.setattr("tezwallet.clients.transport.asyncio.sleep", _no_sleep)
    return mock


@pytest.fixture
def mainnet_config() -> NetworkConfig:
    """Built-in mainnet endpoints."""
    return NetworkConfig.defaults(NetworkType.MAINNET)


@pytest.fixture
def testnet_config() -> NetworkConfig:
    """Built-in testnet endpoints."""
    return NetworkConfig.defaults(NetworkType.TESTNET)


@pytest.fixture
def custom_config() -> NetworkConfig:
    """A locally hosted sandbox network."""
    return NetworkConfig(
        network_type=NetworkType.CUSTOM,
        node_url="http://localhost:8732",
        indexer_url="http://localhost:5000",
        metadata_url="http://localhost:14000",
        network_name="sandboxnet",
    )


@pytest.fixture
def settings() -> TezWalletSettings:
    """Settings with a single attempt per request."""
    return TezWalletSettings(http_timeout_seconds=5, max_retries=1)


@pytest.fixture
def sample_tz_address() -> str:
    """Valid implicit account address for testing."""
    return "tz1VSUr8wwNhLAzempoch5d6hLRiTh8Cjcjb"


@pytest.fixture
def sample_kt_address() -> str:
    """Valid contract address for testing."""
    return "KT1K9gCRgaLRFKTErYt1wVxA3Frb9FjasjTV"
