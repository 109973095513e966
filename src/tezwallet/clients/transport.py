"""
Shared HTTP transport for the backend clients of one client snapshot.

Every client built by the same ``ClientRegistry.build`` call talks HTTP
through one ``NetworkService``. The service never touches the network on
construction: the underlying ``httpx.AsyncClient`` is created on the first
request.
"""
from __future__ import annotations

import asyncio
import time
from typing import Any, Optional

import httpx

from ..constants import TransportDefaults
from ..exceptions import APIError, RateLimitError
from ..logging import get_logger, log_request, log_response

logger = get_logger(__name__)


class NetworkService:
    """
    Lazily connected JSON-over-HTTP transport.

    Args:
        build_id: Identifier of the client snapshot this transport belongs to
        timeout: Request timeout in seconds
        max_retries: Attempts per request for timeouts, connection errors and 429s
        user_agent: User-Agent header sent with every request
    """

    def __init__(
        self,
        build_id: str,
        timeout: float = TransportDefaults.TIMEOUT_SECONDS,
        max_retries: int = TransportDefaults.MAX_RETRIES,
        user_agent: str = TransportDefaults.USER_AGENT,
    ):
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")

        self.build_id = build_id
        self._timeout = timeout
        self._max_retries = max_retries
        self._user_agent = user_agent
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_connected(self) -> bool:
        """Whether the HTTP client has been created and not closed."""
        return self._client is not None and not self._client.is_closed

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={
                    "Accept": "application/json",
                    "User-Agent": self._user_agent,
                },
                timeout=self._timeout,
            )
        return self._client

    async def request_json(
        self,
        method: str,
        url: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """Make an HTTP request with retry logic and decode the JSON body."""
        client = await self._get_client()

        last_error: Optional[Exception] = None

        for attempt in range(self._max_retries):
            log_request(logger, method, url, params=params, build_id=self.build_id)
            started = time.monotonic()
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    params=params,
                    json=json,
                )
                duration_ms = (time.monotonic() - started) * 1000

                # Handle rate limiting
                if response.status_code == 429:
                    retry_after = _retry_after(response)
                    log_response(logger, 429, duration_ms=duration_ms, build_id=self.build_id)
                    if attempt < self._max_retries - 1:
                        await asyncio.sleep(retry_after)
                        continue
                    raise RateLimitError("Rate limit exceeded", retry_after=retry_after)

                if response.status_code >= 400:
                    try:
                        body = response.json()
                    except ValueError:
                        body = {"detail": response.text}
                    log_response(
                        logger,
                        response.status_code,
                        body=body,
                        duration_ms=duration_ms,
                        build_id=self.build_id,
                    )
                    raise APIError.from_response(response.status_code, body)

                log_response(
                    logger, response.status_code, duration_ms=duration_ms, build_id=self.build_id
                )
                return response.json()

            except (httpx.TimeoutException, httpx.TransportError) as e:
                last_error = e
                logger.warning(
                    "HTTP request failed",
                    url=url,
                    attempt=attempt + 1,
                    error=type(e).__name__,
                    build_id=self.build_id,
                )
                if attempt < self._max_retries - 1:
                    await asyncio.sleep(2 ** attempt)  # Exponential backoff
                    continue
                raise

        if last_error:
            raise last_error
        raise RuntimeError("Unexpected error in request retry loop")

    async def get_json(self, url: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request_json("GET", url, params=params)

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "NetworkService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


def _retry_after(response: httpx.Response) -> int:
    value = response.headers.get("Retry-After")
    try:
        return int(value) if value is not None else TransportDefaults.DEFAULT_RETRY_AFTER_SECONDS
    except ValueError:
        return TransportDefaults.DEFAULT_RETRY_AFTER_SECONDS
