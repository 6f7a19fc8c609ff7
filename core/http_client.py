"""
Shared HTTP Requester

A thin async wrapper around one aiohttp ClientSession that every exchange
client shares. It issues GET requests against an exchange's base URL and
hands back the raw response body; decoding is left to core.decoder.

It handles:
- Per-request deadline (settings.request_timeout)
- Reading and releasing each response exactly once
- Mapping aiohttp/timeout failures to TransportError
- Request/response debug logging

It does NOT retry. A failed request surfaces as one failed call; retry
policy belongs to whoever schedules the calls.

Usage:
    async with HTTPRequester() as requester:
        body = await requester.get("https://poloniex.com/", "public", {"command": "returnTicker"})

aiohttp sessions are safe to share between concurrent tasks on one event
loop, so a single requester can serve every exchange client at once.
"""

import asyncio
import time
from typing import Dict, Optional
from urllib.parse import urlparse

import aiohttp

from core.config import settings
from core.errors import TransportError
from core.logging import get_logger, log_api_request, log_api_response


class HTTPRequester:
    """
    Shared async HTTP GET client.

    Attributes:
        timeout: Total per-request deadline in seconds
        session: Underlying aiohttp ClientSession (created on __aenter__
                 unless one is injected)

    Example:
        >>> async with HTTPRequester(timeout=5) as requester:
        ...     raw = await requester.get("https://api.binance.com", "/api/v3/ticker/24hr")
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session
        self._owns_session = session is None
        self.logger = get_logger(__name__)

    # ============================================
    # Context Manager for Session Management
    # ============================================

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def open(self) -> None:
        """Create the session if none was injected. Safe to call twice."""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
            self.logger.debug("HTTPRequester session created")

    async def close(self) -> None:
        """Close the session if this requester created it."""
        if self.session is not None and self._owns_session:
            await self.session.close()
            self.session = None
            self.logger.debug("HTTPRequester session closed")

    # ============================================
    # Requests
    # ============================================

    @staticmethod
    def build_url(base_url: str, path: str) -> str:
        """
        Join an exchange base URL and a path segment.

        Example:
            >>> HTTPRequester.build_url("https://poloniex.com/", "public")
            'https://poloniex.com/public'
        """
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"

    async def get(
        self,
        base_url: str,
        path: str,
        params: Optional[Dict[str, str]] = None
    ) -> bytes:
        """
        GET base_url/path with query parameters and return the raw body.

        Bodies of 4xx responses are returned as-is: exchanges put their
        error envelope there (and sometimes in 200 responses too), so the
        decoder is the one that decides whether the call failed.

        Args:
            base_url: Exchange API base URL
            path: Path segment (e.g., "public", "/api/v3/klines")
            params: Query parameters

        Returns:
            bytes: Fully read response body

        Raises:
            RuntimeError: If the session has not been opened
            TransportError: On connection errors, timeouts or 5xx responses
        """
        if self.session is None:
            raise RuntimeError("HTTPRequester session not initialized. Use 'async with' statement.")

        url = self.build_url(base_url, path)
        host = urlparse(base_url).netloc or base_url
        log_api_request(host, path, params)

        started = time.monotonic()
        try:
            async with self.session.get(
                url,
                params=params,
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as resp:
                status = resp.status
                body = await resp.read()
        except asyncio.TimeoutError:
            raise TransportError(url, f"timed out after {self.timeout}s")
        except aiohttp.ClientError as e:
            raise TransportError(url, str(e) or e.__class__.__name__) from e

        log_api_response(host, path, status, time.monotonic() - started)

        if status >= 500:
            raise TransportError(url, f"HTTP {status}")

        return body
