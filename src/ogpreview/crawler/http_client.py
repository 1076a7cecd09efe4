"""
HTTP document fetcher with retries and a body-size ceiling.
"""

from __future__ import annotations

import asyncio
import random
from typing import Optional

import aiohttp
import structlog

from ogpreview.config.config import FetchConfig

logger = structlog.get_logger(__name__)

_RETRY_STATUSES = frozenset({429, 502, 503, 504})


class FetchError(Exception):
    """A document could not be retrieved or decoded."""

    def __init__(self, message: str, *, url: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class HttpDocumentFetcher:
    """Fetches HTML documents with aiohttp for the extraction pipeline."""

    def __init__(self, config: Optional[FetchConfig] = None, session: Optional[aiohttp.ClientSession] = None):
        self.config = config or FetchConfig()
        self.session = session
        self._owns_session = session is None

    async def initialize(self) -> None:
        """Initialize the HTTP session if one was not supplied."""
        if self.session is None:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self.session = aiohttp.ClientSession(timeout=timeout, headers={"User-Agent": self.config.user_agent})
            self._owns_session = True
            logger.debug("HTTP fetcher session initialized", timeout=self.config.timeout)

    async def close(self) -> None:
        """Close the session if this fetcher created it."""
        if self.session is not None and self._owns_session:
            await self.session.close()
        self.session = None

    async def __aenter__(self) -> "HttpDocumentFetcher":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _calculate_backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter."""
        base_delay = self.config.backoff_base_seconds * 2 ** (attempt - 1)
        return base_delay * random.uniform(0.8, 1.2)

    async def fetch_text(self, url: str) -> str:
        """
        Fetch ``url`` and return the decoded body.

        Transient statuses (429, 502, 503, 504) and connection errors are
        retried up to ``max_retries`` times.

        Raises:
            FetchError: on a non-2xx final status, a connection failure after
                the last retry, an oversized body, or a body that cannot be
                decoded with the declared charset (UTF-8 when none is given).
        """
        if self.session is None:
            raise RuntimeError("HTTP fetcher not initialized")

        max_retries = self.config.max_retries
        attempt = 0
        while True:
            attempt += 1
            try:
                async with self.session.get(url) as response:
                    status = response.status
                    if status in _RETRY_STATUSES and attempt <= max_retries:
                        logger.warning("Transient HTTP status, retrying", url=url, status=status, attempt=attempt)
                    else:
                        if not 200 <= status < 300:
                            raise FetchError(f"HTTP {status}", url=url, status=status)
                        body = await self._read_body(response, url)
                        return self._decode(body, response.charset, url)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if attempt > max_retries:
                    raise FetchError(f"{type(e).__name__}: {e}", url=url) from e
                logger.warning("Request failed, retrying", url=url, error=str(e), attempt=attempt)

            await asyncio.sleep(self._calculate_backoff_delay(attempt))

    async def _read_body(self, response: aiohttp.ClientResponse, url: str) -> bytes:
        limit = self.config.max_document_bytes
        if response.content_length is not None and response.content_length > limit:
            raise FetchError(f"Document exceeds {limit} bytes", url=url, status=response.status)
        body = await response.read()
        if len(body) > limit:
            raise FetchError(f"Document exceeds {limit} bytes", url=url, status=response.status)
        return body

    def _decode(self, body: bytes, charset: Optional[str], url: str) -> str:
        encoding = charset or "utf-8"
        try:
            return body.decode(encoding)
        except (LookupError, UnicodeDecodeError) as e:
            raise FetchError(f"Cannot decode document as {encoding}", url=url) from e
