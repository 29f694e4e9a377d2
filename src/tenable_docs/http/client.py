"""Async HTTP client with retry logic."""

from __future__ import annotations

import asyncio
import logging
import random
from types import TracebackType

import aiohttp

from ..errors import NetworkError, ScrapingError
from ..models.config import NetworkConfig
from .protocols import HttpResponse

logger = logging.getLogger(__name__)


class AsyncHttpClient:
    """
    Async HTTP client used to fetch documentation pages.

    Features:
    - Bounded redirect following
    - Exponential backoff retry for transient failures
    - Content size limits to prevent memory exhaustion
    - 4xx responses returned as normal responses, never raised

    Example:
        async with AsyncHttpClient(NetworkConfig()) as client:
            response = await client.get("https://developer.tenable.com/reference")
            print(response.status_code, response.text[:100])
    """

    # Status codes that warrant a retry
    RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})

    # Exceptions that warrant a retry
    RETRYABLE_EXCEPTIONS = (
        aiohttp.ClientConnectionError,
        aiohttp.ClientPayloadError,
        asyncio.TimeoutError,
        ConnectionError,
    )

    DEFAULT_HEADERS = {
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }

    def __init__(self, config: NetworkConfig | None = None) -> None:
        """
        Initialize the HTTP client.

        Args:
            config: Network settings (timeouts, retries, size limits)
        """
        self._config = config or NetworkConfig()
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context and create session."""
        connector = aiohttp.TCPConnector(
            limit=20,
            limit_per_host=10,
            ttl_dns_cache=300,
        )
        self._session = aiohttp.ClientSession(
            connector=connector,
            headers={"User-Agent": self._config.user_agent, **self.DEFAULT_HEADERS},
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        if self._session:
            await self._session.close()
            self._session = None

    def _calculate_retry_delay(self, attempt: int) -> float:
        """
        Calculate delay for exponential backoff with jitter.

        Args:
            attempt: Current attempt number (0-indexed)

        Returns:
            Delay in seconds
        """
        delay: float = self._config.retry_base_delay * (2**attempt)
        jitter: float = random.uniform(0, self._config.retry_base_delay)
        return delay + jitter

    async def _read_body(self, response: aiohttp.ClientResponse, url: str) -> bytes:
        """Read the response body, enforcing the size limit."""
        max_size = self._config.max_content_size

        content_length = response.headers.get("Content-Length")
        if content_length and content_length.isdigit() and int(content_length) > max_size:
            raise ScrapingError(
                f"Content too large: {content_length} bytes",
                {"url": url, "maxSize": max_size},
            )

        chunks: list[bytes] = []
        size = 0
        async for chunk in response.content.iter_chunked(8192):
            size += len(chunk)
            if size > max_size:
                raise ScrapingError(
                    f"Content size limit exceeded: >{max_size} bytes",
                    {"url": url, "maxSize": max_size},
                )
            chunks.append(chunk)
        return b"".join(chunks)

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """
        Perform an HTTP GET request with retry logic.

        Args:
            url: The URL to fetch
            timeout: Request timeout in seconds (uses default if None)
            headers: Optional additional headers

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            NetworkError: On network errors after retries exhausted, or an
                empty 5xx response
            ScrapingError: On content size exceeded
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        timeout_val = timeout or self._config.timeout
        max_retries = self._config.max_retries

        for attempt in range(max_retries + 1):
            try:
                async with self._session.get(
                    url,
                    timeout=aiohttp.ClientTimeout(total=timeout_val),
                    headers=headers,
                    allow_redirects=True,
                    max_redirects=self._config.max_redirects,
                ) as response:
                    if response.status in self.RETRYABLE_STATUS_CODES and attempt < max_retries:
                        delay = self._calculate_retry_delay(attempt)
                        logger.warning(
                            f"Got {response.status} for {url}, retrying in {delay:.1f}s "
                            f"(attempt {attempt + 1}/{max_retries + 1})"
                        )
                        await asyncio.sleep(delay)
                        continue

                    content = await self._read_body(response, url)

                    if response.status >= 500 and not content.strip():
                        raise NetworkError(
                            f"Failed to download HTML from {url}: HTTP {response.status}",
                            {"url": url, "status": response.status},
                        )

                    logger.debug(f"Fetched {url}: HTTP {response.status}, {len(content)} bytes")
                    return HttpResponse(
                        status_code=response.status,
                        content=content,
                        content_type=response.headers.get("Content-Type", ""),
                        headers=dict(response.headers),
                        url=str(response.url),
                    )

            except aiohttp.TooManyRedirects as e:
                raise NetworkError(
                    f"Failed to download HTML from {url}: too many redirects",
                    {"url": url, "maxRedirects": self._config.max_redirects},
                ) from e

            except self.RETRYABLE_EXCEPTIONS as e:
                if attempt < max_retries:
                    delay = self._calculate_retry_delay(attempt)
                    logger.warning(
                        f"Error fetching {url}: {e!r}, retrying in {delay:.1f}s "
                        f"(attempt {attempt + 1}/{max_retries + 1})"
                    )
                    await asyncio.sleep(delay)
                    continue
                logger.error(f"HTTP fetch error for {url} after {max_retries + 1} attempts: {e!r}")
                code = "TIMEOUT" if isinstance(e, asyncio.TimeoutError) else type(e).__name__
                raise NetworkError(
                    f"Failed to download HTML from {url}: {e or code}",
                    {"url": url, "code": code},
                ) from e

            except aiohttp.ClientError as e:
                raise NetworkError(
                    f"Failed to download HTML from {url}: {e}",
                    {"url": url, "code": type(e).__name__},
                ) from e

        raise NetworkError(f"Failed to download HTML from {url}", {"url": url})
