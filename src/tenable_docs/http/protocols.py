"""Protocol definitions for HTTP client abstraction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from charset_normalizer import from_bytes as detect_encoding

logger = logging.getLogger(__name__)


def decode_content(content: bytes, content_type: str = "") -> str:
    """
    Decode content with intelligent encoding detection.

    Fallback chain:
    1. Content-Type header charset
    2. charset-normalizer detection
    3. UTF-8 with replacement

    Args:
        content: Raw bytes content
        content_type: Content-Type header value

    Returns:
        Decoded string
    """
    encoding = None
    if content_type:
        for part in content_type.split(";"):
            part = part.strip()
            if part.lower().startswith("charset="):
                encoding = part.split("=", 1)[1].strip().strip("\"'")
                break

    if encoding:
        try:
            return content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Failed to decode with declared encoding: {encoding}")

    if content:
        best_match = detect_encoding(content).best()
        if best_match is not None:
            logger.debug(f"Detected encoding: {best_match.encoding}")
            return str(best_match)

    return content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable HTTP response returned by HttpClient.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        content: Raw response content as bytes
        content_type: Content-Type header value
        headers: All response headers
        url: Final URL after any redirects
    """

    status_code: int
    content: bytes
    content_type: str = "text/html"
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""

    @property
    def text(self) -> str:
        """Response body decoded to a string."""
        return decode_content(self.content, self.content_type)

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class HttpClient(Protocol):
    """
    Protocol for HTTP clients.

    This abstraction allows for:
    - Mock implementations in tests
    - Different backends (aiohttp, httpx, etc.)
    - Consistent interface across the codebase

    Contract:
    - Redirects are followed (bounded)
    - 4xx responses are returned, never raised
    - Timeouts, DNS/connection failures and empty 5xx responses raise
      NetworkError
    """

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """
        Perform an HTTP GET request.

        Args:
            url: The URL to fetch
            timeout: Request timeout in seconds
            headers: Optional additional headers

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            NetworkError on network failures (after retries exhausted)
        """
        ...
