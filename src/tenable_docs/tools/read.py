"""The read_page tool and its batch/summary variants."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Optional

from ..cache.lru import LRUCache, cache_key
from ..conversion.cleaner import CleaningOptions
from ..conversion.markdown import HtmlToMarkdown
from ..conversion.metadata import UNTITLED, extract_metadata
from ..errors import DocsError, ErrorKind, NetworkError, ValidationError, wrap_error
from ..http.protocols import HttpClient
from ..models.config import ReadConfig
from ..models.documents import PageSummary, ReadPageOutput
from ..pipeline.base import ReadPipeline
from ..pipeline.steps import (
    CleanStep,
    ContentLengthStep,
    ConvertStep,
    FetchStep,
    NotFoundFallbackStep,
    StatusGuardStep,
    TitleStep,
)
from ..security.url_validator import UrlValidator

logger = logging.getLogger(__name__)


class PageReader:
    """
    Reads Tenable documentation pages as Markdown.

    Flow for one page: validate URL -> cache lookup -> fetch -> 404 fallback
    -> status guard -> length guard -> title -> clean -> convert -> cache
    store. Pages served through the 404 fallback are not cached.

    Example:
        async with AsyncHttpClient() as client:
            reader = PageReader(client, ReadConfig(), LRUCache())
            page = await reader.read_page("https://developer.tenable.com/reference/scans-list")
            print(page.title, page.word_count)
    """

    def __init__(
        self,
        http_client: HttpClient,
        config: Optional[ReadConfig] = None,
        cache: Optional[LRUCache[ReadPageOutput]] = None,
        converter: Optional[HtmlToMarkdown] = None,
    ):
        """
        Initialize the reader.

        Args:
            http_client: HTTP client implementing HttpClient protocol
            config: Domain policy, fallback page and cleaning overrides
            cache: Result cache (None disables caching)
            converter: Markdown converter (uses default if None)
        """
        self._client = http_client
        self._config = config or ReadConfig()
        self._cache = cache
        self._validator = UrlValidator(allowed_domains=self._config.allowed_domains)
        self._pipeline = ReadPipeline(
            steps=[
                FetchStep(http_client),
                NotFoundFallbackStep(http_client, self._config.fallback_url),
                StatusGuardStep(),
                ContentLengthStep(self._config.max_content_length),
                TitleStep(),
                CleanStep(
                    CleaningOptions(
                        remove_selectors=self._config.remove_selectors,
                        keep_selectors=self._config.keep_selectors,
                    )
                ),
                ConvertStep(converter),
            ]
        )

    @property
    def cache(self) -> Optional[LRUCache[ReadPageOutput]]:
        return self._cache

    def validate_url(self, url: object) -> str:
        """
        Check a URL against the domain policy and return it trimmed.

        Raises:
            ValidationError: If the URL is missing, malformed, not http(s) or
                outside the allowed domains
        """
        if not isinstance(url, str) or not url.strip():
            raise ValidationError("URL must be a non-empty string")

        url = url.strip()
        result = self._validator.validate(url)
        if not result.is_valid:
            raise ValidationError(
                f"URL not allowed: {result.rejection_reason}. "
                f"Only Tenable documentation domains are permitted: {', '.join(self._config.allowed_domains)}",
                {"url": url},
            )
        return url

    async def read_page(
        self,
        url: object,
        *,
        timeout: Optional[float] = None,
        max_content_length: Optional[int] = None,
    ) -> ReadPageOutput:
        """
        Read a documentation page and convert it to Markdown.

        Args:
            url: Page URL
            timeout: Fetch timeout override in seconds
            max_content_length: Markup length limit for this call

        Returns:
            ReadPageOutput (the fallback document when the page returns 404)

        Raises:
            ValidationError: Bad URL; raised before any network call
            DocsError: NETWORK_ERROR, SCRAPING_ERROR or CONVERSION_ERROR
        """
        url = self.validate_url(url)
        key = cache_key(url)

        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                return cached

        ctx = await self._pipeline.execute(url, timeout=timeout, max_content_length=max_content_length)
        output = ReadPageOutput(
            url=ctx.final_url or url,
            title=ctx.title or UNTITLED,
            content=ctx.markdown or "",
            word_count=ctx.word_count,
        )

        if self._cache is not None and not ctx.is_fallback:
            self._cache.set(key, output)
        return output

    async def read_pages(self, urls: Iterable[object]) -> list[ReadPageOutput]:
        """Read several pages concurrently. Any failure fails the batch."""
        return list(await asyncio.gather(*(self.read_page(url) for url in urls)))

    async def page_summary(self, url: object) -> PageSummary:
        """
        Fetch a page's title and meta description without converting it.

        Raises:
            ValidationError: Bad URL
            NetworkError: Fetch failed or returned an error status
            DocsError: SCRAPING_ERROR for anything else
        """
        url = self.validate_url(url)
        try:
            response = await self._client.get(url)
            if response.status_code >= 400:
                raise NetworkError(
                    f"Failed to download page: HTTP {response.status_code}",
                    {"url": url, "statusCode": response.status_code},
                )
            metadata = extract_metadata(response.text)
        except DocsError:
            raise
        except Exception as e:
            raise wrap_error(e, ErrorKind.SCRAPING, f"Failed to get page summary for {url}") from e

        return PageSummary(
            url=response.url or url,
            title=metadata["title"],
            description=metadata.get("description"),
        )
