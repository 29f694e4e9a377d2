"""Link harvesting and index construction from seed documentation pages."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from ..http.protocols import HttpClient
from ..models.config import DEFAULT_BASE_ORIGIN, SeedPage
from ..models.documents import IndexedEntry
from ..security.url_validator import host_matches
from .index import SearchIndex
from .keywords import extract_keywords, extract_url_keywords, title_from_url

logger = logging.getLogger(__name__)

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
DESCRIPTION_MAX_LENGTH = 200
MIN_CONTAINER_TEXT_LENGTH = 100
PLACEHOLDER_DESCRIPTION = "Tenable documentation page"


class LinkExtractor:
    """
    Harvest documentation links from a page's markup.

    Example:
        extractor = LinkExtractor()
        entries = extractor.extract(html, "API References")
    """

    def __init__(
        self,
        base_origin: str = DEFAULT_BASE_ORIGIN,
        permitted_domain: str = "developer.tenable.com",
    ):
        """
        Initialize the link extractor.

        Args:
            base_origin: Origin that root-relative hrefs are joined against
            permitted_domain: Links outside this host (and its subdomains) are dropped
        """
        self._base_origin = base_origin.rstrip("/")
        self._permitted_domain = permitted_domain

    def _resolve_href(self, href: str) -> Optional[str]:
        """
        Resolve an href to an absolute URL on the permitted domain.

        Args:
            href: Raw href attribute value

        Returns:
            Absolute URL, or None if the link should be skipped
        """
        if href.startswith("http"):
            url = href
        elif href.startswith("/"):
            url = urljoin(self._base_origin + "/", href)
        else:
            return None

        try:
            hostname = urlparse(url).hostname or ""
        except ValueError:
            return None

        if not host_matches(hostname, self._permitted_domain):
            return None
        return url

    @staticmethod
    def _nearest_heading_text(anchor: Tag) -> str:
        heading = anchor.find_parent(HEADING_TAGS)
        return heading.get_text().strip() if heading else ""

    @staticmethod
    def _describe(anchor: Tag) -> str:
        """Description from the following paragraph, else the enclosing container."""
        sibling = anchor.find_next_sibling()
        if isinstance(sibling, Tag) and sibling.name == "p":
            return sibling.get_text().strip()[:DESCRIPTION_MAX_LENGTH]

        parent = anchor.parent
        if isinstance(parent, Tag):
            parent_text = parent.get_text()
            if len(parent_text) > MIN_CONTAINER_TEXT_LENGTH:
                return parent_text.strip()[:DESCRIPTION_MAX_LENGTH]
        return ""

    def extract(self, html: str, category: str) -> list[IndexedEntry]:
        """
        Extract documentation entries from page markup.

        Args:
            html: Page markup
            category: Category assigned to every entry

        Returns:
            Entries in document order (may contain duplicate URLs)
        """
        soup = BeautifulSoup(html, "html.parser")
        entries: list[IndexedEntry] = []

        for anchor in soup.find_all("a", href=True):
            href = str(anchor.get("href", "")).strip()
            text = anchor.get_text().strip()
            if not href or not text:
                continue

            url = self._resolve_href(href)
            if url is None:
                continue

            title = text or self._nearest_heading_text(anchor)
            keywords = extract_url_keywords(url) | extract_keywords(title)

            entries.append(
                IndexedEntry(
                    url=url,
                    title=title or title_from_url(url),
                    description=self._describe(anchor) or PLACEHOLDER_DESCRIPTION,
                    category=category,
                    keywords=frozenset(keywords),
                )
            )

        return entries


def extract_doc_links(
    html: str,
    category: str,
    base_origin: str = DEFAULT_BASE_ORIGIN,
    permitted_domain: str = "developer.tenable.com",
) -> list[IndexedEntry]:
    """Convenience wrapper around LinkExtractor.extract."""
    return LinkExtractor(base_origin, permitted_domain).extract(html, category)


class IndexBuilder:
    """
    Build a SearchIndex by fetching seed pages and harvesting their links.

    The build is best-effort: a seed page that fails to download or returns
    an error status is logged and skipped.

    Example:
        async with AsyncHttpClient() as client:
            index = await IndexBuilder(client, config.index.seed_pages).build()
    """

    def __init__(
        self,
        http_client: HttpClient,
        seed_pages: Sequence[SeedPage],
        link_extractor: Optional[LinkExtractor] = None,
    ):
        self._client = http_client
        self._seed_pages = list(seed_pages)
        self._extractor = link_extractor or LinkExtractor()

    async def _harvest(self, page: SeedPage) -> list[IndexedEntry]:
        try:
            response = await self._client.get(page.url)
        except Exception as e:
            logger.warning(f"Error indexing {page.url}: {e}")
            return []

        if response.status_code >= 400:
            logger.warning(f"Failed to download {page.url}: HTTP {response.status_code}")
            return []

        try:
            entries = self._extractor.extract(response.text, page.category)
        except Exception as e:
            logger.warning(f"Error extracting links from {page.url}: {e}")
            return []

        logger.info(f"Indexed {len(entries)} entries from {page.url}")
        return entries

    async def build(self) -> SearchIndex:
        """
        Fetch every seed page in sequence and build the index.

        Returns:
            The built SearchIndex (possibly empty, never raises)
        """
        all_entries: list[IndexedEntry] = []
        for page in self._seed_pages:
            all_entries.extend(await self._harvest(page))

        index = SearchIndex.from_entries(all_entries)
        logger.info(f"Built index with {len(index)} unique entries")
        return index
