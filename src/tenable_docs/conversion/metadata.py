"""Title and meta-tag extraction from raw page HTML."""

import logging
from typing import Optional, TypedDict

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

UNTITLED = "Untitled Document"


class PageMetadata(TypedDict, total=False):
    """Metadata read from a page's head."""

    title: str
    description: Optional[str]
    keywords: list[str]


def _meta_content(soup: BeautifulSoup, name: str) -> Optional[str]:
    tag = soup.find("meta", attrs={"name": name}) or soup.find("meta", attrs={"property": f"og:{name}"})
    if tag is None:
        return None
    content = tag.get("content")
    if not isinstance(content, str) or not content.strip():
        return None
    return content.strip()


def _title_from_soup(soup: BeautifulSoup) -> str:
    for tag_name in ("title", "h1"):
        tag = soup.find(tag_name)
        if tag is not None:
            text = tag.get_text(strip=True)
            if text:
                return text
    return UNTITLED


def extract_title(html: str) -> str:
    """
    Page title: the ``<title>`` text, else the first ``<h1>``, else
    ``"Untitled Document"``.
    """
    return _title_from_soup(BeautifulSoup(html, "html.parser"))


def extract_metadata(html: str) -> PageMetadata:
    """
    Extract title, description and keywords from raw page HTML.

    Args:
        html: Raw page markup

    Returns:
        PageMetadata; description is None when the page has none
    """
    soup = BeautifulSoup(html, "html.parser")
    metadata: PageMetadata = {
        "title": _title_from_soup(soup),
        "description": _meta_content(soup, "description"),
        "keywords": [],
    }

    keywords = _meta_content(soup, "keywords")
    if keywords:
        metadata["keywords"] = [k.strip() for k in keywords.split(",") if k.strip()]

    logger.debug(f"Extracted metadata: title={metadata['title']!r}")
    return metadata
