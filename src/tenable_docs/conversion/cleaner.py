"""Boilerplate removal and main-content narrowing for documentation pages."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Elements to remove (navigation, ads, banners, etc.)
REMOVE_SELECTORS = [
    "nav",
    '[role="navigation"]',
    ".nav",
    "#nav",
    "aside",
    '[role="complementary"]',
    ".sidebar",
    "#sidebar",
    "header",
    'header[class*="site-"]',
    ".site-header",
    "#site-header",
    "footer",
    ".footer",
    "#footer",
    ".site-footer",
    "#site-footer",
    ".breadcrumb",
    '[class*="breadcrumb"]',
    '[id*="breadcrumb"]',
    ".menu",
    '[class*="menu"]',
    ".pagination",
    '[class*="pagination"]',
    ".search",
    '[class*="search"]',
    "script",
    "style",
    "noscript",
    "iframe",
    ".ad",
    '[class*="ad-"]',
    '[id*="ad-"]',
    ".cookie-banner",
    '[class*="cookie"]',
    ".newsletter",
    '[class*="newsletter"]',
    ".social-share",
    '[class*="social-share"]',
    "form",
    ".search-form",
    '[class*="search-form"]',
]

# Elements that typically contain main content, in priority order
KEEP_SELECTORS = [
    "main",
    '[role="main"]',
    ".main-content",
    "#main-content",
    "article",
    ".content",
    "#content",
    ".documentation",
    "#documentation",
    ".docs",
    "#docs",
    ".api-docs",
    "#api-docs",
    ".article",
    "#article",
    ".kb-article",
    "#kb-article",
    ".doc-content",
    "#doc-content",
]

# Elements that are empty by nature but still carry content
VOID_CONTENT_TAGS = frozenset({"img", "br", "hr"})


@dataclass
class CleaningOptions:
    """Selector overrides for HtmlCleaner. None keeps the defaults."""

    remove_selectors: Optional[list[str]] = None
    keep_selectors: Optional[list[str]] = None


class HtmlCleaner:
    """
    Strips boilerplate from a documentation page and narrows it to the main
    content region.

    Algorithm:
    1. Remove every element matching a remove-selector
    2. Take the first keep-selector match as the working root (else the whole
       document)
    3. Prune elements left with no child elements and no text
    4. Serialize the working root's contents

    Example:
        cleaner = HtmlCleaner()
        content_html = cleaner.clean(page_html)
    """

    def __init__(
        self,
        remove_selectors: Optional[list[str]] = None,
        keep_selectors: Optional[list[str]] = None,
    ):
        """
        Initialize the cleaner.

        Args:
            remove_selectors: CSS selectors to strip (replaces the defaults)
            keep_selectors: CSS selectors for main content, tried in order
                (replaces the defaults)
        """
        self._remove_selectors = remove_selectors if remove_selectors is not None else REMOVE_SELECTORS
        self._keep_selectors = keep_selectors if keep_selectors is not None else KEEP_SELECTORS

    @classmethod
    def from_options(cls, options: Optional[CleaningOptions]) -> "HtmlCleaner":
        if options is None:
            return cls()
        return cls(options.remove_selectors, options.keep_selectors)

    def _remove_unwanted(self, soup: BeautifulSoup) -> None:
        """Remove navigation, ads, and other unwanted elements."""
        for selector in self._remove_selectors:
            for element in soup.select(selector):
                # Already gone with an ancestor matched earlier
                if element.decomposed:
                    continue
                element.decompose()

    def _find_main_content(self, soup: BeautifulSoup) -> Union[BeautifulSoup, Tag]:
        """Find the main content element using selectors."""
        for selector in self._keep_selectors:
            element = soup.select_one(selector)
            if element is not None:
                return element
        return soup

    def _prune_empty(self, element: Tag) -> None:
        """Remove descendants with no child elements and no text, bottom-up."""
        for child in list(element.find_all(True, recursive=False)):
            self._prune_empty(child)
            if child.name in VOID_CONTENT_TAGS:
                continue
            if child.find(True) is None and not child.get_text().strip():
                child.decompose()

    def clean(self, html: str) -> str:
        """
        Clean HTML down to its main content.

        Args:
            html: Raw page markup

        Returns:
            Inner markup of the main content region
        """
        soup = BeautifulSoup(html, "html.parser")

        self._remove_unwanted(soup)
        root = self._find_main_content(soup)
        self._prune_empty(root)

        if root is soup:
            logger.debug("No main content region matched, using whole document")
        return root.decode_contents()


def clean_html(html: str, options: Optional[CleaningOptions] = None) -> str:
    """Clean HTML with default (or overridden) selectors."""
    return HtmlCleaner.from_options(options).clean(html)
