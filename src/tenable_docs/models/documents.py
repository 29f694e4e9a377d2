"""Result types returned by the search and read tools."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class IndexedEntry:
    """
    A documentation page known to the search index.

    Immutable once built; owned by the SearchIndex.
    """

    url: str
    title: str
    description: str
    category: str
    keywords: frozenset[str] = field(default_factory=frozenset)

    def to_result(self) -> "SearchResult":
        return SearchResult(url=self.url, title=self.title, description=self.description)


@dataclass(frozen=True)
class SearchResult:
    """A single search hit as returned to clients."""

    url: str
    title: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "title": self.title, "description": self.description}


@dataclass(frozen=True)
class ReadPageOutput:
    """
    A documentation page converted to Markdown.

    Attributes:
        url: Final URL after redirects (or the fallback URL)
        title: Page title
        content: Markdown body
        word_count: Words in the body, excluding code
    """

    url: str
    title: str
    content: str
    word_count: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire payload (camelCase keys)."""
        return {
            "url": self.url,
            "title": self.title,
            "content": self.content,
            "wordCount": self.word_count,
        }


@dataclass(frozen=True)
class PageSummary:
    """Title and meta description of a page, without its content."""

    url: str
    title: str
    description: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "title": self.title, "description": self.description}
