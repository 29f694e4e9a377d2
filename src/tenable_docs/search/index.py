"""In-memory inverted index over documentation entries."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..models.documents import IndexedEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchIndex:
    """
    Immutable keyword and category index.

    Postings lists hold positions into ``entries``; they are back-references
    only, never authoritative. Build with ``SearchIndex.from_entries``.

    Attributes:
        entries: Unique entries in build order
        keyword_postings: keyword -> positions of entries carrying it
        category_postings: category -> positions of entries in it
    """

    entries: tuple[IndexedEntry, ...] = ()
    keyword_postings: dict[str, list[int]] = field(default_factory=dict)
    category_postings: dict[str, list[int]] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> SearchIndex:
        return cls()

    @classmethod
    def from_entries(cls, entries: Iterable[IndexedEntry]) -> SearchIndex:
        """
        Build an index, deduplicating entries by URL.

        A repeated URL replaces the earlier entry's data but keeps its
        position (last write wins).

        Args:
            entries: Entries in discovery order

        Returns:
            A fully built SearchIndex
        """
        by_url: dict[str, IndexedEntry] = {}
        for entry in entries:
            by_url[entry.url] = entry
        unique = tuple(by_url.values())

        keyword_postings: dict[str, list[int]] = {}
        category_postings: dict[str, list[int]] = {}
        for position, entry in enumerate(unique):
            for keyword in sorted(entry.keywords):
                keyword_postings.setdefault(keyword, []).append(position)
            category_postings.setdefault(entry.category, []).append(position)

        return cls(
            entries=unique,
            keyword_postings=keyword_postings,
            category_postings=category_postings,
        )

    def __len__(self) -> int:
        return len(self.entries)

    def postings(self, keyword: str) -> list[int]:
        """Positions of entries carrying the keyword."""
        return self.keyword_postings.get(keyword, [])

    def entries_by_category(self, category: str) -> list[IndexedEntry]:
        return [self.entries[position] for position in self.category_postings.get(category, [])]

    def categories(self) -> list[str]:
        return list(self.category_postings)
