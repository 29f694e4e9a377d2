"""Term-overlap search over the in-memory index."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from typing import Optional, Protocol

from ..models.documents import IndexedEntry
from .index import SearchIndex
from .keywords import extract_keywords

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 10


class IndexSource(Protocol):
    """Anything that can produce a SearchIndex (e.g. IndexBuilder)."""

    async def build(self) -> SearchIndex: ...


class SearchEngine:
    """
    Owns the search index and answers keyword queries against it.

    The index is installed exactly once, either directly with ``install`` or
    through ``initialize``, which is safe to call concurrently and repeatedly.

    Scoring is plain term overlap: an entry's score is the number of distinct
    query tokens whose postings include it. Ties keep index order.

    Example:
        engine = SearchEngine()
        await engine.initialize(IndexBuilder(client, seed_pages))
        if engine.is_ready:
            hits = engine.search("vulnerability export")
    """

    def __init__(self, max_results: int = DEFAULT_MAX_RESULTS):
        self._max_results = max_results
        self._index: Optional[SearchIndex] = None
        self._lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        """True once an index has been installed."""
        return self._index is not None

    @property
    def index(self) -> SearchIndex:
        return self._index if self._index is not None else SearchIndex.empty()

    def install(self, index: SearchIndex) -> None:
        """Install a prebuilt index. No-op if one is already installed."""
        if self._index is not None:
            logger.debug("Search index already installed, ignoring")
            return
        self._index = index

    async def initialize(self, source: IndexSource) -> None:
        """
        Build and install the index once.

        If the build raises, an empty index is installed so the engine is
        still ready (searches then return nothing).

        Args:
            source: Index builder
        """
        async with self._lock:
            if self._index is not None:
                return
            try:
                index = await source.build()
            except Exception as e:
                logger.error(f"Failed to initialize search index: {e}")
                index = SearchIndex.empty()
            self._index = index

    def search(self, query: str) -> list[IndexedEntry]:
        """
        Rank entries by the number of query tokens they match.

        Args:
            query: Free-text query

        Returns:
            Up to ``max_results`` entries, best first; empty if the engine is
            not ready or the query has no usable tokens
        """
        if self._index is None:
            logger.warning("Search index not initialized, returning empty results")
            return []

        tokens = extract_keywords(query)
        if not tokens:
            return []

        scores: Counter[int] = Counter()
        for token in tokens:
            for position in self._index.postings(token):
                scores[position] += 1

        ranked = sorted(scores, key=lambda position: (-scores[position], position))
        return [self._index.entries[position] for position in ranked[: self._max_results]]

    def all_entries(self) -> list[IndexedEntry]:
        return list(self.index.entries)

    def entries_by_category(self, category: str) -> list[IndexedEntry]:
        return self.index.entries_by_category(category)

    def categories(self) -> list[str]:
        return self.index.categories()
