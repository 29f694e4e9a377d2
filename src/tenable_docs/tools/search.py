"""The search_docs tool."""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import DocsError, ErrorKind, ValidationError, wrap_error
from ..models.config import SearchConfig
from ..models.documents import SearchResult
from ..search.catalog import search_catalog
from ..search.engine import SearchEngine

logger = logging.getLogger(__name__)


def validate_search_query(query: object, config: Optional[SearchConfig] = None) -> str:
    """
    Check a raw query and return it trimmed.

    Raises:
        ValidationError: If the query is not a string or its trimmed length is
            outside the configured bounds
    """
    config = config or SearchConfig()

    if not isinstance(query, str) or not query:
        raise ValidationError("Search query must be a non-empty string")

    trimmed = query.strip()
    if not trimmed:
        raise ValidationError("Search query cannot be empty")
    if len(trimmed) < config.min_query_length:
        raise ValidationError(
            f"Search query must be at least {config.min_query_length} characters long",
            {"length": len(trimmed)},
        )
    if len(trimmed) > config.max_query_length:
        raise ValidationError(
            f"Search query is too long (max {config.max_query_length} characters)",
            {"length": len(trimmed)},
        )
    return trimmed


def _ranked(query: str, engine: SearchEngine) -> list[tuple[SearchResult, str]]:
    """Results paired with their category ("" for catalog results)."""
    if engine.is_ready and len(engine.index) > 0:
        return [(entry.to_result(), entry.category) for entry in engine.search(query)]

    logger.info("Search index unavailable, using documentation catalog")
    return [(result, "") for result in search_catalog(query)]


def search_docs(
    query: object,
    engine: SearchEngine,
    config: Optional[SearchConfig] = None,
) -> list[SearchResult]:
    """
    Search the Tenable documentation.

    Uses the keyword index whenever it is ready and has entries, even if
    nothing matches. The pattern catalog answers only while the index is
    unavailable or empty.

    Args:
        query: Raw query from the caller
        engine: Search engine holding the index
        config: Query length bounds

    Returns:
        Ranked results

    Raises:
        ValidationError: Bad query (never wrapped)
        DocsError: SEARCH_ERROR for anything else that goes wrong
    """
    trimmed = validate_search_query(query, config)
    try:
        return [result for result, _ in _ranked(trimmed, engine)]
    except DocsError:
        raise
    except Exception as e:
        raise wrap_error(e, ErrorKind.SEARCH, f'Failed to search documentation for query: "{trimmed}"') from e


def search_docs_advanced(
    query: object,
    engine: SearchEngine,
    category: Optional[str] = None,
    limit: Optional[int] = None,
    config: Optional[SearchConfig] = None,
) -> list[SearchResult]:
    """
    Search with an optional category filter and result limit.

    Args:
        query: Raw query from the caller
        engine: Search engine holding the index
        category: Keep results whose title or category contains this
            (case-insensitive)
        limit: Keep at most this many results (ignored unless positive)
        config: Query length bounds

    Returns:
        Filtered, ranked results
    """
    trimmed = validate_search_query(query, config)
    try:
        ranked = _ranked(trimmed, engine)
    except DocsError:
        raise
    except Exception as e:
        raise wrap_error(e, ErrorKind.SEARCH, f'Failed to search documentation for query: "{trimmed}"') from e

    if category:
        needle = category.lower()
        ranked = [
            (result, entry_category)
            for result, entry_category in ranked
            if needle in result.title.lower() or needle in entry_category.lower()
        ]

    results = [result for result, _ in ranked]
    if limit is not None and limit > 0:
        results = results[:limit]
    return results
