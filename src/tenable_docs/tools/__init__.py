"""Tool operations exposed by the server."""

from .read import PageReader
from .search import search_docs, search_docs_advanced, validate_search_query

__all__ = [
    "PageReader",
    "search_docs",
    "search_docs_advanced",
    "validate_search_query",
]
