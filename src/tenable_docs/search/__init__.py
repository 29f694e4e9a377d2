"""Keyword index and search for Tenable documentation."""

from .catalog import DOC_CATALOG, popular_docs, search_catalog
from .engine import SearchEngine
from .index import SearchIndex
from .indexer import IndexBuilder, LinkExtractor, extract_doc_links
from .keywords import extract_keywords, extract_url_keywords, title_from_url

__all__ = [
    # Engine
    "SearchEngine",
    "SearchIndex",
    # Index construction
    "IndexBuilder",
    "LinkExtractor",
    "extract_doc_links",
    # Keywords
    "extract_keywords",
    "extract_url_keywords",
    "title_from_url",
    # Catalog fallback
    "DOC_CATALOG",
    "popular_docs",
    "search_catalog",
]
