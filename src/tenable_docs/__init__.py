"""
tenable_docs - Search and read Tenable developer documentation over MCP.

Usage:
    from tenable_docs import AsyncHttpClient, PageReader, ReadConfig

    async with AsyncHttpClient() as client:
        reader = PageReader(client, ReadConfig())
        page = await reader.read_page("https://developer.tenable.com/reference/navigate")
        print(page.content)
"""

__version__ = "1.0.0"

from .cache import LRUCache, cache_key
from .conversion import HtmlCleaner, HtmlToMarkdown, clean_html_preserving_code_blocks
from .errors import DocsError, ErrorKind
from .http import AsyncHttpClient
from .models.config import (
    CacheConfig,
    IndexConfig,
    NetworkConfig,
    ReadConfig,
    SearchConfig,
    SeedPage,
    ServerConfig,
)
from .models.documents import IndexedEntry, PageSummary, ReadPageOutput, SearchResult
from .search import IndexBuilder, SearchEngine, SearchIndex
from .tools import PageReader, search_docs, search_docs_advanced

__all__ = [
    "__version__",
    # Tools
    "PageReader",
    "search_docs",
    "search_docs_advanced",
    # Search
    "SearchEngine",
    "SearchIndex",
    "IndexBuilder",
    # Conversion
    "HtmlCleaner",
    "HtmlToMarkdown",
    "clean_html_preserving_code_blocks",
    # Infrastructure
    "AsyncHttpClient",
    "LRUCache",
    "cache_key",
    # Config
    "ServerConfig",
    "NetworkConfig",
    "IndexConfig",
    "SearchConfig",
    "ReadConfig",
    "CacheConfig",
    "SeedPage",
    # Results
    "IndexedEntry",
    "SearchResult",
    "ReadPageOutput",
    "PageSummary",
    # Errors
    "DocsError",
    "ErrorKind",
]
