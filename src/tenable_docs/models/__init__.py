"""Configuration and result models."""

from .config import (
    CacheConfig,
    IndexConfig,
    NetworkConfig,
    ReadConfig,
    SearchConfig,
    SeedPage,
    ServerConfig,
)
from .documents import IndexedEntry, PageSummary, ReadPageOutput, SearchResult

__all__ = [
    # Config
    "CacheConfig",
    "IndexConfig",
    "NetworkConfig",
    "ReadConfig",
    "SearchConfig",
    "SeedPage",
    "ServerConfig",
    # Documents
    "IndexedEntry",
    "PageSummary",
    "ReadPageOutput",
    "SearchResult",
]
