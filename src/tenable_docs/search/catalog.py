"""Pattern-based category browser used when the index has nothing to offer."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..models.config import DEFAULT_BASE_ORIGIN, DEFAULT_REFERENCE_URL
from ..models.documents import SearchResult

RELEVANCE_THRESHOLD = 0.2
EXACT_MATCH_BONUS = 0.3
MAX_CATALOG_RESULTS = 10


@dataclass(frozen=True)
class DocCategory:
    """A documentation area and the phrases that point at it."""

    name: str
    base_url: str
    patterns: tuple[str, ...]


DOC_CATALOG: tuple[DocCategory, ...] = (
    DocCategory(
        "API References",
        DEFAULT_REFERENCE_URL,
        ("api", "endpoint", "reference", "vulnerability management", "scanning", "scans", "assets", "target groups"),
    ),
    DocCategory(
        "Vulnerability Management",
        DEFAULT_REFERENCE_URL,
        ("vulnerability", "vm", "scan", "asset", "target", "plugin", "family"),
    ),
    DocCategory(
        "Web App Scanning",
        DEFAULT_REFERENCE_URL,
        ("was", "web app", "web application", "wvs", "dast", "web scanning"),
    ),
    DocCategory(
        "Attack Surface Management",
        DEFAULT_REFERENCE_URL,
        ("asm", "attack surface", "discovery", "sources", "assets"),
    ),
    DocCategory(
        "Identity Exposure",
        DEFAULT_REFERENCE_URL,
        ("identity", "ad", "active directory", "exposure", "identity exposure"),
    ),
    DocCategory(
        "PCI ASV",
        DEFAULT_REFERENCE_URL,
        ("pci", "asv", "attestation", "payment card", "security standard"),
    ),
    DocCategory(
        "Tenable One",
        DEFAULT_REFERENCE_URL,
        ("tenable one", "exposure view", "attack path", "inventory"),
    ),
    DocCategory(
        "Downloads API",
        DEFAULT_REFERENCE_URL,
        ("download", "report", "export", "file", "pdf"),
    ),
    DocCategory(
        "Recipes & Examples",
        f"{DEFAULT_BASE_ORIGIN}/recipes",
        ("recipe", "example", "script", "python", "automation", "integration"),
    ),
    DocCategory(
        "API Explorer",
        f"{DEFAULT_BASE_ORIGIN}/api-explorer",
        ("api explorer", "interactive", "test", "try"),
    ),
)

POPULAR_DOCS: tuple[SearchResult, ...] = (
    SearchResult(
        url=f"{DEFAULT_BASE_ORIGIN}/reference/vulnerability-management-api",
        title="Vulnerability Management API",
        description="Complete API reference for Tenable Vulnerability Management",
    ),
    SearchResult(
        url=f"{DEFAULT_BASE_ORIGIN}/reference/web-app-scanning-api",
        title="Web App Scanning API",
        description="API documentation for Web Application Scanning",
    ),
    SearchResult(
        url=f"{DEFAULT_BASE_ORIGIN}/recipes",
        title="Tenable Recipes",
        description="Pre-built integration examples and automation scripts",
    ),
    SearchResult(
        url=f"{DEFAULT_BASE_ORIGIN}/api-explorer",
        title="API Explorer",
        description="Interactive API testing and exploration tool",
    ),
)

DESCRIPTION_TEMPLATES = (
    "Documentation and API references for {query}",
    "Learn how to use {query} in Tenable's {category}",
    "Complete guide and examples for {query} in the {category}",
    "API documentation and usage examples for {query}",
)


def normalize_query(query: str) -> str:
    """Lowercase, collapse whitespace and strip punctuation (hyphens survive)."""
    collapsed = re.sub(r"\s+", " ", query.lower().strip())
    return re.sub(r"[^\w\s-]", "", collapsed)


def calculate_relevance(query: str, pattern: str) -> float:
    """
    Score how well a normalized query matches one catalog pattern.

    Each query word that equals or is a substring of some pattern word earns
    ``1 / len(query_words)``; a pattern containing the whole query earns a
    flat bonus. The result is clamped to 1.0.

    Args:
        query: Normalized query
        pattern: Catalog pattern phrase

    Returns:
        Relevance in [0, 1]
    """
    query_words = query.split()
    if not query_words:
        return 0.0
    pattern_words = pattern.lower().split()

    score = 0.0
    for query_word in query_words:
        if any(query_word == word or query_word in word for word in pattern_words):
            score += 1 / len(query_words)

    if query in pattern.lower():
        score += EXACT_MATCH_BONUS

    return min(score, 1.0)


def category_relevance(query: str, category: DocCategory) -> float:
    """Best pattern score for a category."""
    return max((calculate_relevance(query, pattern) for pattern in category.patterns), default=0.0)


def documentation_url(query: str, category: DocCategory) -> str:
    """Guess a documentation URL for the query within a category."""
    slug = re.sub(r"\s+", "-", normalize_query(query))
    if category.base_url.endswith("/api-explorer"):
        return category.base_url
    return f"{category.base_url}/{slug}"


def describe(query: str, category: DocCategory) -> str:
    # Always the first template so results are reproducible.
    return DESCRIPTION_TEMPLATES[0].format(query=query, category=category.name)


def fallback_result(query: str) -> SearchResult:
    return SearchResult(
        url=DEFAULT_REFERENCE_URL,
        title="Tenable API Documentation",
        description=(
            f'Browse all Tenable API documentation. Your search for "{query}" '
            "may be found in various API sections."
        ),
    )


def search_catalog(query: str, limit: int = MAX_CATALOG_RESULTS) -> list[SearchResult]:
    """
    Match a query against the fixed documentation catalog.

    Never fails and never returns an empty list: when no category clears the
    relevance threshold, a single result pointing at the API reference root
    is returned.

    Args:
        query: Raw (validated) query
        limit: Maximum results

    Returns:
        Results ordered by descending relevance
    """
    normalized = normalize_query(query)
    scored = [(category_relevance(normalized, category), category) for category in DOC_CATALOG]
    relevant = sorted(
        (item for item in scored if item[0] > RELEVANCE_THRESHOLD),
        key=lambda item: item[0],
        reverse=True,
    )[:limit]

    results = [
        SearchResult(
            url=documentation_url(query, category),
            title=f"{category.name}: {query}",
            description=describe(query, category),
        )
        for _, category in relevant
    ]
    return results or [fallback_result(query)]


def popular_docs() -> list[SearchResult]:
    """Quick links to the most-used documentation sections."""
    return list(POPULAR_DOCS)
