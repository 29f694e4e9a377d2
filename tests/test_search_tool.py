"""Tests for the search_docs tool."""

from unittest.mock import MagicMock

import pytest
from tenable_docs.errors import DocsError, ErrorKind, ValidationError
from tenable_docs.models.config import SearchConfig
from tenable_docs.search.engine import SearchEngine
from tenable_docs.search.index import SearchIndex
from tenable_docs.tools.search import search_docs, search_docs_advanced, validate_search_query


@pytest.fixture
def engine(sample_index):
    engine = SearchEngine()
    engine.install(sample_index)
    return engine


class TestValidateSearchQuery:
    """Tests for query validation."""

    @pytest.mark.parametrize(
        "query,message",
        [
            (None, "Search query must be a non-empty string"),
            ("", "Search query must be a non-empty string"),
            (42, "Search query must be a non-empty string"),
            ("   ", "Search query cannot be empty"),
            (" a ", "Search query must be at least 2 characters long"),
            ("x" * 201, "Search query is too long (max 200 characters)"),
        ],
    )
    def test_rejections(self, query, message):
        """Test each validation failure and its message."""
        with pytest.raises(ValidationError) as exc_info:
            validate_search_query(query)

        assert exc_info.value.message == message
        assert exc_info.value.kind is ErrorKind.VALIDATION

    def test_returns_trimmed_query(self):
        """Test that surrounding whitespace is removed."""
        assert validate_search_query("  scan export ") == "scan export"

    def test_bounds_apply_to_trimmed_length(self):
        """Test that padding does not count toward the length bounds."""
        assert validate_search_query("  " + "x" * 200 + "  ") == "x" * 200

    def test_custom_bounds(self):
        """Test configurable length bounds."""
        config = SearchConfig(min_query_length=4, max_query_length=10)

        with pytest.raises(ValidationError):
            validate_search_query("vm", config)
        assert validate_search_query("scans", config) == "scans"


class TestSearchDocs:
    """Tests for search_docs."""

    def test_invalid_query_never_touches_engine(self):
        """Test that validation happens before any search work."""
        engine = MagicMock()

        with pytest.raises(ValidationError):
            search_docs("a", engine)

        assert engine.mock_calls == []

    def test_ranks_by_index(self, engine):
        """Test that index hits are returned best first."""
        results = search_docs("scan asset", engine)

        assert [result.title for result in results] == ["Scan asset", "Launch a scan"]
        assert results[0].url == "https://developer.tenable.com/reference/vm-scans-asset"

    def test_catalog_when_engine_not_ready(self):
        """Test the catalog fallback before the index is installed."""
        results = search_docs("vulnerability", SearchEngine())

        titles = [result.title for result in results]
        assert "API References: vulnerability" in titles
        assert "Vulnerability Management: vulnerability" in titles

    def test_catalog_when_index_empty(self):
        """Test the catalog fallback for an installed but empty index."""
        engine = SearchEngine()
        engine.install(SearchIndex.empty())

        results = search_docs("vulnerability", engine)

        assert "Vulnerability Management: vulnerability" in [result.title for result in results]

    def test_populated_index_without_hits_returns_empty(self, engine):
        """Test that a populated index answers alone, even with no matches."""
        assert search_docs("plugin", engine) == []

    def test_populated_index_excludes_catalog(self, engine):
        """Test that catalog results never mix into index results."""
        results = search_docs("vulnerability", engine)

        assert [result.title for result in results] == ["Export vulnerabilities"]

    def test_always_returns_something(self):
        """Test that a valid but unmatched query still gets the root reference."""
        results = search_docs("zzqx", SearchEngine())

        assert len(results) == 1
        assert results[0].title == "Tenable API Documentation"

    def test_unexpected_errors_wrapped_as_search(self):
        """Test that search failures become SEARCH_ERROR."""
        engine = MagicMock()
        engine.is_ready = True
        engine.index = ["entry"]
        engine.search.side_effect = RuntimeError("index corrupted")

        with pytest.raises(DocsError) as exc_info:
            search_docs("scan", engine)

        assert exc_info.value.kind is ErrorKind.SEARCH
        assert exc_info.value.message == 'Failed to search documentation for query: "scan"'
        assert exc_info.value.details == {"error": "index corrupted"}


class TestSearchDocsAdvanced:
    """Tests for search_docs_advanced."""

    def test_filters_by_category(self, engine):
        """Test that the category filter matches the entry category."""
        results = search_docs_advanced("scan asset", engine, category="recipes")

        assert [result.title for result in results] == ["Launch a scan"]

    def test_filters_by_title(self, engine):
        """Test that the category filter also matches titles."""
        results = search_docs_advanced("reference", engine, category="EXPORT")

        assert [result.title for result in results] == ["Export vulnerabilities"]

    def test_limit(self, engine):
        """Test that a positive limit truncates the results."""
        results = search_docs_advanced("reference", engine, limit=2)

        assert [result.title for result in results] == ["List assets", "Scan asset"]

    @pytest.mark.parametrize("limit", [0, -1, None])
    def test_non_positive_limit_ignored(self, engine, limit):
        """Test that zero, negative and missing limits keep every result."""
        results = search_docs_advanced("reference", engine, limit=limit)

        assert len(results) == 3

    def test_category_on_catalog_results(self):
        """Test that catalog results are filtered by title."""
        results = search_docs_advanced("vulnerability", SearchEngine(), category="management")

        assert [result.title for result in results] == ["Vulnerability Management: vulnerability"]

    def test_validates_query(self, engine):
        """Test that the advanced search validates like search_docs."""
        with pytest.raises(ValidationError):
            search_docs_advanced("", engine, category="recipes")
