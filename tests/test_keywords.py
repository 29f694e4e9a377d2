"""Tests for keyword extraction."""

from tenable_docs.search.keywords import extract_keywords, extract_url_keywords, title_from_url


class TestExtractKeywords:
    """Tests for extract_keywords."""

    def test_lowercases_and_strips_punctuation(self):
        """Test that tokens are lowercased and punctuation removed."""
        assert extract_keywords("Export Vulnerabilities!") == {"export", "vulnerabilities"}

    def test_drops_short_tokens(self):
        """Test that tokens of two characters or fewer are dropped."""
        assert extract_keywords("vm ad was scan") == {"was", "scan"}

    def test_drops_stopwords(self):
        """Test that stopwords are removed."""
        assert extract_keywords("the API for scans and assets with tags") == {"scans", "assets", "tags"}

    def test_hyphens_survive(self):
        """Test that hyphenated words stay whole."""
        assert extract_keywords("web-app scanning") == {"web-app", "scanning"}

    def test_empty_input(self):
        """Test that empty or stopword-only input yields no tokens."""
        assert extract_keywords("") == set()
        assert extract_keywords("the and api") == set()

    def test_idempotent_on_joined_output(self):
        """Test that re-extracting from joined keywords gives the same set."""
        keywords = extract_keywords("Launch a Scan, then Export the Results.")
        assert extract_keywords(" ".join(keywords)) == keywords


class TestExtractUrlKeywords:
    """Tests for extract_url_keywords."""

    def test_splits_path_separators(self):
        """Test that slashes, hyphens and underscores split words."""
        keywords = extract_url_keywords("https://developer.tenable.com/reference/vm-scans_list")
        assert keywords == {"reference", "scans", "list"}

    def test_ignores_host_and_query(self):
        """Test that only the path contributes keywords."""
        keywords = extract_url_keywords("https://developer.tenable.com/recipes?topic=python")
        assert keywords == {"recipes"}

    def test_root_path(self):
        """Test that a bare origin has no keywords."""
        assert extract_url_keywords("https://developer.tenable.com/") == set()


class TestTitleFromUrl:
    """Tests for title_from_url."""

    def test_last_segment_capitalized(self):
        """Test title derived from the last path segment."""
        assert title_from_url("https://developer.tenable.com/reference/export-vulns_request") == (
            "Export Vulns Request"
        )

    def test_empty_path(self):
        """Test the placeholder title for an empty path."""
        assert title_from_url("https://developer.tenable.com") == "Documentation"
