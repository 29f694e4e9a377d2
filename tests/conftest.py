"""Shared fixtures for tenable_docs tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from tenable_docs.http.protocols import HttpResponse
from tenable_docs.models.documents import IndexedEntry
from tenable_docs.search.index import SearchIndex

DOC_PAGE = """<html>
<head>
<title>List Scans</title>
<meta name="description" content="Returns a list of scans.">
</head>
<body>
<nav><a href="/reference">Reference</a></nav>
<main>
<h1>List scans</h1>
<p>Returns the list of scans the current user can view.</p>
<pre><code class="language-bash">curl --request GET \\
  --url https://cloud.tenable.com/scans</code></pre>
</main>
<footer>Copyright Tenable</footer>
</body>
</html>"""

REFERENCE_PAGE = """<html>
<head><title>API Reference</title></head>
<body><main><h1>Tenable API Reference</h1><p>Start here.</p></main></body>
</html>"""


@pytest.fixture
def make_response():
    """Factory for HttpResponse objects carrying HTML."""

    def _make(html: str = "", status_code: int = 200, url: str = "") -> HttpResponse:
        return HttpResponse(
            status_code=status_code,
            content=html.encode("utf-8"),
            content_type="text/html; charset=utf-8",
            url=url,
        )

    return _make


@pytest.fixture
def mock_client():
    """HTTP client whose get() is an AsyncMock; set side_effect per test."""
    client = MagicMock()
    client.get = AsyncMock()
    return client


@pytest.fixture
def sample_index():
    """Small index with known keyword overlap."""
    return SearchIndex.from_entries(
        [
            IndexedEntry(
                url="https://developer.tenable.com/reference/vm-assets-list",
                title="List assets",
                description="Lists assets.",
                category="API References",
                keywords=frozenset({"assets", "list", "reference"}),
            ),
            IndexedEntry(
                url="https://developer.tenable.com/reference/vm-scans-asset",
                title="Scan asset",
                description="Scans one asset.",
                category="API References",
                keywords=frozenset({"scan", "asset", "reference"}),
            ),
            IndexedEntry(
                url="https://developer.tenable.com/recipes/launch-scan",
                title="Launch a scan",
                description="Python recipe.",
                category="Recipes",
                keywords=frozenset({"launch", "scan", "recipes"}),
            ),
            IndexedEntry(
                url="https://developer.tenable.com/reference/vulnerability-export",
                title="Export vulnerabilities",
                description="Bulk vulnerability export.",
                category="API References",
                keywords=frozenset({"export", "vulnerability", "reference"}),
            ),
        ]
    )


@pytest.fixture
def doc_page():
    """A reference page with chrome, a heading, prose and a bash sample."""
    return DOC_PAGE


@pytest.fixture
def reference_page():
    """The API reference landing page."""
    return REFERENCE_PAGE
