"""Tests for the HTTP layer."""

import pytest
from tenable_docs.http import AsyncHttpClient, HttpResponse
from tenable_docs.http.protocols import decode_content
from tenable_docs.models.config import NetworkConfig


class TestDecodeContent:
    """Tests for decode_content."""

    def test_declared_charset(self):
        """Test that the Content-Type charset is used."""
        content = "Vulnérabilité".encode("latin-1")
        assert decode_content(content, "text/html; charset=ISO-8859-1") == "Vulnérabilité"

    def test_quoted_charset(self):
        """Test a quoted charset parameter."""
        content = "Résumé".encode("utf-8")
        assert decode_content(content, 'text/html; charset="utf-8"') == "Résumé"

    def test_unknown_charset_falls_back(self):
        """Test that an unknown declared charset does not fail decoding."""
        assert decode_content(b"plain ascii text", "text/html; charset=bogus") == "plain ascii text"

    def test_empty_content(self):
        assert decode_content(b"") == ""


class TestHttpResponse:
    """Tests for HttpResponse."""

    @pytest.mark.parametrize("status,ok", [(200, True), (301, True), (404, False), (500, False)])
    def test_ok(self, status, ok):
        """Test the ok flag for each status class."""
        assert HttpResponse(status_code=status, content=b"").ok is ok

    def test_text(self):
        """Test that text decodes the body."""
        response = HttpResponse(
            status_code=200,
            content="<h1>Scans</h1>".encode("utf-8"),
            content_type="text/html; charset=utf-8",
        )
        assert response.text == "<h1>Scans</h1>"


class TestAsyncHttpClient:
    """Tests for AsyncHttpClient."""

    @pytest.mark.asyncio
    async def test_get_requires_context(self):
        """Test that get() outside the context manager is rejected."""
        client = AsyncHttpClient(NetworkConfig())

        with pytest.raises(RuntimeError):
            await client.get("https://developer.tenable.com/reference")

    def test_retry_delay_grows(self):
        """Test exponential backoff with bounded jitter."""
        client = AsyncHttpClient(NetworkConfig(retry_base_delay=1.0))

        assert 1.0 <= client._calculate_retry_delay(0) <= 2.0
        assert 4.0 <= client._calculate_retry_delay(2) <= 5.0
