"""Tests for the read-page domain policy."""

import pytest
from tenable_docs.security import UrlValidator, host_matches


class TestUrlValidator:
    """Tests for UrlValidator."""

    @pytest.fixture
    def validator(self):
        return UrlValidator()

    @pytest.mark.parametrize(
        "url",
        [
            "https://developer.tenable.com/reference/navigate",
            "http://developer.tenable.com/recipes",
            "https://tenable.com/products",
            "https://docs.tenable.com/vulnerability-management/Content/Welcome.htm",
            "https://DEVELOPER.tenable.com:443/reference",
        ],
    )
    def test_allowed(self, validator, url):
        """Test that Tenable documentation URLs are accepted."""
        assert validator.validate(url).is_valid is True

    @pytest.mark.parametrize(
        "url,reason",
        [
            ("", "required"),
            ("ftp://developer.tenable.com/file", "Scheme"),
            ("https://example.com/", "not in allowed list"),
            ("https://eviltenable.com/", "not in allowed list"),
            ("https://tenable.com.attacker.io/", "not in allowed list"),
            ("http://localhost/", "Localhost"),
            ("http://127.0.0.1/", "IP address"),
            ("https:///reference", "no domain"),
        ],
    )
    def test_rejected(self, validator, url, reason):
        """Test that other URLs are rejected with a reason."""
        result = validator.validate(url)
        assert result.is_valid is False
        assert reason in result.rejection_reason

    def test_custom_domains(self):
        """Test a custom allow-list."""
        validator = UrlValidator(allowed_domains=["docs.example.com"])
        assert validator.is_valid("https://docs.example.com/a")
        assert not validator.is_valid("https://developer.tenable.com/a")


class TestHostMatches:
    """Tests for host_matches."""

    def test_exact_and_subdomain(self):
        """Test that the domain and its subdomains match."""
        assert host_matches("developer.tenable.com", "developer.tenable.com")
        assert host_matches("eu.developer.tenable.com", "developer.tenable.com")

    def test_case_insensitive(self):
        assert host_matches("Developer.Tenable.COM", "developer.tenable.com")

    def test_lookalike_rejected(self):
        """Test that suffix lookalikes do not match."""
        assert not host_matches("evildeveloper.tenable.com", "developer.tenable.com")
        assert not host_matches("developer.tenable.com.evil.io", "developer.tenable.com")
