"""URL validation for the page-read domain policy."""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import urlparse


def host_matches(hostname: str, domain: str) -> bool:
    """True if hostname equals domain or is one of its subdomains."""
    hostname = hostname.lower()
    domain = domain.lower()
    return hostname == domain or hostname.endswith(f".{domain}")


@dataclass
class UrlValidationResult:
    """Result of URL validation."""

    is_valid: bool
    rejection_reason: str | None = None

    @staticmethod
    def valid() -> UrlValidationResult:
        return UrlValidationResult(is_valid=True)

    @staticmethod
    def invalid(reason: str) -> UrlValidationResult:
        return UrlValidationResult(is_valid=False, rejection_reason=reason)


class UrlValidator:
    """
    Decides whether a URL may be fetched by the page reader.

    Rejects:
    - Empty or malformed URLs
    - Schemes other than http/https
    - Hosts that are neither an allowed domain nor a subdomain of one
    - Localhost, internal suffixes and private/loopback IP literals

    Example:
        validator = UrlValidator(allowed_domains={"developer.tenable.com"})
        result = validator.validate("https://developer.tenable.com/reference")
        if not result.is_valid:
            print(f"Rejected: {result.rejection_reason}")
    """

    DEFAULT_ALLOWED_SCHEMES = frozenset({"http", "https"})
    DEFAULT_ALLOWED_DOMAINS = frozenset({"developer.tenable.com", "tenable.com"})
    INTERNAL_SUFFIXES = (".internal", ".local", ".localhost", ".localdomain")
    LOCALHOST_NAMES = frozenset({"localhost", "localhost.localdomain"})

    def __init__(
        self,
        allowed_domains: Iterable[str] | None = None,
        allowed_schemes: Iterable[str] | None = None,
        block_private_ips: bool = True,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the URL validator.

        Args:
            allowed_domains: Hosts that may be read, subdomains included
                (default: developer.tenable.com, tenable.com)
            allowed_schemes: Allowed URL schemes (default: http, https)
            block_private_ips: Whether to block private/internal IP literals
            logger: Optional logger for validation messages
        """
        self.allowed_domains = frozenset(
            d.lower() for d in (allowed_domains if allowed_domains is not None else self.DEFAULT_ALLOWED_DOMAINS)
        )
        self.allowed_schemes = frozenset(allowed_schemes or self.DEFAULT_ALLOWED_SCHEMES)
        self.block_private_ips = block_private_ips
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, url: str) -> UrlValidationResult:
        """
        Validate a URL against the domain policy.

        Args:
            url: The URL to validate

        Returns:
            UrlValidationResult with is_valid and optional rejection_reason
        """
        if not url or not url.strip():
            return UrlValidationResult.invalid("URL is required")

        try:
            parsed = urlparse(url.strip())
            hostname = (parsed.hostname or "").lower()
        except ValueError:
            return UrlValidationResult.invalid("Invalid URL format")

        if parsed.scheme not in self.allowed_schemes:
            return UrlValidationResult.invalid(
                f"Scheme '{parsed.scheme}' not allowed (allowed: {sorted(self.allowed_schemes)})"
            )

        if not hostname:
            return UrlValidationResult.invalid("URL has no domain")

        if hostname in self.LOCALHOST_NAMES:
            return UrlValidationResult.invalid("Localhost URLs not allowed")

        for suffix in self.INTERNAL_SUFFIXES:
            if hostname.endswith(suffix):
                return UrlValidationResult.invalid(f"Internal domain suffix '{suffix}' not allowed")

        if self.block_private_ips:
            ip_result = self._check_ip_address(hostname)
            if ip_result is not None:
                return ip_result

        if not any(host_matches(hostname, domain) for domain in self.allowed_domains):
            self.logger.debug(f"Rejected URL outside allowed domains: {url}")
            return UrlValidationResult.invalid(f"Domain '{hostname}' not in allowed list")

        return UrlValidationResult.valid()

    def _check_ip_address(self, hostname: str) -> UrlValidationResult | None:
        """
        Check if hostname is a private/internal IP address.

        Returns:
            UrlValidationResult if the IP is blocked, None if hostname is not
            an IP or is a public one
        """
        try:
            ip = ipaddress.ip_address(hostname)
        except ValueError:
            return None

        if ip.is_private:
            return UrlValidationResult.invalid(f"Private IP address '{hostname}' not allowed")
        if ip.is_loopback:
            return UrlValidationResult.invalid(f"Loopback IP address '{hostname}' not allowed")
        if ip.is_link_local:
            return UrlValidationResult.invalid(f"Link-local IP address '{hostname}' not allowed")
        if ip.is_reserved:
            return UrlValidationResult.invalid(f"Reserved IP address '{hostname}' not allowed")
        return None

    def is_valid(self, url: str) -> bool:
        return self.validate(url).is_valid
