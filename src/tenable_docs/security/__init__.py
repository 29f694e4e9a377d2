"""Domain policy for tenable_docs."""

from .url_validator import UrlValidationResult, UrlValidator, host_matches

__all__ = ["UrlValidator", "UrlValidationResult", "host_matches"]
