"""Error taxonomy for tenable-docs-mcp.

Every failure that crosses the tool boundary is a ``DocsError`` tagged with an
``ErrorKind``. The transport layer inspects ``error.kind`` rather than the
exception class, so the subclasses below are only convenience constructors.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Stable, machine-readable error codes."""

    VALIDATION = "VALIDATION_ERROR"
    NETWORK = "NETWORK_ERROR"
    PARSE = "PARSE_ERROR"
    SCRAPING = "SCRAPING_ERROR"
    CONVERSION = "CONVERSION_ERROR"
    SEARCH = "SEARCH_ERROR"
    RATE_LIMIT = "RATE_LIMIT_ERROR"
    UNKNOWN = "UNKNOWN_ERROR"


class DocsError(Exception):
    """
    Base error carrying a kind, a human message and optional details.

    Attributes:
        kind: Error kind (doubles as the payload ``code``)
        message: Human-readable message
        details: JSON-serializable extra context
    """

    default_kind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        details: Any = None,
        kind: Optional[ErrorKind] = None,
    ):
        super().__init__(message)
        self.kind = kind or self.default_kind
        self.message = message
        self.details = details

    @property
    def code(self) -> str:
        return self.kind.value

    def to_payload(self) -> dict[str, Any]:
        """Render as the structured error payload returned to clients."""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value}, message={self.message!r})"


class ValidationError(DocsError):
    """Malformed or out-of-range input."""

    default_kind = ErrorKind.VALIDATION


class NetworkError(DocsError):
    """Fetch failed: timeout, DNS, connection or unusable HTTP status."""

    default_kind = ErrorKind.NETWORK


class ParseError(DocsError):
    default_kind = ErrorKind.PARSE


class ScrapingError(DocsError):
    """Cleaning pipeline failed or a content guard tripped."""

    default_kind = ErrorKind.SCRAPING


class ConversionError(DocsError):
    """HTML to Markdown transform failed."""

    default_kind = ErrorKind.CONVERSION


class SearchError(DocsError):
    default_kind = ErrorKind.SEARCH


def wrap_error(exc: BaseException, kind: ErrorKind, message: str) -> DocsError:
    """
    Wrap an arbitrary exception into a DocsError of the given kind.

    Recognized errors pass through untouched so their kind is preserved.

    Args:
        exc: The exception that was raised
        kind: Kind to assign when exc is not already a DocsError
        message: Message for the wrapping error

    Returns:
        A DocsError (either exc itself or a new wrapper)
    """
    if isinstance(exc, DocsError):
        return exc
    return DocsError(message, details={"error": str(exc)}, kind=kind)
