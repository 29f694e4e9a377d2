"""HTTP client for tenable_docs."""

from .client import AsyncHttpClient
from .protocols import HttpClient, HttpResponse, decode_content

__all__ = [
    "AsyncHttpClient",
    "HttpClient",
    "HttpResponse",
    "decode_content",
]
