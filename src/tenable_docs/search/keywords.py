"""Keyword extraction for indexing and querying."""

import re
from urllib.parse import urlparse

STOPWORDS = frozenset({"and", "the", "for", "with", "api"})
MIN_KEYWORD_LENGTH = 3

_NON_WORD = re.compile(r"[^\w\s-]")
_PATH_SEPARATORS = re.compile(r"[/_-]+")


def extract_keywords(text: str) -> set[str]:
    """
    Turn free text into a set of normalized search tokens.

    Lowercases, strips punctuation (hyphens survive), splits on whitespace and
    drops short tokens and stopwords.

    Example:
        >>> sorted(extract_keywords("Scan the Assets, with API!"))
        ['assets', 'scan']
    """
    if not text:
        return set()
    cleaned = _NON_WORD.sub("", text.lower())
    return {
        word
        for word in cleaned.split()
        if len(word) >= MIN_KEYWORD_LENGTH and word not in STOPWORDS
    }


def extract_url_keywords(url: str) -> set[str]:
    """
    Extract keywords from a URL path.

    Path separators, hyphens and underscores become word breaks.

    Example:
        >>> sorted(extract_url_keywords("https://developer.tenable.com/reference/vm-scans_list"))
        ['list', 'reference', 'scans']
    """
    try:
        path = urlparse(url).path
    except ValueError:
        return set()
    return extract_keywords(_PATH_SEPARATORS.sub(" ", path))


def title_from_url(url: str) -> str:
    """Derive a human-readable title from the last URL path segment."""
    try:
        parts = [part for part in urlparse(url).path.split("/") if part]
    except ValueError:
        return "Documentation"

    if not parts:
        return "Documentation"

    words = parts[-1].replace("-", " ").replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words) or "Documentation"
