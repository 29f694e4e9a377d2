"""Substitute content for pages that return 404."""

import logging

from ...conversion.markdown import count_words
from ...errors import DocsError
from ...http.protocols import HttpClient
from ..base import PageContext

logger = logging.getLogger(__name__)

NOT_FOUND_TITLE = "Page Not Found"


def not_found_notice(url: str) -> str:
    return f"The requested page {url} was not found (HTTP 404)."


def not_found_document(url: str, fallback_url: str) -> str:
    """Static guidance served when neither the page nor the fallback loads."""
    return (
        f"# {NOT_FOUND_TITLE}\n\n"
        f"{not_found_notice(url)}\n\n"
        "The page may have moved or been renamed. You can:\n\n"
        "- Use the `search_docs` tool to find the page by topic\n"
        f"- Browse the API reference at {fallback_url}\n"
        "- Check the URL for typos"
    )


class NotFoundFallbackStep:
    """
    Pipeline step that replaces a 404 with something useful.

    On a 404, fetches the fallback page (the root API reference) and lets the
    remaining steps convert it, with a notice naming the missing URL placed
    above the content. If the fallback fails too, finishes the pipeline with a
    static guidance document.
    """

    name = "not_found_fallback"

    def __init__(self, http_client: HttpClient, fallback_url: str) -> None:
        """
        Initialize the fallback step.

        Args:
            http_client: HTTP client implementing HttpClient protocol
            fallback_url: Page to serve instead of a missing one
        """
        self._client = http_client
        self._fallback_url = fallback_url

    async def execute(self, ctx: PageContext) -> PageContext:
        if ctx.status_code != 404:
            return ctx

        logger.info(f"Page not found, serving fallback: {ctx.url}")
        ctx.is_fallback = True
        ctx.notice = not_found_notice(ctx.url)

        try:
            response = await self._client.get(self._fallback_url, timeout=ctx.timeout)
        except DocsError as e:
            logger.warning(f"Fallback page {self._fallback_url} failed: {e.message}")
            return self._guidance(ctx)

        if not response.ok:
            logger.warning(f"Fallback page {self._fallback_url} returned HTTP {response.status_code}")
            return self._guidance(ctx)

        ctx.status_code = response.status_code
        ctx.final_url = response.url or self._fallback_url
        ctx.html = response.text
        return ctx

    def _guidance(self, ctx: PageContext) -> PageContext:
        ctx.final_url = ctx.url
        ctx.title = NOT_FOUND_TITLE
        ctx.markdown = not_found_document(ctx.url, self._fallback_url)
        ctx.word_count = count_words(ctx.markdown)
        ctx.complete = True
        return ctx
