"""Content-length guard."""

from ...errors import ScrapingError
from ..base import PageContext


class ContentLengthStep:
    """
    Reject markup longer than a limit.

    The per-call ``ctx.max_content_length`` wins over the configured default;
    with neither set the step does nothing.
    """

    name = "content_length"

    def __init__(self, max_content_length: int | None = None) -> None:
        self._default_limit = max_content_length

    async def execute(self, ctx: PageContext) -> PageContext:
        limit = ctx.max_content_length or self._default_limit
        length = len(ctx.html or "")
        if limit and length > limit:
            raise ScrapingError(
                f"Page content exceeds maximum length of {limit} characters",
                {"url": ctx.url, "actualLength": length, "maxLength": limit},
            )
        return ctx
