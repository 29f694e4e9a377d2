"""Title extraction, cleaning and Markdown conversion steps."""

import logging
from typing import Optional

from ...conversion.cleaner import CleaningOptions
from ...conversion.markdown import HtmlToMarkdown, clean_markdown
from ...conversion.metadata import extract_title
from ...conversion.preserver import clean_html_preserving_code_blocks
from ...errors import DocsError, ScrapingError
from ..base import PageContext

logger = logging.getLogger(__name__)


class TitleStep:
    """Read the title from the raw markup, before cleaning drops the head."""

    name = "title"

    async def execute(self, ctx: PageContext) -> PageContext:
        ctx.title = extract_title(ctx.html or "")
        return ctx


class CleanStep:
    """Narrow the markup to its main content, leaving code samples intact."""

    name = "clean"

    def __init__(self, options: Optional[CleaningOptions] = None) -> None:
        self._options = options

    async def execute(self, ctx: PageContext) -> PageContext:
        try:
            ctx.html = clean_html_preserving_code_blocks(ctx.html or "", self._options)
        except Exception as e:
            raise ScrapingError("Failed to clean HTML", {"url": ctx.url, "error": str(e)}) from e
        return ctx


class ConvertStep:
    """
    Convert cleaned markup to Markdown.

    Populates ctx.markdown and ctx.word_count. The word count is taken before
    the final tidy-up; any fallback notice goes above the content.

    Example:
        step = ConvertStep(HtmlToMarkdown(ConversionOptions(heading_style="setext")))
        ctx = await step.execute(ctx)
    """

    name = "convert"

    def __init__(self, converter: Optional[HtmlToMarkdown] = None) -> None:
        self._converter = converter or HtmlToMarkdown()

    async def execute(self, ctx: PageContext) -> PageContext:
        try:
            result = self._converter.convert_with_stats(ctx.html or "", base_url=ctx.final_url or ctx.url)
        except DocsError:
            raise
        except Exception as e:
            raise ScrapingError("Failed to process page content", {"url": ctx.url, "error": str(e)}) from e

        markdown = clean_markdown(result.markdown)
        if ctx.notice:
            markdown = f"> {ctx.notice}\n\n{markdown}" if markdown else f"> {ctx.notice}"

        ctx.markdown = markdown
        ctx.word_count = result.word_count
        logger.debug(f"Converted {ctx.url} to {len(markdown)} characters of Markdown")
        return ctx
