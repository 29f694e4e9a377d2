"""Base classes for the page-read pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from ..errors import DocsError, ErrorKind, wrap_error

logger = logging.getLogger(__name__)


@dataclass
class PageContext:
    """
    State for reading a single page, accumulated as it moves through the
    pipeline.

    Attributes:
        url: The URL requested by the caller
        timeout: Per-call fetch timeout override
        max_content_length: Per-call markup length limit
        final_url: URL actually served (after redirects or fallback)
        status_code: HTTP status of the last fetch
        html: Page markup (raw, then cleaned)
        title: Page title
        markdown: Converted content
        word_count: Words in the converted content
        notice: Text placed above the content (set when a fallback is served)
        is_fallback: True if the requested page was not the one served
        complete: If True, remaining steps are skipped
    """

    url: str
    timeout: Optional[float] = None
    max_content_length: Optional[int] = None

    final_url: Optional[str] = None
    status_code: Optional[int] = None
    html: Optional[str] = None
    title: Optional[str] = None
    markdown: Optional[str] = None
    word_count: int = 0

    notice: Optional[str] = None
    is_fallback: bool = False
    complete: bool = False
    steps_run: list[str] = field(default_factory=list)


@runtime_checkable
class ReadStep(Protocol):
    """
    Protocol for pipeline steps.

    Error Handling Contract:
    - To finish early with a usable result: set ctx.complete = True
    - For failures: raise, preferably a DocsError of the right kind
    - The pipeline wraps any other exception as a scraping error

    Example implementation:
        class GuardStep:
            name = "guard"

            async def execute(self, ctx: PageContext) -> PageContext:
                if ctx.status_code >= 400:
                    raise NetworkError(f"HTTP {ctx.status_code}")
                return ctx
    """

    name: str

    async def execute(self, ctx: PageContext) -> PageContext:
        """
        Execute this pipeline step.

        Args:
            ctx: The page context with accumulated state

        Returns:
            The (possibly modified) page context
        """
        ...


@dataclass
class ReadPipeline:
    """
    Pipeline reading a single page through an ordered list of steps.

    Steps run in order until one sets ctx.complete. A step that raises stops
    the pipeline; the error propagates as a DocsError.

    Example:
        pipeline = ReadPipeline(steps=[
            FetchStep(http_client),
            NotFoundFallbackStep(http_client, fallback_url),
            StatusGuardStep(),
            TitleStep(),
            CleanStep(),
            ConvertStep(),
        ])
        ctx = await pipeline.execute(url)
    """

    steps: list[ReadStep]

    async def execute(
        self,
        url: str,
        timeout: Optional[float] = None,
        max_content_length: Optional[int] = None,
    ) -> PageContext:
        """
        Execute the pipeline for a URL.

        Args:
            url: The (validated) URL to read
            timeout: Optional fetch timeout override
            max_content_length: Optional markup length limit

        Returns:
            PageContext with title, markdown and word_count populated

        Raises:
            DocsError: Whatever a step raised; unknown exceptions are wrapped
                as SCRAPING_ERROR
        """
        ctx = PageContext(url=url, timeout=timeout, max_content_length=max_content_length)

        for step in self.steps:
            if ctx.complete:
                break

            try:
                ctx = await step.execute(ctx)
            except DocsError as e:
                logger.debug(f"Step {step.name} failed for {url}: {e!r}")
                raise
            except Exception as e:
                logger.debug(f"Step {step.name} failed for {url}: {e!r}")
                raise wrap_error(e, ErrorKind.SCRAPING, f"Failed to read page at {url}") from e
            ctx.steps_run.append(step.name)

        return ctx

    def add_step(self, step: ReadStep) -> ReadPipeline:
        """Add a step to the pipeline (fluent API)."""
        self.steps.append(step)
        return self
