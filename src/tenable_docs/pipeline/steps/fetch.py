"""Fetching and HTTP status steps."""

import logging

from ...errors import NetworkError
from ...http.protocols import HttpClient
from ..base import PageContext

logger = logging.getLogger(__name__)


class FetchStep:
    """
    Pipeline step that fetches the requested page.

    Populates:
        ctx.html: Decoded page markup
        ctx.status_code: HTTP status code
        ctx.final_url: URL after redirects

    4xx responses are recorded, not raised; later steps decide what to do
    with them. Network failures raise NetworkError from the client.
    """

    name = "fetch"

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    async def execute(self, ctx: PageContext) -> PageContext:
        response = await self._client.get(ctx.url, timeout=ctx.timeout)

        ctx.status_code = response.status_code
        ctx.final_url = response.url or ctx.url
        ctx.html = response.text

        logger.debug(f"Fetched {ctx.url}: HTTP {response.status_code}, {len(response.content)} bytes")
        return ctx


class StatusGuardStep:
    """Fail on any HTTP error status that survived the fallback step."""

    name = "status_guard"

    async def execute(self, ctx: PageContext) -> PageContext:
        if ctx.status_code is not None and ctx.status_code >= 400:
            raise NetworkError(
                f"Failed to download page: HTTP {ctx.status_code}",
                {"url": ctx.url, "statusCode": ctx.status_code},
            )
        return ctx
