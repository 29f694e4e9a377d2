"""MCP stdio server exposing the search_docs and read_page tools.

This is the edge layer that:
1. Checks tool arguments
2. Calls the tool operations
3. Renders results and errors as JSON text content
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .cache.lru import LRUCache
from .errors import DocsError, ErrorKind, ValidationError
from .http.client import AsyncHttpClient
from .models.config import SearchConfig, ServerConfig
from .models.documents import ReadPageOutput
from .search.engine import IndexSource, SearchEngine
from .search.indexer import IndexBuilder, LinkExtractor
from .tools.read import PageReader
from .tools.search import search_docs

logger = logging.getLogger(__name__)

SERVER_NAME = "tenable-docs-mcp"

TOOLS: tuple[types.Tool, ...] = (
    types.Tool(
        name="search_docs",
        description=(
            "Search Tenable Developer documentation for relevant pages.\n"
            "This tool helps find documentation about Tenable APIs, recipes, and examples.\n"
            "Returns URLs, titles, and descriptions of relevant documentation pages."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": (
                        "Search terms to find relevant documentation "
                        '(e.g., "vulnerability management api", "scan targets", "pytenable")'
                    ),
                    "minLength": 2,
                    "maxLength": 200,
                },
            },
            "required": ["query"],
        },
    ),
    types.Tool(
        name="read_page",
        description=(
            "Download a Tenable documentation page, clean the HTML, and convert it to readable Markdown.\n"
            "This tool fetches the full content of a documentation page and returns it in Markdown format.\n"
            "Preserves code blocks, examples, and technical formatting."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": (
                        "Full URL to the Tenable documentation page "
                        '(e.g., "https://developer.tenable.com/reference/vulnerability-management-api")'
                    ),
                    "format": "uri",
                },
            },
            "required": ["url"],
        },
    ),
)


@dataclass(frozen=True)
class ToolResponse:
    """Outcome of one tool call, before it is wrapped for the protocol."""

    payload: dict[str, Any]
    is_error: bool = False

    def to_json(self) -> str:
        return json.dumps(self.payload, indent=2, ensure_ascii=False)

    def to_call_result(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=self.to_json())],
            isError=self.is_error,
        )


def _require_string(arguments: Mapping[str, Any], name: str) -> Any:
    value = arguments.get(name)
    if not value:
        raise ValidationError(f"Missing required parameter: {name}")
    return value


class ToolDispatcher:
    """
    Routes tool calls to the search and read operations.

    ``dispatch`` never raises: every failure becomes an error payload
    ``{"error": true, "code", "message", "details"}``.

    Example:
        dispatcher = ToolDispatcher(engine, reader)
        response = await dispatcher.dispatch("search_docs", {"query": "scan export"})
        print(response.to_json())
    """

    def __init__(
        self,
        engine: SearchEngine,
        reader: PageReader,
        search_config: Optional[SearchConfig] = None,
    ):
        self.engine = engine
        self.reader = reader
        self._search_config = search_config or SearchConfig()

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResponse:
        """
        Run a tool and render its outcome.

        Args:
            name: Tool name
            arguments: Tool arguments (may be None)

        Returns:
            ToolResponse with the success or error payload
        """
        arguments = arguments or {}
        try:
            match name:
                case "search_docs":
                    payload = self._search(arguments)
                case "read_page":
                    payload = await self._read(arguments)
                case _:
                    raise DocsError(f"Unknown tool: {name}", {"tool": name}, kind=ErrorKind.UNKNOWN)
        except DocsError as e:
            self._log_failure(name, e)
            return ToolResponse(e.to_payload(), is_error=True)
        except Exception as e:
            logger.exception(f"Unexpected error in tool {name}")
            error = DocsError("An unexpected error occurred", str(e) or type(e).__name__)
            return ToolResponse(error.to_payload(), is_error=True)

        return ToolResponse(payload)

    def _search(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        query = _require_string(arguments, "query")
        results = search_docs(query, self.engine, self._search_config)
        return {
            "query": query,
            "results": [result.to_dict() for result in results],
            "count": len(results),
        }

    async def _read(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        url = _require_string(arguments, "url")
        page = await self.reader.read_page(url)
        return page.to_dict()

    def _log_failure(self, name: str, error: DocsError) -> None:
        message = f"Tool {name} failed [{error.code}]: {error.message}"
        match error.kind:
            case ErrorKind.VALIDATION:
                logger.info(message)
            case ErrorKind.NETWORK | ErrorKind.RATE_LIMIT:
                logger.warning(message)
            case _:
                logger.error(message)


def build_server(dispatcher: ToolDispatcher, index_source: Optional[IndexSource] = None) -> Server:
    """
    Wire a dispatcher into an MCP low-level server.

    Args:
        dispatcher: Tool dispatcher
        index_source: If given, the search index is built from it when the
            server starts, before any request is handled

    Returns:
        Configured Server (not yet running)
    """

    @asynccontextmanager
    async def lifespan(server: Server) -> AsyncIterator[dict[str, Any]]:
        if index_source is not None:
            await dispatcher.engine.initialize(index_source)
            logger.info(f"Search index ready with {len(dispatcher.engine.index)} entries")
        yield {}

    server: Server = Server(SERVER_NAME, version=__version__, lifespan=lifespan)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return list(TOOLS)

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        response = await dispatcher.dispatch(name, arguments)
        return response.to_call_result()

    return server


async def serve(config: Optional[ServerConfig] = None) -> None:
    """
    Run the MCP server over stdio until the client disconnects.

    Args:
        config: Server configuration (uses defaults if None)
    """
    config = config or ServerConfig()

    async with AsyncHttpClient(config.network) as client:
        engine = SearchEngine(max_results=config.index.max_results)
        cache: Optional[LRUCache[ReadPageOutput]] = None
        if config.cache.enabled:
            cache = LRUCache(max_size=config.cache.max_size, ttl=config.cache.ttl_seconds)

        reader = PageReader(client, config.read, cache)
        dispatcher = ToolDispatcher(engine, reader, config.search)
        builder = IndexBuilder(
            client,
            config.index.seed_pages,
            LinkExtractor(config.index.base_origin, config.index.permitted_domain),
        )
        server = build_server(dispatcher, index_source=builder)

        logger.info(f"{SERVER_NAME} v{__version__} starting on stdio")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
        logger.info("Server shutdown complete")
