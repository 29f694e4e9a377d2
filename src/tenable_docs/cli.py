"""Command-line interface for tenable-docs-mcp."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from . import __version__
from .errors import DocsError
from .http.client import AsyncHttpClient
from .logging_config import setup_logging
from .models.config import ServerConfig
from .search.engine import SearchEngine
from .search.indexer import IndexBuilder, LinkExtractor
from .tools.read import PageReader
from .tools.search import search_docs


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="tenable-docs-mcp",
        description="MCP server for searching and reading Tenable developer documentation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the MCP server on stdio (default)
  tenable-docs-mcp

  # Search the documentation from a terminal
  tenable-docs-mcp search "vulnerability export"

  # Read a page as Markdown
  tenable-docs-mcp read https://developer.tenable.com/reference/navigate
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="FILE",
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.add_parser("serve", help="Run the MCP server on stdio (default)")

    search_parser = subparsers.add_parser("search", help="Search the documentation")
    search_parser.add_argument("query", help="Search terms")

    read_parser = subparsers.add_parser("read", help="Read a documentation page as Markdown")
    read_parser.add_argument("url", help="Page URL")
    read_parser.add_argument(
        "--raw",
        action="store_true",
        help="Print plain Markdown instead of rendering it",
    )

    return parser


def load_config(args: argparse.Namespace) -> ServerConfig:
    """Build the server config from an optional YAML file plus CLI flags."""
    config = ServerConfig.from_yaml_file(args.config) if args.config else ServerConfig()

    updates: dict = {}
    if args.verbose:
        updates["log_level"] = "DEBUG"
    elif args.quiet:
        updates["log_level"] = "ERROR"
    if args.log_file:
        updates["log_file"] = args.log_file

    return config.model_copy(update=updates) if updates else config


async def run_search(config: ServerConfig, query: str, console: Console) -> int:
    async with AsyncHttpClient(config.network) as client:
        engine = SearchEngine(max_results=config.index.max_results)
        await engine.initialize(
            IndexBuilder(
                client,
                config.index.seed_pages,
                LinkExtractor(config.index.base_origin, config.index.permitted_domain),
            )
        )
        results = search_docs(query, engine, config.search)

    table = Table(title=f"Results for {query!r}")
    table.add_column("Title", style="bold")
    table.add_column("URL", style="cyan")
    table.add_column("Description")
    for result in results:
        table.add_row(result.title, result.url, result.description)

    console.print(table)
    return 0


async def run_read(config: ServerConfig, url: str, raw: bool, console: Console) -> int:
    async with AsyncHttpClient(config.network) as client:
        page = await PageReader(client, config.read).read_page(url)

    if raw:
        print(page.content)
        return 0

    console.print(f"[bold blue]{page.title}[/bold blue]  ({page.word_count} words)")
    console.print(f"[dim]{page.url}[/dim]")
    console.print()
    console.print(Markdown(page.content))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    err_console = Console(stderr=True)

    try:
        config = load_config(args)
    except Exception as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(config.log_level, config.log_file)

    command = args.command or "serve"
    try:
        if command == "serve":
            from .server import serve

            asyncio.run(serve(config))
            return 0
        if command == "search":
            return asyncio.run(run_search(config, args.query, Console()))
        return asyncio.run(run_read(config, args.url, args.raw, Console()))
    except DocsError as e:
        err_console.print(f"[red]{e.code}:[/red] {e.message}")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
