"""Firecrawl MCP CLI Entry Point.

This module provides the command-line interface for running the MCP server
and for invoking tools directly from a shell.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import httpx
import structlog
import typer
from mcp.shared.exceptions import McpError

from firecrawl_mcp.client.http import create_http_client
from firecrawl_mcp.client.retry import DEFAULT_RETRY_CONFIG
from firecrawl_mcp.core.config import Settings, load_settings
from firecrawl_mcp.core.exceptions import ConfigurationError
from firecrawl_mcp.server.app import serve as serve_stdio
from firecrawl_mcp.server.dispatcher import ToolDispatcher
from firecrawl_mcp.tools import ExtractTool, build_tools
from firecrawl_mcp.tools.extract import DEFAULT_BATCH_DELAY_MS, DEFAULT_BATCH_SIZE

log = structlog.get_logger()

# Main app
app = typer.Typer(
    name="firecrawl-mcp",
    help="Firecrawl MCP server - web scraping, search and crawl tools over MCP",
    no_args_is_help=True,
)


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog to write to stderr.

    stdout carries the MCP stdio protocol and must stay clean.
    """
    renderer: Any
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _load(ctx: typer.Context) -> Settings:
    """Load settings from the global options and configure logging.

    Raises:
        typer.Exit: If configuration is missing or invalid.
    """
    options = ctx.obj or {}
    try:
        settings = load_settings(
            config_path=options.get("config"),
            env_file=options.get("env_file"),
        )
        settings.retry_config()
    except ConfigurationError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)

    configure_logging(
        "DEBUG" if settings.debug else settings.log_level,
        settings.log_format,
    )
    return settings


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Path to YAML configuration file",
    ),
    env_file: Optional[Path] = typer.Option(
        None, "--env-file",
        help="Path to .env file (default: ./.env)",
    ),
) -> None:
    """Firecrawl MCP CLI."""
    if config is not None and not config.exists():
        typer.echo(f"Error: Config file '{config}' not found", err=True)
        raise typer.Exit(code=1)
    ctx.obj = {"config": config, "env_file": env_file}


@app.command()
def serve(ctx: typer.Context) -> None:
    """Run the MCP server on stdio."""
    settings = _load(ctx)
    try:
        asyncio.run(serve_stdio(settings))
    except KeyboardInterrupt:
        log.info("server_interrupted")


@app.command("tools")
def list_tools() -> None:
    """Print the tool definitions as JSON."""
    async def _definitions() -> List[dict]:
        async with httpx.AsyncClient() as client:
            return [
                tool.get_definition().to_dict()
                for tool in build_tools(client, DEFAULT_RETRY_CONFIG)
            ]

    typer.echo(json.dumps(asyncio.run(_definitions()), indent=2))


@app.command()
def call(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Tool name, e.g. scrape_url"),
    args: str = typer.Option("{}", "--args", "-a", help="Tool arguments as a JSON object"),
) -> None:
    """Invoke one tool and print its text output."""
    try:
        arguments = json.loads(args)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: --args is not valid JSON: {e}", err=True)
        raise typer.Exit(code=1)

    settings = _load(ctx)

    async def _call() -> dict:
        async with create_http_client(settings) as client:
            dispatcher = ToolDispatcher(build_tools(client, settings.retry_config()))
            return await dispatcher.call_tool(name, arguments)

    try:
        result = asyncio.run(_call())
    except McpError as e:
        typer.echo(f"Error ({e.error.code}): {e.error.message}", err=True)
        raise typer.Exit(code=1)

    for block in result["content"]:
        typer.echo(block["text"])


@app.command("extract-batch")
def extract_batch(
    ctx: typer.Context,
    urls: List[str] = typer.Argument(..., help="URLs to extract from"),
    prompt: Optional[str] = typer.Option(None, "--prompt", "-p", help="Extraction guidance prompt"),
    batch_size: int = typer.Option(DEFAULT_BATCH_SIZE, "--batch-size", min=1, help="Concurrent requests per batch"),
    delay_ms: int = typer.Option(DEFAULT_BATCH_DELAY_MS, "--delay-ms", min=0, help="Pause between batches in milliseconds"),
) -> None:
    """Extract structured data from many URLs in rate-limited batches."""
    settings = _load(ctx)

    async def _run() -> List[dict]:
        async with create_http_client(settings) as client:
            tool = ExtractTool(client, settings.retry_config())
            results = await tool.extract_batch(
                urls,
                prompt=prompt,
                batch_size=batch_size,
                delay_ms=delay_ms,
            )
            return [r.to_dict() for r in results]

    results = asyncio.run(_run())
    typer.echo(json.dumps(results, indent=2, ensure_ascii=False))

    if any("error" in r for r in results):
        raise typer.Exit(code=2)


if __name__ == "__main__":  # pragma: no cover
    app()
