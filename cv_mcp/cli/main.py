"""CLI entry point for the CV tools MCP server."""

import logging

import click
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@click.group()
def cli() -> None:
    """CV tools MCP server — serve over stdio, list tools, ask locally."""
    load_dotenv()


# Import and register commands after cli is defined to avoid circular imports.
from cv_mcp.cli.commands import ask, serve, tools  # noqa: E402

cli.add_command(serve)
cli.add_command(tools)
cli.add_command(ask)
