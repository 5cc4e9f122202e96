"""CLI command implementations."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

import click
from rich import box
from rich.console import Console
from rich.table import Table

from cv_mcp.config import Settings, StartupMisconfiguration
from cv_mcp.server import build_dispatcher, configure_logging
from cv_mcp.server import main as server_main
from cv_mcp.tools.registry import ASK_ABOUT_CV, TOOLS, required_arguments
from cv_mcp.tools.types import ToolInvocation, ToolResult

logger = logging.getLogger(__name__)
console = Console(width=200)


@click.command()
def serve() -> None:
    """Run the MCP server over stdio."""
    server_main()


@click.command()
def tools() -> None:
    """List the tools this server exposes."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Required arguments")

    for tool in TOOLS:
        table.add_row(tool.name, tool.description, ", ".join(required_arguments(tool.name)))

    console.print(table)


@click.command()
@click.argument("question")
@click.option(
    "--cv",
    "cv_path",
    type=click.Path(),
    default=None,
    help="CV file to read (defaults to CV_PATH or ./assets/my-cv.pdf).",
)
def ask(question: str, cv_path: str | None) -> None:
    """Ask a question about the CV without starting the server."""
    configure_logging("WARNING")
    try:
        settings = Settings.from_env(require_mail=False)
    except StartupMisconfiguration as exc:
        raise click.ClickException(str(exc)) from exc

    if cv_path is not None:
        settings = replace(settings, cv_path=cv_path)

    result = asyncio.run(_ask_async(settings, question))
    if result.is_error:
        console.print(result.text, style="red", markup=False)
        raise SystemExit(1)
    console.print(result.text, markup=False)


async def _ask_async(settings: Settings, question: str) -> ToolResult:
    dispatcher = build_dispatcher(settings, with_mail=False)
    return await dispatcher.dispatch(
        ToolInvocation(name=ASK_ABOUT_CV, arguments={"question": question})
    )
