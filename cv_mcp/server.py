"""MCP server wiring and process entry point.

stdout carries the JSON-RPC stream, so all logging and diagnostics go to
stderr.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

from dotenv import load_dotenv
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from cv_mcp.answering.engine import build_answer_engine
from cv_mcp.config import LOG_DATEFMT, LOG_FORMAT, Settings, StartupMisconfiguration
from cv_mcp.document.cache import DocumentCache
from cv_mcp.mail.sender import NotificationSender
from cv_mcp.mail.smtp_transport import SmtpMailTransport
from cv_mcp.tools.dispatcher import ToolDispatcher
from cv_mcp.tools.registry import list_mcp_tools
from cv_mcp.tools.types import ToolInvocation

logger = logging.getLogger(__name__)

SERVER_NAME = "busy-cv-email-server"
SERVER_VERSION = "1.0.0"


def build_dispatcher(settings: Settings, *, with_mail: bool = True) -> ToolDispatcher:
    """Wire the document cache, answer engine and notification sender."""
    sender: NotificationSender | None = None
    if with_mail:
        transport = SmtpMailTransport(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.email_user,
            password=settings.email_pass,
            starttls=settings.smtp_starttls,
        )
        sender = NotificationSender(transport, sender=settings.email_user)

    return ToolDispatcher(
        document_cache=DocumentCache(settings.cv_path),
        answer_engine=build_answer_engine(settings),
        notification_sender=sender,
    )


def build_server(dispatcher: ToolDispatcher) -> Server:
    """Register list-tools and call-tool handlers on a low-level MCP server."""
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return list_mcp_tools()

    # SDK-side schema validation is off so malformed arguments reach the
    # dispatcher and come back in the same text envelope as other failures.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(
        name: str, arguments: dict[str, Any] | None
    ) -> list[types.TextContent]:
        result = await dispatcher.dispatch(ToolInvocation(name=name, arguments=arguments or {}))
        return result.content

    return server


async def serve(settings: Settings) -> None:
    """Run the MCP server over stdio until the client disconnects."""
    server = build_server(build_dispatcher(settings))
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Busy MCP Server is running on stdio...")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
    )


def main() -> None:
    """Start the MCP server. Called by ``python -m cv_mcp`` and ``cv-mcp serve``.

    Exits with status 1 when mail credentials are missing or on any
    uncaught top-level failure.
    """
    load_dotenv()

    try:
        settings = Settings.from_env()
    except StartupMisconfiguration as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted — goodbye")
    except Exception as exc:  # noqa: BLE001
        logger.critical("Fatal error: %s", exc, exc_info=True)
        sys.exit(1)
