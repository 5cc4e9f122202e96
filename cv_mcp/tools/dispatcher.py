"""Tool dispatcher — validates invocations, routes them, and contains failures."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from cv_mcp.answering.engine import AnswerEngine
from cv_mcp.document.cache import DocumentCache
from cv_mcp.mail.sender import NotificationSender
from cv_mcp.tools.registry import ASK_ABOUT_CV, SEND_EMAIL, TOOL_NAMES
from cv_mcp.tools.types import (
    AskRequest,
    SendEmailRequest,
    ToolError,
    ToolInvocation,
    ToolResult,
)

logger = logging.getLogger(__name__)


class UnknownTool(ToolError):
    """Raised when the requested tool name is not in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArguments(ToolError):
    """Raised when a required argument is missing or not a string."""


def _require_strings(
    tool: str, arguments: Mapping[str, Any], names: tuple[str, ...]
) -> dict[str, str]:
    """Return the named arguments, or raise InvalidArguments listing every bad one."""
    missing = [n for n in names if n not in arguments or arguments[n] is None]
    mistyped = [
        n for n in names if n not in missing and not isinstance(arguments[n], str)
    ]
    if missing or mistyped:
        problems: list[str] = []
        if missing:
            problems.append(f"missing {', '.join(missing)}")
        if mistyped:
            problems.append(f"expected string for {', '.join(mistyped)}")
        raise InvalidArguments(f"Invalid arguments for {tool}: {'; '.join(problems)}")
    return {n: arguments[n] for n in names}


def parse_ask_request(arguments: Mapping[str, Any]) -> AskRequest:
    values = _require_strings(ASK_ABOUT_CV, arguments, ("question",))
    return AskRequest(question=values["question"])


def parse_send_email_request(arguments: Mapping[str, Any]) -> SendEmailRequest:
    values = _require_strings(SEND_EMAIL, arguments, ("recipient", "subject", "body"))
    return SendEmailRequest(**values)


class ToolDispatcher:
    """Routes a ToolInvocation to the matching component.

    ``dispatch`` never raises for tool-domain errors: every exception from
    validation or a downstream component becomes a ToolResult whose text
    starts with ``Error:``.

    Usage::

        dispatcher = ToolDispatcher(cache, engine, sender)
        result = await dispatcher.dispatch(ToolInvocation("ask_about_cv", {"question": "..."}))
    """

    def __init__(
        self,
        document_cache: DocumentCache,
        answer_engine: AnswerEngine,
        notification_sender: NotificationSender | None,
    ) -> None:
        self._document_cache = document_cache
        self._answer_engine = answer_engine
        self._notification_sender = notification_sender

    async def dispatch(self, invocation: ToolInvocation) -> ToolResult:
        try:
            return await self._route(invocation)
        except ToolError as exc:
            logger.warning("Tool %r failed: %s", invocation.name, exc)
            return ToolResult.of_error(str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.error("Unexpected error in tool %r: %s", invocation.name, exc, exc_info=True)
            return ToolResult.of_error(str(exc) or type(exc).__name__)

    async def _route(self, invocation: ToolInvocation) -> ToolResult:
        if invocation.name not in TOOL_NAMES:
            raise UnknownTool(invocation.name)

        arguments = invocation.arguments or {}
        if invocation.name == ASK_ABOUT_CV:
            return await self._ask_about_cv(parse_ask_request(arguments))
        if invocation.name == SEND_EMAIL:
            return await self._send_email(parse_send_email_request(arguments))

        # Registered but not routed: registry and dispatcher are out of sync.
        raise UnknownTool(invocation.name)

    async def _ask_about_cv(self, request: AskRequest) -> ToolResult:
        text = await self._document_cache.get_text()
        answer = await self._answer_engine.answer(request.question, text)
        return ToolResult.of_text(answer)

    async def _send_email(self, request: SendEmailRequest) -> ToolResult:
        if self._notification_sender is None:
            raise ToolError("Email sending is not configured")
        delivery_id = await self._notification_sender.send(
            request.recipient, request.subject, request.body
        )
        return ToolResult.of_text(f"Email sent! ID: {delivery_id}")
