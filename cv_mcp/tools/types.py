"""Data types shared by the tool registry, dispatcher and server."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from mcp.types import TextContent

#: Prefix that marks a ToolResult as a captured failure.
ERROR_PREFIX = "Error: "


class ToolError(Exception):
    """Base class for failures that are reported back inside a ToolResult."""


# ── Wire-level values ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ToolDescriptor:
    """Static description of one tool, as returned by a listing request."""

    name: str
    description: str
    input_schema: dict[str, Any]


@dataclass(frozen=True)
class ToolInvocation:
    """One inbound call-tool request. Arguments are unvalidated."""

    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolResult:
    """Uniform outcome envelope for every tool call.

    Success and captured failure share this shape; a failure is only
    distinguishable by its text starting with ``ERROR_PREFIX``.
    """

    content: list[TextContent]

    @classmethod
    def of_text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(type="text", text=text)])

    @classmethod
    def of_error(cls, message: str) -> "ToolResult":
        return cls.of_text(f"{ERROR_PREFIX}{message}")

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    @property
    def is_error(self) -> bool:
        return self.text.startswith(ERROR_PREFIX)


# ── Typed requests (built at the dispatch boundary) ────────────────────────────


@dataclass(frozen=True)
class AskRequest:
    question: str


@dataclass(frozen=True)
class SendEmailRequest:
    recipient: str
    subject: str
    body: str
