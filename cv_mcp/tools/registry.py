"""Static tool descriptors exposed on a list-tools request."""

from mcp import types

from cv_mcp.tools.types import ToolDescriptor

ASK_ABOUT_CV = "ask_about_cv"
SEND_EMAIL = "send_email"

#: Read-only registry. Schemas are documentation for callers; validation
#: happens in the dispatcher, not here.
TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=ASK_ABOUT_CV,
        description="Ask questions about my CV/Resume",
        input_schema={
            "type": "object",
            "properties": {
                "question": {
                    "type": "string",
                    "description": "Question about the CV",
                },
            },
            "required": ["question"],
        },
    ),
    ToolDescriptor(
        name=SEND_EMAIL,
        description="Send an email notification",
        input_schema={
            "type": "object",
            "properties": {
                "recipient": {"type": "string", "description": "Recipient email"},
                "subject": {"type": "string", "description": "Email subject"},
                "body": {"type": "string", "description": "Email body"},
            },
            "required": ["recipient", "subject", "body"],
        },
    ),
)

TOOL_NAMES: frozenset[str] = frozenset(tool.name for tool in TOOLS)


def get_descriptor(name: str) -> ToolDescriptor | None:
    """Return the descriptor for ``name``, or None if no such tool exists."""
    for tool in TOOLS:
        if tool.name == name:
            return tool
    return None


def required_arguments(name: str) -> list[str]:
    descriptor = get_descriptor(name)
    if descriptor is None:
        return []
    return list(descriptor.input_schema.get("required", []))


def list_mcp_tools() -> list[types.Tool]:
    """Convert the registry to the MCP SDK's Tool model."""
    return [
        types.Tool(
            name=tool.name,
            description=tool.description,
            inputSchema=tool.input_schema,
        )
        for tool in TOOLS
    ]
