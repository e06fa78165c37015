# =============================================================================
# core/registry.py  —  Tool Contracts
# =============================================================================
#
# The two operations an agent can invoke, with the names, descriptions and
# argument schemas it will see when it lists the server's tools.
#
# The LLM reads the description to decide WHEN to call a tool, and the
# schema to know WHAT to pass.  tools/mcp_server.py registers its functions
# using these exact names and descriptions.
# =============================================================================

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: Mapping[str, Any]


def _string_arg_schema(arg: str, description: str) -> Mapping[str, Any]:
    return MappingProxyType({
        "type": "object",
        "properties": MappingProxyType({
            arg: MappingProxyType({"type": "string", "description": description}),
        }),
        "required": (arg,),
    })


SEARCH_TOOL = ToolDescriptor(
    name="search",
    description="Tool to perform search queries using Glean API",
    input_schema=_string_arg_schema("query", "The query to perform retrieval on"),
)

CHAT_TOOL = ToolDescriptor(
    name="chat",
    description="Tool to interact with Glean's AI chat assistant using Glean API",
    input_schema=_string_arg_schema("message", "The message to send to the chat assistant"),
)

TOOLS: tuple[ToolDescriptor, ...] = (SEARCH_TOOL, CHAT_TOOL)


def get_tool(name: str) -> Optional[ToolDescriptor]:
    """Look up a tool by name; None if the server does not offer it."""
    for tool in TOOLS:
        if tool.name == name:
            return tool
    return None


def argument_description(tool: ToolDescriptor, arg: str) -> str:
    return tool.input_schema["properties"][arg]["description"]
