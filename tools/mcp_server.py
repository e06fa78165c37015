# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (search + chat)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the FastMCP server that exposes Glean's "search" and "chat" to an
#   agent.  Each tool is a thin wrapper: it logs the call, hands it to
#   core/dispatch.py, logs the answer, and returns plain text.
#
# HOW IT WORKS (the flow):
#   1. The agent runtime lists our tools (names/descriptions from
#      core/registry.py) and picks one
#   2. It calls the tool by name over stdio
#   3. FastMCP validates the arguments and routes to the function below
#   4. GleanToolHandler makes ONE request to Glean and shapes the result
#   5. Error-flagged results are raised as ToolError, which FastMCP sends
#      back as {"content": [...], "isError": true}
#
# WHY A FACTORY (create_server) INSTEAD OF A MODULE-LEVEL SERVER?
#   The Glean settings are loaded once in main.py and passed in.  Tests build
#   a server around a fake HTTP client the same way.
#
# RUNNING THIS SERVER:
#   python main.py             (or the glean-mcp-server console script)
# =============================================================================

import logging
import sys
from typing import Annotated, Any, Mapping, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext
from pydantic import Field

from core.config import GleanConfig
from core.dispatch import GleanToolHandler
from core.glean_client import GleanClient
from core.models import ToolResult
from core.registry import CHAT_TOOL, SEARCH_TOOL, argument_description, get_tool

SERVER_NAME = "glean-server"
SERVER_VERSION = "0.1.0"

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to the agent over STDOUT.
# Anything we printed to stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status messages
#     - RED for error-flagged results
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

_PREVIEW_CHARS = 300

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _preview(text: str) -> str:
    if len(text) <= _PREVIEW_CHARS:
        return text
    return text[:_PREVIEW_CHARS] + "…"


def _log_request(tool_name: str, arguments: Mapping[str, Any]) -> None:
    """Log an incoming tool call and its (shortened) arguments in CYAN."""
    shown = ", ".join(f"{key}={_preview(str(value))!r}" for key, value in arguments.items())
    logging.info(f"{_CYAN}{tool_name}({shown}){_RESET}")


def _log_status(tool_name: str, message: str) -> None:
    """Log a step inside a tool call in YELLOW."""
    logging.info(f"{_YELLOW}  → [{tool_name}] {message}{_RESET}")


def _log_response(tool_name: str, result: ToolResult) -> ToolResult:
    """Log a preview of the tool response, then return it."""
    color = _RED if result.is_error else _GREEN
    logging.info(f"{color}  ← {tool_name} response ({len(result.text)} chars): {_preview(result.text)}{_RESET}")
    return result


def _unwrap(result: ToolResult) -> str:
    # FastMCP marks the protocol result isError=True when a tool raises ToolError
    if result.is_error:
        raise ToolError(result.text)
    return result.text


# =============================================================================
# Unknown tool names
# =============================================================================
# FastMCP would reject an unregistered name on its own, with its own wording.
# This middleware runs first and answers through GleanToolHandler instead, so
# the caller gets "Unknown tool: {name}" (isError: true) and Glean is never
# contacted.
# =============================================================================
class UnknownToolMiddleware(Middleware):
    def __init__(self, handler: GleanToolHandler):
        self.handler = handler

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        if get_tool(name) is None:
            arguments = context.message.arguments or {}
            _log_request(name, arguments)
            result = _log_response(name, self.handler.handle(name, arguments))
            raise ToolError(result.text)
        return await call_next(context)


# =============================================================================
# Server factory
# =============================================================================
def create_server(config: GleanConfig, client: Optional[GleanClient] = None) -> FastMCP:
    """Create the FastMCP server with the search and chat tools registered.

    Args:
        config: Glean settings, loaded once at startup.
        client: Optional HTTP client override (tests pass a fake).

    Returns:
        A FastMCP server ready for ``run()``.
    """
    handler = GleanToolHandler(config, client=client)
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)
    mcp.add_middleware(UnknownToolMiddleware(handler))

    # -------------------------------------------------------------------------
    # TOOL 1: search — raw Glean search results, passed through as JSON text
    # -------------------------------------------------------------------------
    @mcp.tool(name=SEARCH_TOOL.name, description=SEARCH_TOOL.description)
    def search(
        query: Annotated[str, Field(description=argument_description(SEARCH_TOOL, "query"))],
    ) -> str:
        _log_request(SEARCH_TOOL.name, {"query": query})
        result = handler.handle(SEARCH_TOOL.name, {"query": query})
        return _unwrap(_log_response(SEARCH_TOOL.name, result))

    # -------------------------------------------------------------------------
    # TOOL 2: chat — ask Glean's assistant, get back text plus a source list
    # -------------------------------------------------------------------------
    # A 200 OK reply with a malformed body raises ChatResponseError.  We let it
    # escape: FastMCP reports it to the caller as an error result, separate
    # from the "Error: {status} - {body}" path for HTTP failures.
    @mcp.tool(name=CHAT_TOOL.name, description=CHAT_TOOL.description)
    def chat(
        message: Annotated[str, Field(description=argument_description(CHAT_TOOL, "message"))],
    ) -> str:
        _log_request(CHAT_TOOL.name, {"message": message})
        result = handler.handle(CHAT_TOOL.name, {"message": message})
        if not result.is_error:
            _log_status(CHAT_TOOL.name, "reply normalized")
        return _unwrap(_log_response(CHAT_TOOL.name, result))

    return mcp


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    from main import main

    main()
