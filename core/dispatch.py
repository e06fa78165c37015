# =============================================================================
# core/dispatch.py  —  Tool Dispatch (name + arguments → ToolResult)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Routes one tool invocation to the matching Glean endpoint and shapes the
#   answer into a ToolResult.
#
#     "search" → POST /search  → raw JSON passed through as text
#     "chat"   → POST /chat    → core/normalizer.py flattens the reply
#     anything else            → "Unknown tool: ..." (no network call)
#
# THE FAILURE PATHS ARE DELIBERATELY DIFFERENT:
#   1. search, network/JSON failure  → caught, returned as NORMAL text
#                                      ("Error occurred: ...", no isError)
#   2. chat, non-2xx status          → returned with is_error=True
#   3. chat, 200 OK but bad shape    → ChatResponseError is RAISED
#   4. unknown tool name             → returned with is_error=True
#
# Arguments are trusted to match the registry schema already; the MCP layer
# validates them before we get here.
# =============================================================================

import http.client
import json
import logging
from typing import Any, Mapping, Optional

from core.config import GleanConfig
from core.glean_client import GleanClient
from core.models import ToolResult
from core.normalizer import normalize_chat_response
from core.registry import SEARCH_TOOL, get_tool

logger = logging.getLogger(__name__)


def build_chat_payload(message: str) -> dict:
    """One synthetic user turn, streaming off."""
    return {
        "stream": False,
        "messages": [{
            "author": "USER",
            "fragments": [{"text": message}],
        }],
    }


class GleanToolHandler:
    def __init__(self, config: GleanConfig, client: Optional[GleanClient] = None):
        self.config = config
        self.client = client if client is not None else GleanClient(config)

    def handle(self, name: str, arguments: Mapping[str, Any]) -> ToolResult:
        tool = get_tool(name)
        if tool is None:
            logger.warning("Unknown tool requested: %s", name)
            return ToolResult(text=f"Unknown tool: {name}", is_error=True)

        if tool is SEARCH_TOOL:
            return self.search(arguments["query"])
        return self.chat(arguments["message"])

    def search(self, query: str) -> ToolResult:
        try:
            response = self.client.post("search", {"query": query})
            result = response.json()
        except (OSError, ValueError, http.client.HTTPException) as e:
            # OSError covers URLError and timeouts; ValueError covers bad JSON.
            logger.warning("Search request failed: %s", e)
            return ToolResult(text=f"Error occurred: {e}")
        return ToolResult(text=json.dumps(result, separators=(",", ":"), ensure_ascii=False))

    def chat(self, message: str) -> ToolResult:
        response = self.client.post("chat", build_chat_payload(message))

        if not response.ok:
            logger.warning("Chat request returned HTTP %s", response.status)
            return ToolResult(text=f"Error: {response.status} - {response.text}", is_error=True)

        return ToolResult(text=normalize_chat_response(response.json()))
