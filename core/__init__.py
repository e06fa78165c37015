# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL the logic of the Glean tool server: settings,
# the HTTP client, tool dispatch, and the chat-response normalizer.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The MCP wiring lives in tools/;
#   everything here can be imported and tested without a protocol server.
# =============================================================================
