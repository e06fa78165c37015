# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP wrapper around core/.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between the MCP protocol and the core
#   logic.  mcp_server.py:
#     1. Registers the tools declared in core/registry.py
#     2. Delegates every call to core/dispatch.py
#     3. Turns error-flagged results into MCP errors (isError: true)
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT talk to Glean directly (that's core/glean_client.py)
#   - They do NOT reshape responses (that's core/normalizer.py)
# =============================================================================
