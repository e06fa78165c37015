# =============================================================================
# main.py  —  Entry Point for the Glean MCP Tool Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#   (or, after installing the package:  glean-mcp-server)
#
# WHAT HAPPENS:
#   1. Loads GLEAN_API_KEY / GLEAN_DOMAIN (from the environment or .env)
#   2. Builds the FastMCP server with the "search" and "chat" tools
#   3. Writes "Glean Server running on stdio" to stderr
#   4. Serves tool calls over stdin/stdout until the agent disconnects
#
# If anything fails during startup (missing settings, bad install) the error
# is written to stderr and the process exits with status 1, so the agent
# runtime that spawned us sees the failure immediately.
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

from core.config import load_config
from tools.mcp_server import create_server


def run_server() -> None:
    """Load settings, build the server, and serve on stdio."""
    # .env must be loaded BEFORE load_config() reads the environment
    load_dotenv()
    config = load_config()

    server = create_server(config)
    logging.info("Glean Server running on stdio")
    server.run(transport="stdio")


def main() -> None:
    try:
        run_server()
    except Exception as e:
        logging.error(f"Fatal error running server: {e}")
        sys.exit(1)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
