"""STDIO MCP server for desktop MCP clients.

stdout carries JSON-RPC only, so all logging is disabled before the server
(and FastMCP) is imported.
"""

import os
import sys

from clockwork_mcp.utils.pylogger import disable_all_logging


def main() -> None:
    """Run the MCP server over STDIO."""
    disable_all_logging()
    os.environ["FASTMCP_NO_BANNER"] = "1"
    os.environ["PYTHONUNBUFFERED"] = "1"

    from clockwork_mcp.clockwork_server import ClockworkMCPServer

    try:
        server = ClockworkMCPServer(configure_logging=False)
        server.mcp.run(transport="stdio", show_banner=False)
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
