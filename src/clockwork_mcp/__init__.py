"""Clockwork MCP server.

Exposes the analysis in ``clockwork_core`` as MCP tools over HTTP, SSE or
STDIO.
"""

__version__ = "0.1.0"
