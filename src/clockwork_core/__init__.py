"""
Clockwork Profiler - Core Analysis Logic

This package reads the telemetry Laravel Clockwork writes to disk and turns it
into diagnostics. It has no knowledge of MCP and is used by the MCP server
(src/clockwork_mcp/).

Modules:
- models: Pydantic models for Clockwork requests and index entries
- storage: Storage protocol and the file-backed implementation
- analyzers: stateless single-request analyses
- scope: request-scope resolution for cross-request analysis
- aggregation: cross-request slow query, N+1, exception, route and memory analysis
- requests, database, performance, cache, context, jobs, traces, status:
  per-request inspection operations
"""

__version__ = "0.1.0"
