"""MCP tools exposing Clockwork analysis.

- requests_tools: request discovery
- database_tools: queries, slow queries, N+1 detection
- performance_tools: summaries, timelines, comparisons
- cache_tools: cache operations and Redis commands
- context_tools: logs, events, views, HTTP calls, auth, session, routing
- jobs_tools: Artisan commands, queue jobs, tests
- analysis_tools: exceptions, route performance, memory issues
- traces_tools: call graphs and stack traces
- utility_tools: storage status and request flow
"""
