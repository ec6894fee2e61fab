import logging

from .settings import settings
from .utils.pylogger import get_python_logger, force_reconfigure_all_loggers


class ClockworkMCPServer:
    def __init__(self, configure_logging: bool = True) -> None:
        # Lazy import to avoid import-time circulars when fastmcp pulls in mcp.types
        from fastmcp import FastMCP  # type: ignore

        if configure_logging:
            get_python_logger(settings.PYTHON_LOG_LEVEL)
        self.mcp = FastMCP("clockwork-mcp")
        if configure_logging:
            # Ensure third-party loggers are reconfigured after FastMCP init
            force_reconfigure_all_loggers(settings.PYTHON_LOG_LEVEL)
        self._register_mcp_tools()
        logging.getLogger(__name__).info("Clockwork MCP Server initialized")

    def _register_mcp_tools(self) -> None:
        from .tools.requests_tools import (
            list_requests,
            get_request,
            get_latest_request,
            search_requests,
        )
        from .tools.database_tools import (
            get_queries,
            get_query_stats,
            get_query_patterns,
            analyze_slow_queries,
            detect_n_plus_one,
        )
        from .tools.performance_tools import (
            get_performance_summary,
            get_timeline,
            compare_requests,
        )
        from .tools.cache_tools import (
            get_cache_operations,
            get_cache_stats,
            get_redis_commands,
        )
        from .tools.context_tools import (
            get_logs,
            get_events,
            get_views,
            get_http_requests,
            get_auth_user,
            get_session_data,
            get_middleware_chain,
            get_route_details,
        )
        from .tools.jobs_tools import (
            list_commands,
            get_command,
            list_queue_jobs,
            get_queue_job,
            list_tests,
            get_test,
        )
        from .tools.analysis_tools import (
            analyze_exceptions,
            analyze_route_performance,
            detect_memory_issues,
        )
        from .tools.traces_tools import (
            get_call_graph,
            get_query_stack_trace,
            get_log_stack_trace,
        )
        from .tools.utility_tools import (
            get_clockwork_status,
            explain_request_flow,
        )

        # Request discovery
        self.mcp.tool()(list_requests)
        self.mcp.tool()(get_request)
        self.mcp.tool()(get_latest_request)
        self.mcp.tool()(search_requests)

        # Database
        self.mcp.tool()(get_queries)
        self.mcp.tool()(get_query_stats)
        self.mcp.tool()(get_query_patterns)
        self.mcp.tool()(analyze_slow_queries)
        self.mcp.tool()(detect_n_plus_one)

        # Performance
        self.mcp.tool()(get_performance_summary)
        self.mcp.tool()(get_timeline)
        self.mcp.tool()(compare_requests)

        # Cache
        self.mcp.tool()(get_cache_operations)
        self.mcp.tool()(get_cache_stats)
        self.mcp.tool()(get_redis_commands)

        # Request context
        self.mcp.tool()(get_logs)
        self.mcp.tool()(get_events)
        self.mcp.tool()(get_views)
        self.mcp.tool()(get_http_requests)
        self.mcp.tool()(get_auth_user)
        self.mcp.tool()(get_session_data)
        self.mcp.tool()(get_middleware_chain)
        self.mcp.tool()(get_route_details)

        # Commands, queue jobs, tests
        self.mcp.tool()(list_commands)
        self.mcp.tool()(get_command)
        self.mcp.tool()(list_queue_jobs)
        self.mcp.tool()(get_queue_job)
        self.mcp.tool()(list_tests)
        self.mcp.tool()(get_test)

        # Cross-request analysis
        self.mcp.tool()(analyze_exceptions)
        self.mcp.tool()(analyze_route_performance)
        self.mcp.tool()(detect_memory_issues)

        # Traces
        self.mcp.tool()(get_call_graph)
        self.mcp.tool()(get_query_stack_trace)
        self.mcp.tool()(get_log_stack_trace)

        # Utility
        self.mcp.tool()(get_clockwork_status)
        self.mcp.tool()(explain_request_flow)
