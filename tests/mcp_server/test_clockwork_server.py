"""Tests for ClockworkMCPServer tool registration."""

from unittest.mock import MagicMock, patch

from clockwork_mcp.clockwork_server import ClockworkMCPServer

EXPECTED_TOOLS = {
    "list_requests", "get_request", "get_latest_request", "search_requests",
    "get_queries", "get_query_stats", "get_query_patterns", "analyze_slow_queries", "detect_n_plus_one",
    "get_performance_summary", "get_timeline", "compare_requests",
    "get_cache_operations", "get_cache_stats", "get_redis_commands",
    "get_logs", "get_events", "get_views", "get_http_requests", "get_auth_user",
    "get_session_data", "get_middleware_chain", "get_route_details",
    "list_commands", "get_command", "list_queue_jobs", "get_queue_job", "list_tests", "get_test",
    "analyze_exceptions", "analyze_route_performance", "detect_memory_issues",
    "get_call_graph", "get_query_stack_trace", "get_log_stack_trace",
    "get_clockwork_status", "explain_request_flow",
}


def _registered_names(mcp_mock):
    register = mcp_mock.tool.return_value
    return [call.args[0].__name__ for call in register.call_args_list]


@patch("fastmcp.FastMCP")
def test_registers_every_tool_once(mock_fastmcp):
    server = ClockworkMCPServer(configure_logging=False)

    mock_fastmcp.assert_called_once_with("clockwork-mcp")
    names = _registered_names(server.mcp)
    assert len(names) == len(EXPECTED_TOOLS)
    assert set(names) == EXPECTED_TOOLS


@patch("clockwork_mcp.clockwork_server.force_reconfigure_all_loggers")
@patch("clockwork_mcp.clockwork_server.get_python_logger")
@patch("fastmcp.FastMCP", return_value=MagicMock())
def test_logging_configuration_is_optional(_, mock_get_logger, mock_reconfigure):
    ClockworkMCPServer(configure_logging=False)
    mock_get_logger.assert_not_called()
    mock_reconfigure.assert_not_called()

    ClockworkMCPServer()
    mock_get_logger.assert_called_once()
    mock_reconfigure.assert_called_once()


def test_registered_tools_keep_their_signatures():
    import inspect

    from clockwork_mcp.tools.database_tools import analyze_slow_queries

    params = inspect.signature(analyze_slow_queries).parameters
    assert list(params) == ["request_id", "count", "since", "all_requests", "uri", "threshold", "limit"]
    assert params["threshold"].default == 100
