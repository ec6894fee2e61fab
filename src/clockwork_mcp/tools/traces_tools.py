"""Call graph and stack trace tools."""

from typing import Any, Dict, List, Optional

from clockwork_core import traces as traces_core

from ..exceptions import handle_mcp_exception, validate_non_negative, validate_required_params
from ..storage import get_storage
from .common import _resp


@handle_mcp_exception
def get_call_graph(request_id: str, min_duration: Optional[float] = None) -> List[Dict[str, Any]]:
    """Build a nested call graph from a request's timeline events.

    Args:
        request_id: Clockwork request ID
        min_duration: Drop events shorter than this many ms before nesting
    """
    validate_required_params(request_id=request_id)
    return _resp(traces_core.get_call_graph(get_storage(), request_id, min_duration=min_duration))


@handle_mcp_exception
def get_query_stack_trace(request_id: str, query_index: int) -> List[Dict[str, Any]]:
    """Get the source file and line that issued a database query.

    Args:
        request_id: Clockwork request ID
        query_index: 0-based index of the query
    """
    validate_required_params(request_id=request_id, query_index=query_index)
    validate_non_negative(query_index=query_index)
    return _resp(traces_core.get_query_stack_trace(get_storage(), request_id, query_index))


@handle_mcp_exception
def get_log_stack_trace(request_id: str, log_index: int) -> List[Dict[str, Any]]:
    """Get the source file and line that wrote a log entry.

    Args:
        request_id: Clockwork request ID
        log_index: 0-based index of the log entry
    """
    validate_required_params(request_id=request_id, log_index=log_index)
    validate_non_negative(log_index=log_index)
    return _resp(traces_core.get_log_stack_trace(get_storage(), request_id, log_index))
