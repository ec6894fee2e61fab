"""Performance tools: per-request summary, timeline and comparison."""

from typing import Any, Dict, List

from clockwork_core import performance as performance_core

from ..exceptions import handle_mcp_exception, validate_required_params
from ..storage import get_storage
from .common import _resp


@handle_mcp_exception
def get_performance_summary(request_id: str) -> List[Dict[str, Any]]:
    """Get a performance overview of a request: duration, memory, database and cache.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(performance_core.get_performance_summary(get_storage(), request_id))


@handle_mcp_exception
def get_timeline(request_id: str) -> List[Dict[str, Any]]:
    """Get the timeline events recorded for a request.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(performance_core.get_timeline(get_storage(), request_id))


@handle_mcp_exception
def compare_requests(request_id1: str, request_id2: str) -> List[Dict[str, Any]]:
    """Compare duration, query count and memory of two requests.

    Differences are the second request minus the first.

    Args:
        request_id1: First Clockwork request ID
        request_id2: Second Clockwork request ID
    """
    validate_required_params(request_id1=request_id1, request_id2=request_id2)
    return _resp(performance_core.compare_requests(get_storage(), request_id1, request_id2))
