"""Cross-request analysis tools: exceptions, route performance, memory.

All three accept the same request scope as the database analysis tools.
"""

from typing import Any, Dict, List, Optional

from clockwork_core import aggregation
from clockwork_core.config import ROUTE_GROUP_BY_OPTIONS

from ..exceptions import handle_mcp_exception, validate_choice, validate_non_negative
from ..storage import get_storage
from ..utils.pylogger import get_python_logger
from .common import _resp, build_scope

logger = get_python_logger()


@handle_mcp_exception
def analyze_exceptions(
    request_id: Optional[str] = None,
    count: Optional[int] = None,
    since: Optional[str] = None,
    all_requests: bool = False,
    uri: Optional[str] = None,
    group_by_message: bool = True,
    limit: int = 20,
) -> List[Dict[str, Any]]:
    """Group error and critical log entries across requests.

    Messages are normalized (ids, UUIDs, quoted strings, emails, IPs and paths
    masked) so that occurrences of the same failure cluster together.

    Args:
        request_id: Analyze only this request
        count: Number of recent HTTP requests to analyze (max 100)
        since: Time window such as "30m", "2h", "1d" or "1w"
        all_requests: Analyze all stored HTTP requests (max 100)
        uri: Only requests whose URI contains this substring
        group_by_message: Cluster by normalized message; false keeps every occurrence apart
        limit: Max exception groups to return
    """
    validate_non_negative(limit=limit)
    scope = build_scope(request_id, count, since, all_requests, uri)
    result = aggregation.aggregate_exceptions(
        get_storage(), scope, group_by_message=group_by_message, limit=limit
    )
    logger.info("Exception analysis complete", **result["meta"])
    return _resp(result)


@handle_mcp_exception
def analyze_route_performance(
    request_id: Optional[str] = None,
    count: Optional[int] = None,
    since: Optional[str] = None,
    all_requests: bool = False,
    uri: Optional[str] = None,
    group_by: str = "uri",
    min_samples: int = 1,
) -> List[Dict[str, Any]]:
    """Compute per-route duration percentiles and average memory.

    Args:
        request_id: Analyze only this request
        count: Number of recent HTTP requests to analyze (max 100)
        since: Time window such as "30m", "2h", "1d" or "1w"
        all_requests: Analyze all stored HTTP requests (max 100)
        uri: Only requests whose URI contains this substring
        group_by: uri, route or controller
        min_samples: Minimum requests for a route to be reported
    """
    validate_choice("group_by", group_by, ROUTE_GROUP_BY_OPTIONS)
    scope = build_scope(request_id, count, since, all_requests, uri)
    result = aggregation.aggregate_route_performance(
        get_storage(), scope, group_by=group_by, min_samples=min_samples
    )
    logger.info("Route performance analysis complete", **result["meta"])
    return _resp(result)


@handle_mcp_exception
def detect_memory_issues(
    request_id: Optional[str] = None,
    count: Optional[int] = None,
    since: Optional[str] = None,
    all_requests: bool = False,
    uri: Optional[str] = None,
    threshold_mb: float = 128,
    detect_growth: bool = True,
) -> List[Dict[str, Any]]:
    """Flag requests over a memory threshold and detect memory growth over time.

    Args:
        request_id: Analyze only this request
        count: Number of recent HTTP requests to analyze (max 100)
        since: Time window such as "30m", "2h", "1d" or "1w"
        all_requests: Analyze all stored HTTP requests (max 100)
        uri: Only requests whose URI contains this substring
        threshold_mb: Memory threshold in MB to flag as high
        detect_growth: Compare the older and newer halves of the samples
    """
    scope = build_scope(request_id, count, since, all_requests, uri)
    result = aggregation.aggregate_memory_issues(
        get_storage(), scope, threshold_mb=threshold_mb, detect_growth=detect_growth
    )
    logger.info("Memory analysis complete", **result["meta"])
    return _resp(result)
