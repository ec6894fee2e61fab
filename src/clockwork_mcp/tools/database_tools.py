"""Database tools.

Slow query and N+1 analysis accept a request scope: a single request id, the
N most recent requests, every request within a time window, or all requests,
optionally restricted to URIs containing a substring. Without any scope only
the latest HTTP request is analyzed.
"""

from typing import Any, Dict, List, Optional

from clockwork_core import aggregation
from clockwork_core import database as database_core
from clockwork_core.analyzers.queries import group_queries_by_pattern

from ..exceptions import handle_mcp_exception, validate_non_negative, validate_required_params
from ..storage import get_storage
from ..utils.pylogger import get_python_logger
from .common import _resp, build_scope

logger = get_python_logger()


@handle_mcp_exception
def get_queries(
    request_id: str,
    slow: bool = False,
    threshold: Optional[float] = None,
) -> List[Dict[str, Any]]:
    """Get database queries executed during a request.

    Args:
        request_id: Clockwork request ID
        slow: Only return queries at or above ``threshold``
        threshold: Slow query threshold in ms
    """
    validate_required_params(request_id=request_id)
    return _resp(database_core.get_queries(get_storage(), request_id, slow=slow, threshold=threshold))


@handle_mcp_exception
def get_query_stats(request_id: str) -> List[Dict[str, Any]]:
    """Get query statistics for a request: totals, average, slowest, counts by type.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(database_core.get_query_stats(get_storage(), request_id))


@handle_mcp_exception
def get_query_patterns(request_id: str) -> List[Dict[str, Any]]:
    """Group a request's queries by normalized pattern, most total time first.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    queries = database_core.get_queries(get_storage(), request_id)
    return _resp(group_queries_by_pattern(queries))


@handle_mcp_exception
def analyze_slow_queries(
    request_id: Optional[str] = None,
    count: Optional[int] = None,
    since: Optional[str] = None,
    all_requests: bool = False,
    uri: Optional[str] = None,
    threshold: float = 100,
    limit: int = 20,
) -> List[Dict[str, Any]]:
    """Find slow database queries across requests, grouped by query pattern.

    Args:
        request_id: Analyze only this request
        count: Number of recent HTTP requests to analyze (max 100)
        since: Time window such as "30m", "2h", "1d" or "1w"
        all_requests: Analyze all stored HTTP requests (max 100)
        uri: Only requests whose URI contains this substring
        threshold: Slow query threshold in ms
        limit: Max query patterns to return

    Returns:
        Query patterns ranked by occurrence, with a summary
    """
    validate_non_negative(limit=limit)
    scope = build_scope(request_id, count, since, all_requests, uri)
    result = aggregation.aggregate_slow_queries(get_storage(), scope, threshold=threshold, limit=limit)
    logger.info(
        "Slow query analysis complete",
        patterns=result.summary.patterns_found,
        requests_analyzed=result.summary.requests_analyzed,
    )
    return _resp(result)


@handle_mcp_exception
def detect_n_plus_one(
    request_id: Optional[str] = None,
    count: Optional[int] = None,
    since: Optional[str] = None,
    all_requests: bool = False,
    uri: Optional[str] = None,
    threshold: int = 2,
) -> List[Dict[str, Any]]:
    """Detect N+1 query patterns: the same query shape repeated within a request.

    Args:
        request_id: Analyze only this request
        count: Number of recent HTTP requests to analyze (max 100)
        since: Time window such as "30m", "2h", "1d" or "1w"
        all_requests: Analyze all stored HTTP requests (max 100)
        uri: Only requests whose URI contains this substring
        threshold: Minimum repetitions within one request to flag a pattern
    """
    scope = build_scope(request_id, count, since, all_requests, uri)
    result = aggregation.aggregate_n_plus_one(get_storage(), scope, threshold=threshold)
    logger.info(
        "N+1 detection complete",
        patterns=result.summary.patterns_found,
        requests_analyzed=result.summary.requests_analyzed,
    )
    return _resp(result)
