"""Stateless analyzers turning Clockwork telemetry into diagnostic signals.

- queries: query normalization, slow queries, N+1 patterns
- exceptions: error message normalization and clustering
- statistics: interpolated percentiles
- routes: per-route duration/memory statistics
- memory: high usage and growth detection
- call_graph: call hierarchy from timeline intervals
"""

from .call_graph import CallGraphNode, build_call_graph
from .exceptions import (
    ExceptionAnalysis,
    ExceptionGroup,
    ExceptionOccurrence,
    extract_exceptions,
    group_exceptions,
    normalize_exception_message,
)
from .memory import MemoryAnalysis, MemoryIssue, detect_memory_issues
from .queries import (
    NPlusOnePattern,
    QueryGroup,
    analyze_slow_queries,
    detect_n_plus_one,
    group_queries_by_pattern,
    normalize_query,
)
from .routes import RoutePerformanceAnalysis, RoutePerformanceStats, analyze_route_performance
from .statistics import percentile

__all__ = [
    "CallGraphNode",
    "build_call_graph",
    "ExceptionAnalysis",
    "ExceptionGroup",
    "ExceptionOccurrence",
    "extract_exceptions",
    "group_exceptions",
    "normalize_exception_message",
    "MemoryAnalysis",
    "MemoryIssue",
    "detect_memory_issues",
    "NPlusOnePattern",
    "QueryGroup",
    "analyze_slow_queries",
    "detect_n_plus_one",
    "group_queries_by_pattern",
    "normalize_query",
    "RoutePerformanceAnalysis",
    "RoutePerformanceStats",
    "analyze_route_performance",
    "percentile",
]
