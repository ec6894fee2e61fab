"""Cross-request analysis.

Each aggregator resolves a scope to request ids, loads only those requests,
runs the matching single-request analyzer over each of them (or over their
union) and merges the results. Requests that cannot be found, or that lack
the relevant data, contribute nothing.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .analyzers.exceptions import ExceptionOccurrence, extract_exceptions, group_exceptions
from .analyzers.memory import detect_memory_issues
from .analyzers.queries import analyze_slow_queries, detect_n_plus_one, normalize_query
from .analyzers.routes import analyze_route_performance
from .config import (
    DEFAULT_EXCEPTION_LIMIT,
    DEFAULT_MEMORY_THRESHOLD_MB,
    DEFAULT_N_PLUS_ONE_THRESHOLD,
    DEFAULT_ROUTE_GROUP_BY,
    DEFAULT_ROUTE_MIN_SAMPLES,
    DEFAULT_SLOW_QUERY_LIMIT,
    DEFAULT_SLOW_QUERY_THRESHOLD_MS,
)
from .models import ClockworkRequest, RequestScope
from .scope import ScopeResolution, resolve_scope
from .storage import Storage

logger = logging.getLogger(__name__)


@dataclass
class AnalysisMeta:
    requests_analyzed: int
    capped: bool
    total_matched: int

    @classmethod
    def from_resolution(cls, resolution: ScopeResolution) -> "AnalysisMeta":
        return cls(
            requests_analyzed=len(resolution.ids),
            capped=resolution.capped,
            total_matched=resolution.total_matched,
        )


def _load_scope(
    storage: Storage, scope: RequestScope, now: Optional[float] = None
) -> Tuple[ScopeResolution, List[ClockworkRequest]]:
    resolution = resolve_scope(scope, storage, now=now)
    requests = storage.find_many(resolution.ids) if resolution.ids else []
    if len(requests) < len(resolution.ids):
        logger.debug("%d scoped requests not found in storage", len(resolution.ids) - len(requests))
    return resolution, requests


def _affected(request: ClockworkRequest) -> Dict[str, Any]:
    return {"id": request.id, "uri": request.uri, "method": request.method}


# --- Slow queries ---

@dataclass
class SlowQueryPattern:
    query_pattern: str
    example_query: str
    total_occurrences: int = 0
    total_duration: float = 0.0
    max_duration: float = 0.0
    affected_requests: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query_pattern": self.query_pattern,
            "total_occurrences": self.total_occurrences,
            "total_duration": self.total_duration,
            "avg_duration": self.total_duration / self.total_occurrences if self.total_occurrences else 0.0,
            "max_duration": self.max_duration,
            "example_query": self.example_query,
            "affected_requests": list(self.affected_requests.values()),
        }


@dataclass
class SlowQuerySummary:
    total_slow_queries: int
    requests_analyzed: int
    requests_with_slow_queries: int
    patterns_found: int
    threshold: float
    capped: bool
    total_matched: int


@dataclass
class SlowQueryAggregation:
    queries: List[SlowQueryPattern]
    summary: SlowQuerySummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "queries": [q.to_dict() for q in self.queries],
            "summary": asdict(self.summary),
        }


def aggregate_slow_queries(
    storage: Storage,
    scope: RequestScope,
    threshold: float = DEFAULT_SLOW_QUERY_THRESHOLD_MS,
    limit: int = DEFAULT_SLOW_QUERY_LIMIT,
    now: Optional[float] = None,
) -> SlowQueryAggregation:
    """Slow queries across the scoped requests, grouped by query pattern.

    Patterns are ranked by how often they were slow. The summary counts every
    slow query, including those of patterns cut by ``limit``.
    """
    resolution, requests = _load_scope(storage, scope, now)

    patterns: Dict[str, SlowQueryPattern] = {}
    requests_with_slow = 0

    for request in requests:
        slow = analyze_slow_queries(request.database_queries or [], threshold)
        if not slow:
            continue
        requests_with_slow += 1

        for query in slow:
            key = normalize_query(query.query)
            if key not in patterns:
                patterns[key] = SlowQueryPattern(query_pattern=key, example_query=query.query)
            pattern = patterns[key]
            pattern.total_occurrences += 1
            pattern.total_duration += query.duration
            pattern.max_duration = max(pattern.max_duration, query.duration)
            pattern.affected_requests.setdefault(request.id, _affected(request))

    ranked = sorted(patterns.values(), key=lambda p: p.total_occurrences, reverse=True)

    return SlowQueryAggregation(
        queries=ranked[:limit],
        summary=SlowQuerySummary(
            total_slow_queries=sum(p.total_occurrences for p in ranked),
            requests_analyzed=len(resolution.ids),
            requests_with_slow_queries=requests_with_slow,
            patterns_found=len(ranked),
            threshold=threshold,
            capped=resolution.capped,
            total_matched=resolution.total_matched,
        ),
    )


# --- N+1 ---

@dataclass
class NPlusOneAggregatePattern:
    query_pattern: str
    example_query: str
    total_occurrences: int = 0
    total_duration: float = 0.0
    affected_requests: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def avg_occurrences_per_request(self) -> float:
        if not self.affected_requests:
            return 0.0
        return self.total_occurrences / len(self.affected_requests)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query_pattern": self.query_pattern,
            "total_occurrences": self.total_occurrences,
            "total_duration": self.total_duration,
            "avg_occurrences_per_request": self.avg_occurrences_per_request,
            "example_query": self.example_query,
            "affected_requests": self.affected_requests,
        }


@dataclass
class NPlusOneSummary:
    patterns_found: int
    requests_analyzed: int
    requests_with_n_plus_one: int
    threshold: int
    capped: bool
    total_matched: int


@dataclass
class NPlusOneAggregation:
    patterns: List[NPlusOneAggregatePattern]
    summary: NPlusOneSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "patterns": [p.to_dict() for p in self.patterns],
            "summary": asdict(self.summary),
        }


def aggregate_n_plus_one(
    storage: Storage,
    scope: RequestScope,
    threshold: int = DEFAULT_N_PLUS_ONE_THRESHOLD,
    now: Optional[float] = None,
) -> NPlusOneAggregation:
    """N+1 patterns detected per request, merged across the scope by pattern."""
    resolution, requests = _load_scope(storage, scope, now)

    patterns: Dict[str, NPlusOneAggregatePattern] = {}
    requests_with_n_plus_one = 0

    for request in requests:
        detected = detect_n_plus_one(request.database_queries or [], threshold)
        if not detected:
            continue
        requests_with_n_plus_one += 1

        for found in detected:
            if found.pattern not in patterns:
                patterns[found.pattern] = NPlusOneAggregatePattern(
                    query_pattern=found.pattern, example_query=found.examples[0]
                )
            merged = patterns[found.pattern]
            merged.total_occurrences += found.count
            merged.total_duration += found.total_duration
            merged.affected_requests.append({**_affected(request), "occurrences": found.count})

    ranked = sorted(patterns.values(), key=lambda p: p.total_occurrences, reverse=True)

    return NPlusOneAggregation(
        patterns=ranked,
        summary=NPlusOneSummary(
            patterns_found=len(ranked),
            requests_analyzed=len(resolution.ids),
            requests_with_n_plus_one=requests_with_n_plus_one,
            threshold=threshold,
            capped=resolution.capped,
            total_matched=resolution.total_matched,
        ),
    )


# --- Exceptions, routes, memory ---

def _with_meta(analysis_dict: Dict[str, Any], resolution: ScopeResolution) -> Dict[str, Any]:
    return {**analysis_dict, "meta": asdict(AnalysisMeta.from_resolution(resolution))}


def aggregate_exceptions(
    storage: Storage,
    scope: RequestScope,
    group_by_message: bool = True,
    limit: int = DEFAULT_EXCEPTION_LIMIT,
    now: Optional[float] = None,
) -> Dict[str, Any]:
    """Exception clusters over the error logs of every scoped request."""
    resolution, requests = _load_scope(storage, scope, now)

    occurrences = [
        ExceptionOccurrence.from_log(entry, request_id=request.id)
        for request in requests
        for entry in extract_exceptions(request.log or [])
    ]

    analysis = group_exceptions(occurrences, group_by_message=group_by_message, limit=limit)
    return _with_meta(analysis.to_dict(), resolution)


def aggregate_route_performance(
    storage: Storage,
    scope: RequestScope,
    group_by: str = DEFAULT_ROUTE_GROUP_BY,
    min_samples: int = DEFAULT_ROUTE_MIN_SAMPLES,
    now: Optional[float] = None,
) -> Dict[str, Any]:
    """Route performance statistics over the scoped requests."""
    resolution, requests = _load_scope(storage, scope, now)
    analysis = analyze_route_performance(requests, group_by=group_by, min_samples=min_samples)
    return _with_meta(analysis.to_dict(), resolution)


def aggregate_memory_issues(
    storage: Storage,
    scope: RequestScope,
    threshold_mb: float = DEFAULT_MEMORY_THRESHOLD_MB,
    detect_growth: bool = True,
    now: Optional[float] = None,
) -> Dict[str, Any]:
    """Memory issues over the scoped requests."""
    resolution, requests = _load_scope(storage, scope, now)
    analysis = detect_memory_issues(requests, threshold_mb=threshold_mb, detect_growth=detect_growth)
    return _with_meta(analysis.to_dict(), resolution)
