"""Route performance statistics across HTTP requests."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from ..config import (
    BYTES_PER_MB,
    DEFAULT_ROUTE_GROUP_BY,
    DEFAULT_ROUTE_MIN_SAMPLES,
    HTTP_REQUEST_TYPE,
)
from ..models import ClockworkRequest
from .statistics import percentile


@dataclass
class RoutePerformanceStats:
    route: str
    samples: int
    avg_duration: float
    min_duration: float
    max_duration: float
    p50: float
    p95: float
    p99: float
    avg_memory_mb: Optional[float]


@dataclass
class RoutePerformanceSummary:
    total_requests: int
    unique_routes: int
    slowest_route: Optional[str]
    fastest_route: Optional[str]


@dataclass
class RoutePerformanceAnalysis:
    routes: List[RoutePerformanceStats]
    summary: RoutePerformanceSummary

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def route_group_key(request: ClockworkRequest, group_by: str) -> Optional[str]:
    """Key a request is grouped under; None drops it from the analysis."""
    if group_by == "route":
        for candidate in (request.route, request.route_name, request.uri):
            if candidate is not None:
                return candidate
        return None
    if group_by == "controller":
        return request.controller
    return request.uri


def analyze_route_performance(
    requests: Sequence[ClockworkRequest],
    group_by: str = DEFAULT_ROUTE_GROUP_BY,
    min_samples: int = DEFAULT_ROUTE_MIN_SAMPLES,
) -> RoutePerformanceAnalysis:
    """Duration percentiles and memory averages per route, slowest first.

    Only HTTP requests with a recorded response duration are considered;
    commands, queue jobs and tests are ignored.
    """
    http_requests = [r for r in requests if r.type == HTTP_REQUEST_TYPE]

    durations: Dict[str, List[float]] = {}
    memory: Dict[str, List[float]] = {}

    for request in http_requests:
        key = route_group_key(request, group_by)
        if not key or request.response_duration is None:
            continue
        durations.setdefault(key, []).append(request.response_duration)
        memory.setdefault(key, [])
        if request.memory_usage is not None:
            memory[key].append(request.memory_usage)

    routes: List[RoutePerformanceStats] = []
    for route, samples in durations.items():
        if len(samples) < min_samples:
            continue

        ordered = sorted(samples)
        usages = memory[route]
        avg_memory_mb = sum(usages) / len(usages) / BYTES_PER_MB if usages else None

        routes.append(
            RoutePerformanceStats(
                route=route,
                samples=len(ordered),
                avg_duration=sum(ordered) / len(ordered),
                min_duration=ordered[0],
                max_duration=ordered[-1],
                p50=percentile(ordered, 50),
                p95=percentile(ordered, 95),
                p99=percentile(ordered, 99),
                avg_memory_mb=avg_memory_mb,
            )
        )

    routes.sort(key=lambda r: r.avg_duration, reverse=True)

    return RoutePerformanceAnalysis(
        routes=routes,
        summary=RoutePerformanceSummary(
            total_requests=len(http_requests),
            unique_routes=len(routes),
            slowest_route=routes[0].route if routes else None,
            fastest_route=routes[-1].route if routes else None,
        ),
    )
