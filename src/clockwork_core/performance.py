"""Per-request performance overview and comparison."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .config import BYTES_PER_MB
from .models import ClockworkRequest, TimelineEvent
from .storage import Storage


@dataclass
class PerformanceSummary:
    response_duration: float = 0.0
    memory_usage_mb: float = 0.0
    database_queries: int = 0
    database_duration: float = 0.0
    cache_hits: int = 0
    cache_reads: int = 0
    cache_hit_ratio: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RequestMetrics:
    id: str
    duration: float
    queries: int
    memory_mb: float

    @classmethod
    def of(cls, request_id: str, request: Optional[ClockworkRequest]) -> "RequestMetrics":
        if request is None:
            return cls(id=request_id, duration=0.0, queries=0, memory_mb=0.0)
        return cls(
            id=request_id,
            duration=request.response_duration or 0.0,
            queries=request.database_queries_count or 0,
            memory_mb=(request.memory_usage or 0) / BYTES_PER_MB,
        )


@dataclass
class RequestComparison:
    request1: RequestMetrics
    request2: RequestMetrics
    duration_diff: float
    query_count_diff: int
    memory_diff: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_performance_summary(storage: Storage, request_id: Optional[str]) -> PerformanceSummary:
    if not request_id:
        return PerformanceSummary()

    request = storage.find(request_id)
    if request is None:
        return PerformanceSummary()

    cache_reads = request.cache_reads or 0
    cache_hits = request.cache_hits or 0
    return PerformanceSummary(
        response_duration=request.response_duration or 0.0,
        memory_usage_mb=(request.memory_usage or 0) / BYTES_PER_MB,
        database_queries=request.database_queries_count or 0,
        database_duration=request.database_duration or 0.0,
        cache_hits=cache_hits,
        cache_reads=cache_reads,
        cache_hit_ratio=cache_hits / cache_reads if cache_reads > 0 else 0.0,
    )


def get_timeline(storage: Storage, request_id: str) -> List[TimelineEvent]:
    request = storage.find(request_id)
    if request is None or not request.timeline_data:
        return []
    return list(request.timeline_data)


def compare_requests(storage: Storage, request_id1: str, request_id2: str) -> RequestComparison:
    """Differences are reported as second request minus first request."""
    first = RequestMetrics.of(request_id1, storage.find(request_id1))
    second = RequestMetrics.of(request_id2, storage.find(request_id2))
    return RequestComparison(
        request1=first,
        request2=second,
        duration_diff=second.duration - first.duration,
        query_count_diff=second.queries - first.queries,
        memory_diff=second.memory_mb - first.memory_mb,
    )
