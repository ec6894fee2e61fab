"""Database query inspection for a single request."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .models import DatabaseQuery
from .storage import Storage

QUERY_TYPES = ("select", "insert", "update", "delete")


@dataclass
class QueryStats:
    total_queries: int = 0
    total_duration: float = 0.0
    avg_duration: float = 0.0
    slowest_query: Optional[DatabaseQuery] = None
    queries_by_type: Dict[str, int] = field(
        default_factory=lambda: {"select": 0, "insert": 0, "update": 0, "delete": 0, "other": 0}
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_queries": self.total_queries,
            "total_duration": self.total_duration,
            "avg_duration": self.avg_duration,
            "slowest_query": self.slowest_query.to_dict() if self.slowest_query else None,
            "queries_by_type": dict(self.queries_by_type),
        }


def query_type(query: str) -> str:
    """Statement type from the leading SQL keyword."""
    upper = query.strip().upper()
    for kind in QUERY_TYPES:
        if upper.startswith(kind.upper()):
            return kind
    return "other"


def get_queries(
    storage: Storage, request_id: str, slow: bool = False, threshold: Optional[float] = None
) -> List[DatabaseQuery]:
    """Queries executed during a request, optionally only those >= ``threshold`` ms."""
    request = storage.find(request_id)
    if request is None or not request.database_queries:
        return []

    queries = list(request.database_queries)
    if slow and threshold:
        queries = [q for q in queries if q.duration >= threshold]
    return queries


def get_query_stats(storage: Storage, request_id: Optional[str]) -> QueryStats:
    stats = QueryStats()
    if not request_id:
        return stats

    request = storage.find(request_id)
    if request is None or not request.database_queries:
        return stats

    queries = request.database_queries
    slowest = queries[0]
    for query in queries:
        stats.total_duration += query.duration
        stats.queries_by_type[query_type(query.query)] += 1
        if query.duration > slowest.duration:
            slowest = query

    stats.total_queries = len(queries)
    stats.avg_duration = stats.total_duration / len(queries)
    stats.slowest_query = slowest
    return stats
