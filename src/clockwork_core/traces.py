"""Call graphs and source locations for queries and log entries."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .analyzers.call_graph import CallGraphNode, build_call_graph
from .storage import Storage


@dataclass
class QueryStackTrace:
    found: bool = False
    file: Optional[str] = None
    line: Optional[int] = None
    query: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class LogStackTrace:
    found: bool = False
    file: Optional[str] = None
    line: Optional[int] = None
    message: Optional[str] = None
    level: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_call_graph(
    storage: Storage, request_id: str, min_duration: Optional[float] = None
) -> List[CallGraphNode]:
    """Nested call graph of a request's timeline.

    When ``min_duration`` is positive, shorter events are removed before
    nesting, so their children may attach to a surviving ancestor.
    """
    request = storage.find(request_id)
    if request is None or not request.timeline_data:
        return []

    events = request.timeline_data
    if min_duration is not None and min_duration > 0:
        events = [e for e in events if e.duration >= min_duration]
    return build_call_graph(events)


def get_query_stack_trace(storage: Storage, request_id: str, query_index: int) -> QueryStackTrace:
    request = storage.find(request_id)
    queries = request.database_queries if request is not None else None
    if not queries or not 0 <= query_index < len(queries):
        return QueryStackTrace()

    query = queries[query_index]
    return QueryStackTrace(
        found=bool(query.file or query.line),
        file=query.file,
        line=query.line,
        query=query.query,
    )


def get_log_stack_trace(storage: Storage, request_id: str, log_index: int) -> LogStackTrace:
    request = storage.find(request_id)
    logs = request.log if request is not None else None
    if not logs or not 0 <= log_index < len(logs):
        return LogStackTrace()

    entry = logs[log_index]
    return LogStackTrace(
        found=bool(entry.file or entry.line),
        file=entry.file,
        line=entry.line,
        message=entry.message,
        level=entry.level,
    )
