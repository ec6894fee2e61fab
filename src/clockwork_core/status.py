"""Storage health and one-request summaries."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .storage import Storage


@dataclass
class ClockworkStatus:
    found: bool
    storage_path: str
    request_count: int = 0
    oldest_request: Optional[float] = None
    newest_request: Optional[float] = None
    storage_size_bytes: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RequestFlow:
    id: str
    method: Optional[str] = None
    uri: Optional[str] = None
    controller: Optional[str] = None
    middleware: Optional[List[str]] = None
    query_count: int = 0
    total_query_duration: float = 0.0
    status: Optional[int] = None
    duration: Optional[float] = None
    memory_mb: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def storage_size(storage_path: Path) -> int:
    """Total size in bytes of the regular files directly inside ``storage_path``."""
    return sum(entry.stat().st_size for entry in storage_path.iterdir() if entry.is_file())


def get_clockwork_status(storage: Storage, storage_path: Union[str, Path]) -> ClockworkStatus:
    path = Path(storage_path)
    if not path.exists():
        return ClockworkStatus(found=False, storage_path=str(path))

    entries = storage.list()
    return ClockworkStatus(
        found=True,
        storage_path=str(path),
        request_count=len(entries),
        oldest_request=entries[-1].time if entries else None,
        newest_request=entries[0].time if entries else None,
        storage_size_bytes=storage_size(path),
    )


def explain_request_flow(storage: Storage, request_id: str) -> RequestFlow:
    """High-level summary of what happened during a request."""
    request = storage.find(request_id)
    if request is None:
        return RequestFlow(id=request_id)

    queries = request.database_queries or []
    return RequestFlow(
        id=request.id,
        method=request.method,
        uri=request.uri,
        controller=request.controller,
        middleware=request.middleware,
        query_count=len(queries),
        total_query_duration=sum(q.duration for q in queries),
        status=request.response_status,
        duration=request.response_duration,
        memory_mb=request.memory_mb if request.memory_usage else None,
    )
