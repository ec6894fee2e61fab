"""Request discovery over the storage index."""

from typing import List, Optional

from .config import DEFAULT_PAGE_LIMIT
from .models import ClockworkRequest, IndexEntry
from .storage import Storage


def paginate(entries: List[IndexEntry], limit: int = DEFAULT_PAGE_LIMIT, offset: int = 0) -> List[IndexEntry]:
    offset = max(offset, 0)
    return entries[offset:offset + max(limit, 0)]


def filter_time_range(
    entries: List[IndexEntry], start: Optional[float] = None, end: Optional[float] = None
) -> List[IndexEntry]:
    """Keep entries with ``start <= time <= end`` (unix seconds, either bound optional)."""
    if start is not None:
        entries = [e for e in entries if e.time >= start]
    if end is not None:
        entries = [e for e in entries if e.time <= end]
    return entries


def list_requests(
    storage: Storage,
    type: Optional[str] = None,
    status: Optional[int] = None,
    uri: Optional[str] = None,
    method: Optional[str] = None,
    start: Optional[float] = None,
    end: Optional[float] = None,
    limit: int = DEFAULT_PAGE_LIMIT,
    offset: int = 0,
) -> List[IndexEntry]:
    """Most recent requests first, with optional filters and pagination."""
    entries = storage.list()

    if type:
        entries = [e for e in entries if e.type == type]
    if status is not None:
        entries = [e for e in entries if e.response_status == status]
    if uri:
        entries = [e for e in entries if e.uri and uri in e.uri]
    if method:
        entries = [e for e in entries if e.method == method]
    entries = filter_time_range(entries, start, end)

    return paginate(entries, limit, offset)


def search_requests(
    storage: Storage,
    controller: Optional[str] = None,
    uri: Optional[str] = None,
    status: Optional[int] = None,
    min_duration: Optional[float] = None,
    max_duration: Optional[float] = None,
    limit: int = DEFAULT_PAGE_LIMIT,
    offset: int = 0,
) -> List[IndexEntry]:
    """Search by controller, URI, status or duration; missing durations count as 0."""
    entries = storage.list()

    if controller:
        entries = [e for e in entries if e.controller and controller in e.controller]
    if uri:
        entries = [e for e in entries if e.uri and uri in e.uri]
    if status is not None:
        entries = [e for e in entries if e.response_status == status]
    if min_duration is not None:
        entries = [e for e in entries if (e.response_duration or 0) >= min_duration]
    if max_duration is not None:
        entries = [e for e in entries if (e.response_duration or 0) <= max_duration]

    return paginate(entries, limit, offset)


def get_request(storage: Storage, request_id: str) -> Optional[ClockworkRequest]:
    return storage.find(request_id)


def get_latest_request(storage: Storage) -> Optional[ClockworkRequest]:
    return storage.latest()
