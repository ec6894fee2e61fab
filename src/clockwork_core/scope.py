"""Resolution of a request scope into a bounded list of request ids.

A scope selects the requests a cross-request analysis runs over. It is
resolved against the storage index only, so requests outside the final
selection are never loaded.
"""

import logging
import re
import time as time_module
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .config import DEFAULT_SCOPE_LIMIT, DURATION_UNITS_MS, HTTP_REQUEST_TYPE, MAX_REQUESTS
from .models import IndexEntry, RequestScope
from .storage import Storage

logger = logging.getLogger(__name__)

_DURATION_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(m|h|d|w)\Z", re.IGNORECASE)


def parse_time_duration(value: Optional[str]) -> Optional[float]:
    """Parse a look-back duration such as ``30m``, ``1.5h``, ``2d`` or ``1w``.

    Returns milliseconds, or None when the string does not match (an invalid
    duration means "no filter", never an error).
    """
    if not value:
        return None
    match = _DURATION_PATTERN.match(value)
    if not match:
        return None
    amount, unit = match.groups()
    return float(amount) * DURATION_UNITS_MS[unit.lower()]


@dataclass
class ScopeResolution:
    ids: List[str] = field(default_factory=list)
    total_matched: int = 0
    capped: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _is_http(entry: IndexEntry) -> bool:
    return entry.type is None or entry.type == HTTP_REQUEST_TYPE


def scope_limit(scope: RequestScope) -> int:
    """Number of requests a scope may select, never more than MAX_REQUESTS."""
    if scope.count is not None:
        return max(0, min(scope.count, MAX_REQUESTS))
    if scope.all or scope.since:
        return MAX_REQUESTS
    return DEFAULT_SCOPE_LIMIT


def resolve_scope(
    scope: RequestScope, storage: Storage, now: Optional[float] = None
) -> ScopeResolution:
    """Resolve ``scope`` to the most recent matching request ids.

    An explicit ``request_id`` wins over every other field. Otherwise the
    index is filtered by URI substring (case-insensitive), look-back window
    and HTTP type, then cut to the scope limit. ``now`` is a unix timestamp
    in seconds, defaulting to the current time.
    """
    if scope.request_id:
        return ScopeResolution(ids=[scope.request_id], total_matched=1, capped=False)

    entries = storage.list()

    if scope.uri:
        needle = scope.uri.lower()
        entries = [e for e in entries if e.uri and needle in e.uri.lower()]

    window_ms = parse_time_duration(scope.since)
    if window_ms is not None:
        current = time_module.time() if now is None else now
        cutoff = current - window_ms / 1000
        entries = [e for e in entries if e.time >= cutoff]

    entries = [e for e in entries if _is_http(e)]

    limit = scope_limit(scope)
    total_matched = len(entries)
    resolution = ScopeResolution(
        ids=[e.id for e in entries[:limit]],
        total_matched=total_matched,
        capped=total_matched > limit,
    )

    logger.debug(
        "Resolved scope to %d of %d matching requests (capped=%s)",
        len(resolution.ids),
        total_matched,
        resolution.capped,
    )
    return resolution
