"""Request context: logs, events, views, outgoing HTTP, auth, session, routing."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from .config import LOG_LEVELS
from .models import DispatchedEvent, LogEntry, OutgoingHttpRequest, RenderedView
from .storage import Storage


@dataclass
class RouteDetails:
    route: Optional[str] = None
    route_name: Optional[str] = None
    uri: Optional[str] = None
    method: Optional[str] = None
    controller: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _level_rank(level: str) -> int:
    try:
        return LOG_LEVELS.index(level)
    except ValueError:
        return -1


def get_logs(storage: Storage, request_id: str, level: Optional[str] = None) -> List[LogEntry]:
    """Log entries of a request, optionally at or above a minimum level.

    Ordering is ``debug < info < warning < error``. With a minimum level,
    entries whose level is outside that set are dropped.
    """
    request = storage.find(request_id)
    if request is None or not request.log:
        return []

    logs = list(request.log)
    if level:
        minimum = max(_level_rank(level), 0)
        logs = [entry for entry in logs if _level_rank(entry.level) >= minimum]
    return logs


def get_events(storage: Storage, request_id: str) -> List[DispatchedEvent]:
    request = storage.find(request_id)
    if request is None or not request.events:
        return []
    return list(request.events)


def get_views(storage: Storage, request_id: str) -> List[RenderedView]:
    # Clockwork stores rendered views under either "views" or "viewsData"
    request = storage.find(request_id)
    if request is None:
        return []
    views = request.views if request.views is not None else request.views_data
    return list(views or [])


def get_http_requests(storage: Storage, request_id: str) -> List[OutgoingHttpRequest]:
    request = storage.find(request_id)
    if request is None or not request.http_requests:
        return []
    return list(request.http_requests)


def get_auth_user(storage: Storage, request_id: str) -> Optional[Dict[str, Any]]:
    request = storage.find(request_id)
    if request is None or not request.authenticated_user:
        return None
    return dict(request.authenticated_user)


def get_session_data(
    storage: Storage, request_id: str, keys: Optional[Sequence[str]] = None
) -> Dict[str, Any]:
    """Session data, restricted to ``keys`` when given (unknown keys are skipped)."""
    request = storage.find(request_id)
    if request is None or not request.session_data:
        return {}

    session = request.session_data
    if keys:
        return {key: session[key] for key in keys if key in session}
    return dict(session)


def get_middleware_chain(storage: Storage, request_id: str) -> List[str]:
    request = storage.find(request_id)
    if request is None or not request.middleware:
        return []
    return list(request.middleware)


def get_route_details(storage: Storage, request_id: str) -> RouteDetails:
    request = storage.find(request_id)
    if request is None:
        return RouteDetails()
    return RouteDetails(
        route=request.route,
        route_name=request.route_name,
        uri=request.uri,
        method=request.method,
        controller=request.controller,
    )
